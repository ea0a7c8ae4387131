"""Pytest configuration for KML adapter tests.

Fixture files live in tests/fixtures/ and are listed in
shared/fixtures_expected.py. Regenerate them with scripts/gen_fixtures.py.
"""

from pathlib import Path

import pytest

from infrastructure.geo.kml_adapter import KmlBoundsAdapter

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"


def get_fixtures_dir() -> Path:
    """Return path to tests/fixtures/ directory."""
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return get_fixtures_dir()


@pytest.fixture
def adapter() -> KmlBoundsAdapter:
    return KmlBoundsAdapter()


@pytest.fixture
def write_kml(tmp_path: Path):
    """Factory writing a KML 2.2 document body to a temporary .kml file."""

    def _write(body: str, name: str = "doc.kml") -> Path:
        path = tmp_path / name
        path.write_text(
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f'<kml xmlns="{KML_NAMESPACE}" xmlns:gx="http://www.google.com/kml/ext/2.2">\n'
            f"{body}\n"
            "</kml>\n",
            encoding="utf-8",
        )
        return path

    return _write
