"""Tests for KmlBoundsAdapter.

Fixture-backed tests cover each geometry kind the adapter walks; error
cases use small documents written to tmp_path.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from domain.geo.errors import InvalidKmlError
from domain.geo.repositories import BoundsRepository
from domain.geo.value_objects import Coordinate, GeoBounds
from infrastructure.geo.kml_adapter import KmlBoundsAdapter

ADAPTER_LOGGER = "infrastructure.geo.kml_adapter"


def coord(latitude: float, longitude: float, altitude: float = 0.0) -> Coordinate:
    return Coordinate(latitude=latitude, longitude=longitude, altitude=altitude)


# ===========================================================================
# TC-101..105: Geometry kinds
# ===========================================================================
def test_single_point(adapter: KmlBoundsAdapter, fixtures_dir: Path):
    """TC-101: One Point gives a degenerate 2D box."""
    bounds = adapter.load_bounds(fixtures_dir / "placemark_point.kml")

    assert bounds == GeoBounds.from_coordinate(coord(55.9533, -3.1883))
    assert bounds.is_empty is False
    assert bounds.is_3d is False


def test_linestring_across_antimeridian(adapter: KmlBoundsAdapter, fixtures_dir: Path):
    """TC-102: Path over the date line yields a crossing box 10 degrees wide."""
    bounds = adapter.load_bounds(fixtures_dir / "linestring_antimeridian.kml")

    assert bounds.crosses_antimeridian is True
    assert bounds.southwest == coord(10, 175)
    assert bounds.northeast == coord(15, -175)
    assert bounds.span().longitude == 10


def test_ground_overlay_corners(adapter: KmlBoundsAdapter, fixtures_dir: Path):
    """TC-103: LatLonBox corners define the box."""
    bounds = adapter.load_bounds(fixtures_dir / "ground_overlay.kml")

    assert bounds == GeoBounds(southwest=coord(30, -110), northeast=coord(40, -100))


def test_model_and_point_altitudes(adapter: KmlBoundsAdapter, fixtures_dir: Path):
    """TC-104: Model location and Point altitudes give a 3D box."""
    bounds = adapter.load_bounds(fixtures_dir / "model_3d.kml")

    assert bounds.is_3d is True
    assert bounds.southwest == coord(45, 7, 100)
    assert bounds.northeast == coord(46, 8, 250)


def test_document_without_geometry_is_empty(
    adapter: KmlBoundsAdapter, fixtures_dir: Path, caplog: pytest.LogCaptureFixture
):
    """TC-105: No geometry -> empty bounds, logged at INFO."""
    with caplog.at_level(logging.INFO, logger=ADAPTER_LOGGER):
        bounds = adapter.load_bounds(fixtures_dir / "empty_document.kml")

    assert bounds.is_empty is True
    assert "no coordinates found" in caplog.text


def test_adapter_satisfies_port(fixtures_dir: Path):
    """TC-106: KmlBoundsAdapter is usable wherever a BoundsRepository is expected."""
    repository: BoundsRepository = KmlBoundsAdapter()

    assert repository.load_bounds(str(fixtures_dir / "placemark_point.kml")).north == 55.9533


# ===========================================================================
# TC-107: Document walking rules
# ===========================================================================
def test_polygon_rings_and_multigeometry(adapter: KmlBoundsAdapter, write_kml):
    """TC-107: Rings nested in Polygon/MultiGeometry are all visited."""
    path = write_kml(
        """
        <Placemark>
          <MultiGeometry>
            <Polygon>
              <outerBoundaryIs><LinearRing>
                <coordinates>0,1 2,1 2,3 0,3 0,1</coordinates>
              </LinearRing></outerBoundaryIs>
            </Polygon>
            <Point><coordinates>5,-4</coordinates></Point>
          </MultiGeometry>
        </Placemark>
        """
    )

    bounds = adapter.load_bounds(path)

    assert bounds == GeoBounds(southwest=coord(-4, 0), northeast=coord(3, 5))


def test_extension_elements_are_not_walked(adapter: KmlBoundsAdapter, write_kml):
    """TC-107b: gx:LatLonQuad overlays contribute nothing."""
    path = write_kml(
        """
        <GroundOverlay>
          <gx:LatLonQuad>
            <coordinates>10,10 20,10 20,20 10,20</coordinates>
          </gx:LatLonQuad>
        </GroundOverlay>
        """
    )

    assert adapter.load_bounds(path).is_empty is True


def test_kml_without_namespace(adapter: KmlBoundsAdapter, tmp_path: Path):
    """TC-107c: Documents without a default namespace are accepted."""
    path = tmp_path / "plain.kml"
    path.write_text(
        "<kml><Placemark><Point><coordinates>10,20</coordinates></Point>"
        "</Placemark></kml>",
        encoding="utf-8",
    )

    assert adapter.load_bounds(path) == GeoBounds.from_coordinate(coord(20, 10))


def test_invalid_coordinate_tuples_are_skipped(
    adapter: KmlBoundsAdapter, write_kml, caplog: pytest.LogCaptureFixture
):
    """TC-107d: Bad tuples are logged and skipped, good ones kept."""
    path = write_kml(
        """
        <Placemark><LineString>
          <coordinates>1,2 abc,def 3,4 5</coordinates>
        </LineString></Placemark>
        """,
        name="bad_tuples.kml",
    )

    with caplog.at_level(logging.WARNING, logger=ADAPTER_LOGGER):
        bounds = adapter.load_bounds(path)

    assert bounds == GeoBounds(southwest=coord(2, 1), northeast=coord(4, 3))
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert all("bad_tuples.kml" in r.getMessage() for r in warnings)


def test_invalid_ground_overlay_is_skipped(
    adapter: KmlBoundsAdapter, write_kml, caplog: pytest.LogCaptureFixture
):
    """TC-107e: Non-numeric LatLonBox values drop the overlay only."""
    path = write_kml(
        """
        <Document>
          <GroundOverlay>
            <LatLonBox><north>north-ish</north><south>0</south>
              <east>1</east><west>0</west></LatLonBox>
          </GroundOverlay>
          <Placemark><Point><coordinates>7,8</coordinates></Point></Placemark>
        </Document>
        """
    )

    with caplog.at_level(logging.WARNING, logger=ADAPTER_LOGGER):
        bounds = adapter.load_bounds(path)

    assert bounds == GeoBounds.from_coordinate(coord(8, 7))
    assert "Skipping invalid GroundOverlay" in caplog.text


def test_non_finite_coordinate_tuples_are_skipped(
    adapter: KmlBoundsAdapter, write_kml, caplog: pytest.LogCaptureFixture
):
    """TC-107f: nan/inf tuples are skipped instead of corrupting the box."""
    path = write_kml(
        """
        <Placemark><LineString>
          <coordinates>1,2 nan,5 3,4 inf,6</coordinates>
        </LineString></Placemark>
        """
    )

    with caplog.at_level(logging.WARNING, logger=ADAPTER_LOGGER):
        bounds = adapter.load_bounds(path)

    assert bounds == GeoBounds(southwest=coord(2, 1), northeast=coord(4, 3))
    assert bounds.crosses_antimeridian is False
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert all("non-finite" in r.getMessage() for r in warnings)


def test_non_finite_overlay_and_model_are_skipped(
    adapter: KmlBoundsAdapter, write_kml, caplog: pytest.LogCaptureFixture
):
    """TC-107g: nan/inf in LatLonBox or Model Location drop that element."""
    path = write_kml(
        """
        <Document>
          <GroundOverlay>
            <LatLonBox><north>inf</north><south>0</south>
              <east>1</east><west>0</west></LatLonBox>
          </GroundOverlay>
          <Placemark>
            <Model><Location>
              <longitude>nan</longitude><latitude>5</latitude>
              <altitude>10</altitude>
            </Location></Model>
          </Placemark>
          <Placemark><Point><coordinates>7,8</coordinates></Point></Placemark>
        </Document>
        """
    )

    with caplog.at_level(logging.WARNING, logger=ADAPTER_LOGGER):
        bounds = adapter.load_bounds(path)

    assert bounds == GeoBounds.from_coordinate(coord(8, 7))
    assert "Skipping invalid GroundOverlay" in caplog.text
    assert "Skipping invalid Model location" in caplog.text


# ===========================================================================
# TC-108..112: Preconditions and errors
# ===========================================================================
def test_malformed_xml_raises(adapter: KmlBoundsAdapter, fixtures_dir: Path):
    """TC-108: XML syntax error -> InvalidKmlError."""
    with pytest.raises(InvalidKmlError, match="Malformed KML"):
        adapter.load_bounds(fixtures_dir / "malformed.kml")


def test_missing_file_raises(adapter: KmlBoundsAdapter, tmp_path: Path):
    """TC-109: Missing file -> FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        adapter.load_bounds(tmp_path / "nope.kml")


def test_wrong_extension_raises(adapter: KmlBoundsAdapter, tmp_path: Path):
    """TC-110: Non-.kml file -> InvalidKmlError."""
    path = tmp_path / "doc.txt"
    path.write_text("<kml/>", encoding="utf-8")

    with pytest.raises(InvalidKmlError, match="Unsupported file extension"):
        adapter.load_bounds(path)


def test_empty_file_raises(adapter: KmlBoundsAdapter, tmp_path: Path):
    """TC-111: Zero-byte file -> InvalidKmlError("Empty file")."""
    path = tmp_path / "empty.kml"
    path.touch()

    with pytest.raises(InvalidKmlError, match="Empty file"):
        adapter.load_bounds(path)


def test_size_budget_exceeded_raises(fixtures_dir: Path):
    """TC-112: File larger than max_bytes is rejected before reading."""
    adapter = KmlBoundsAdapter(max_bytes=10)

    with pytest.raises(InvalidKmlError, match="exceeds budget"):
        adapter.load_bounds(fixtures_dir / "placemark_point.kml")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlink_rejected(adapter: KmlBoundsAdapter, fixtures_dir: Path, tmp_path: Path):
    """TC-112b: Symlinks are not followed."""
    link = tmp_path / "link.kml"
    link.symlink_to(fixtures_dir / "placemark_point.kml")

    with pytest.raises(InvalidKmlError, match="Symlinks"):
        adapter.load_bounds(link)
