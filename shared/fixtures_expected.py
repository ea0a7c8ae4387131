"""Single source of truth for expected KML test fixtures.

This module defines the list of expected fixture filenames used by both:
- scripts/gen_fixtures.py (generation verification)
- tests/kml/test_fixtures_sanity.py (existence verification)

Location: shared/ (not tests/) to avoid scripts->tests dependency.

When adding/removing fixtures, update ONLY this list.
"""

from __future__ import annotations

# Sorted alphabetically for deterministic comparison.
EXPECTED_FIXTURES: list[str] = sorted(
    [
        "empty_document.kml",  # TC-105: Document without geometry
        "ground_overlay.kml",  # TC-103: LatLonBox corners
        "linestring_antimeridian.kml",  # TC-102: Path crossing the date line
        "malformed.kml",  # TC-108: XML syntax error
        "model_3d.kml",  # TC-104: Model + Point with altitude
        "placemark_point.kml",  # TC-101: Single point
    ]
)

# Count derived from list for verification
EXPECTED_FIXTURE_COUNT: int = len(EXPECTED_FIXTURES)
