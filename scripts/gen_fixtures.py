#!/usr/bin/env python3
"""Generate synthetic KML fixtures for the KML bounds adapter tests.

Fixtures are minimal hand-sized documents - not real survey data.

Usage:
    python scripts/gen_fixtures.py

Requirements:
    pip install lxml

Output:
    tests/fixtures/*.kml

Dependencies:
    This script imports from shared/fixtures_expected.py (not tests/) to avoid
    circular dependencies between scripts and tests packages.
"""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from shared.fixtures_expected import EXPECTED_FIXTURE_COUNT, EXPECTED_FIXTURES

# Output directory
FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"


def ensure_dir() -> None:
    """Ensure fixtures directory exists."""
    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
    print(f"Output directory: {FIXTURES_DIR}")


# =============================================================================
# Helpers
# =============================================================================
def kml(tag: str) -> str:
    return f"{{{KML_NAMESPACE}}}{tag}"


def new_document(name: str) -> tuple[etree._Element, etree._Element]:
    """Return (root, Document) for a fresh KML 2.2 tree."""
    root = etree.Element(kml("kml"), nsmap={None: KML_NAMESPACE})
    document = etree.SubElement(root, kml("Document"))
    etree.SubElement(document, kml("name")).text = name
    return root, document


def add_text(parent: etree._Element, tag: str, text: str) -> etree._Element:
    element = etree.SubElement(parent, kml(tag))
    element.text = text
    return element


def add_placemark(document: etree._Element, name: str) -> etree._Element:
    placemark = etree.SubElement(document, kml("Placemark"))
    add_text(placemark, "name", name)
    return placemark


def write_kml(name: str, root: etree._Element) -> None:
    path = FIXTURES_DIR / name
    path.write_bytes(
        etree.tostring(root, pretty_print=True, xml_declaration=True, encoding="UTF-8")
    )
    print(f"  {name}")


# =============================================================================
# Fixture generators
# =============================================================================
def gen_placemark_point() -> None:
    """TC-101: One Placemark with one Point."""
    root, document = new_document("Single point")
    point = etree.SubElement(add_placemark(document, "Edinburgh"), kml("Point"))
    add_text(point, "coordinates", "-3.1883,55.9533,0")
    write_kml("placemark_point.kml", root)


def gen_linestring_antimeridian() -> None:
    """TC-102: LineString running eastward across the antimeridian."""
    root, document = new_document("Date line crossing")
    line = etree.SubElement(add_placemark(document, "Fiji route"), kml("LineString"))
    add_text(line, "coordinates", "175,10,0 179,12,0 -178,14,0 -175,15,0")
    write_kml("linestring_antimeridian.kml", root)


def gen_ground_overlay() -> None:
    """TC-103: GroundOverlay contributing its LatLonBox corners."""
    root, document = new_document("Overlay")
    overlay = etree.SubElement(document, kml("GroundOverlay"))
    add_text(overlay, "name", "Four Corners")
    box = etree.SubElement(overlay, kml("LatLonBox"))
    add_text(box, "north", "40")
    add_text(box, "south", "30")
    add_text(box, "east", "-100")
    add_text(box, "west", "-110")
    write_kml("ground_overlay.kml", root)


def gen_model_3d() -> None:
    """TC-104: Model location and Point with altitudes (3D bounds)."""
    root, document = new_document("Alpine model")
    model = etree.SubElement(add_placemark(document, "Hut"), kml("Model"))
    location = etree.SubElement(model, kml("Location"))
    add_text(location, "longitude", "7")
    add_text(location, "latitude", "45")
    add_text(location, "altitude", "100")
    point = etree.SubElement(add_placemark(document, "Summit"), kml("Point"))
    add_text(point, "altitudeMode", "absolute")
    add_text(point, "coordinates", "8,46,250")
    write_kml("model_3d.kml", root)


def gen_empty_document() -> None:
    """TC-105: Folder with no geometry at all."""
    root, document = new_document("Nothing here")
    folder = etree.SubElement(document, kml("Folder"))
    add_text(folder, "name", "Empty folder")
    write_kml("empty_document.kml", root)


def gen_malformed() -> None:
    """TC-108: Truncated XML (not well-formed)."""
    path = FIXTURES_DIR / "malformed.kml"
    path.write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<kml xmlns="{KML_NAMESPACE}">\n'
        "  <Document>\n"
        "    <Placemark>\n"
        "      <Point><coordinates>1,2,0</coordinates>\n",
        encoding="utf-8",
    )
    print("  malformed.kml")


def main() -> int:
    ensure_dir()

    gen_empty_document()
    gen_ground_overlay()
    gen_linestring_antimeridian()
    gen_malformed()
    gen_model_3d()
    gen_placemark_point()

    # Verify generated fixtures match expected list exactly
    fixture_files = sorted(
        f.name for f in FIXTURES_DIR.iterdir() if f.is_file() and f.suffix == ".kml"
    )
    found_set = set(fixture_files)
    expected_set = set(EXPECTED_FIXTURES)

    if found_set != expected_set:
        print("ERROR: Fixture filenames do not match expected list!")
        if expected_set - found_set:
            print(f"  Missing: {sorted(expected_set - found_set)}")
        if found_set - expected_set:
            print(f"  Extra: {sorted(found_set - expected_set)}")
        print("\nUpdate shared/fixtures_expected.py to match generated fixtures.")
        return 1

    print(f"\nAll {EXPECTED_FIXTURE_COUNT} fixtures verified successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
