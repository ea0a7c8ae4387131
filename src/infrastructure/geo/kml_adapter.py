"""KML adapter for BoundsRepository.

Computes the GeoBounds of a KML document by walking its element tree in
document order and extending the bounds by every coordinate found.

Lifecycle:
1) Validate the path (exists, .kml extension, not a symlink, non-empty, budget)
2) Parse with lxml (no entity resolution, no network)
3) Take the KML namespace from the root element (2.1, 2.2 or none)
4) Walk elements: Point / LineString / LinearRing coordinates,
   GroundOverlay LatLonBox corners, Model Location
5) Return the accumulated GeoBounds (empty if the document has no geometry)
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

from lxml import etree

from domain.geo.errors import InvalidKmlError
from domain.geo.value_objects import Coordinate, GeoBounds

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

# Geometries carrying a <coordinates> child of "lon,lat[,alt]" tuples
_COORDINATE_GEOMETRIES = frozenset({"Point", "LineString", "LinearRing"})


class KmlBoundsAdapter:
    """Infrastructure adapter computing bounds from KML files.

    Parameters
    ----------
    max_bytes: int | None
        Optional size budget for the KML file. Larger files are rejected with
        InvalidKmlError before they are read.
    """

    def __init__(self, max_bytes: int | None = None) -> None:
        self.max_bytes = max_bytes

    def load_bounds(self, file_path: Path | str) -> GeoBounds:
        """Load a KML document and return the bounds of all its coordinates.

        Raises:
            FileNotFoundError: If the file does not exist
            InvalidKmlError: If the file is empty, too large, not .kml, or
                not well-formed XML
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(str(path))

        if path.suffix.lower() != ".kml":
            raise InvalidKmlError(f"Unsupported file extension: {path.suffix}")

        try:
            if path.is_symlink():
                raise InvalidKmlError("Symlinks are not permitted")
            st = path.stat()
            if st.st_size == 0:
                raise InvalidKmlError("Empty file")
            if self.max_bytes is not None and st.st_size > self.max_bytes:
                raise InvalidKmlError(
                    f"File size {st.st_size}B exceeds budget {self.max_bytes}B"
                )
            content = path.read_bytes()
        except OSError as e:
            # Log only filename, errno, and strerror to avoid leaking absolute paths
            logger.error(
                "Failed to read %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
        try:
            root = etree.fromstring(content, parser=parser)
        except etree.XMLSyntaxError as e:
            raise InvalidKmlError(f"Malformed KML: {e}") from e

        namespace = etree.QName(root).namespace
        bounds = GeoBounds()
        count = 0

        for element in root.iter(etree.Element):
            qname = etree.QName(element)
            # Extension elements (gx:, atom:) are not walked
            if qname.namespace != namespace:
                continue

            if qname.localname in _COORDINATE_GEOMETRIES:
                coordinates = _parse_coordinates(
                    element.findtext(_tag(namespace, "coordinates"), default=""),
                    path.name,
                )
            elif qname.localname == "GroundOverlay":
                coordinates = _ground_overlay_corners(element, namespace, path.name)
            elif qname.localname == "Model":
                coordinates = _model_location(element, namespace, path.name)
            else:
                continue

            for coordinate in coordinates:
                bounds = bounds.extend(coordinate)
                count += 1

        if bounds.is_empty:
            logger.info("KML %s: no coordinates found", path.name)
        logger.debug("KML %s: %d coordinates, bounds %s", path.name, count, bounds)
        return bounds


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _tag(namespace: str | None, name: str) -> str:
    return f"{{{namespace}}}{name}" if namespace else name


def _finite(text: str) -> float:
    """Parse a KML number, rejecting nan and inf."""
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"non-finite value {text!r}")
    return value


def _parse_coordinates(text: str, source_name: str) -> list[Coordinate]:
    """Parse a KML coordinates string: whitespace-separated lon,lat[,alt]."""
    result: list[Coordinate] = []
    for token in text.split():
        parts = token.split(",")
        try:
            if len(parts) not in (2, 3):
                raise ValueError(f"expected 2 or 3 values, got {len(parts)}")
            altitude = _finite(parts[2]) if len(parts) == 3 else 0.0
            result.append(
                Coordinate(
                    latitude=_finite(parts[1]),
                    longitude=_finite(parts[0]),
                    altitude=altitude,
                )
            )
        except ValueError as exc:
            logger.warning(
                "Skipping invalid coordinate %r in %s: %s", token, source_name, exc
            )
    return result


def _ground_overlay_corners(
    overlay: etree._Element, namespace: str | None, source_name: str
) -> list[Coordinate]:
    """Return the four LatLonBox corners of a GroundOverlay (N/E, N/W, S/E, S/W)."""
    box = overlay.find(_tag(namespace, "LatLonBox"))
    if box is None:
        return []
    try:
        north, south, east, west = (
            _finite(box.findtext(_tag(namespace, side), default="0"))
            for side in ("north", "south", "east", "west")
        )
        altitude = _finite(overlay.findtext(_tag(namespace, "altitude"), default="0"))
    except ValueError as exc:
        logger.warning("Skipping invalid GroundOverlay in %s: %s", source_name, exc)
        return []
    return [
        Coordinate(latitude=north, longitude=east, altitude=altitude),
        Coordinate(latitude=north, longitude=west, altitude=altitude),
        Coordinate(latitude=south, longitude=east, altitude=altitude),
        Coordinate(latitude=south, longitude=west, altitude=altitude),
    ]


def _model_location(
    model: etree._Element, namespace: str | None, source_name: str
) -> list[Coordinate]:
    location = model.find(_tag(namespace, "Location"))
    if location is None:
        return []
    try:
        latitude, longitude, altitude = (
            _finite(location.findtext(_tag(namespace, name), default="0"))
            for name in ("latitude", "longitude", "altitude")
        )
    except ValueError as exc:
        logger.warning("Skipping invalid Model location in %s: %s", source_name, exc)
        return []
    return [Coordinate(latitude=latitude, longitude=longitude, altitude=altitude)]
