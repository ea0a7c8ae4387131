"""Geo Bounded Context - Domain Services.

Pure domain logic over Coordinates and GeoBounds.
NO I/O operations - KML loading is implemented by the infrastructure adapter
under `src/infrastructure/geo/kml_adapter.py` via the BoundsRepository port.

Two distance models live here:
- spherical (mean Earth radius), for bearings, destinations and view framing
- geodesic (WGS84 ellipsoid via pyproj), for metre-accurate distances
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from pyproj import Geod

from domain.geo.maths import (
    EARTH_MEAN_RADIUS_KM,
    EARTH_MEAN_RADIUS_MILES,
    fix_longitude,
)
from domain.geo.value_objects import BoundsView, Coordinate, GeoBounds, UnitSystem

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_ASPECT_RATIO = 1.0
DEFAULT_RANGE_M = 1000.0  # Range used when the bounds have no extent
DEFAULT_SCALE_RANGE = 1.5  # Padding factor applied to the computed range

# WGS84 ellipsoid for geodesic calculations (same as GPS, EPSG:4326)
_geod = Geod(ellps="WGS84")


def _earth_radius(units: UnitSystem) -> float:
    if units is UnitSystem.METRIC:
        return EARTH_MEAN_RADIUS_KM
    return EARTH_MEAN_RADIUS_MILES


# ---------------------------------------------------------------------------
# Spherical Distance
# ---------------------------------------------------------------------------
def distance_cosine(
    origin: Coordinate, destination: Coordinate, units: UnitSystem = UnitSystem.METRIC
) -> float:
    """Great-circle distance using the spherical law of cosines.

    Fast, but loses precision for points a few metres apart.
    """
    phi1 = math.radians(origin.latitude)
    phi2 = math.radians(destination.latitude)
    delta_lambda = math.radians(destination.longitude - origin.longitude)
    cos_d = math.sin(phi1) * math.sin(phi2) + math.cos(phi1) * math.cos(
        phi2
    ) * math.cos(delta_lambda)
    # Rounding can push cos_d a hair outside [-1, 1]
    d = math.acos(max(-1.0, min(1.0, cos_d)))
    return d * _earth_radius(units)


def distance_haversine(
    origin: Coordinate, destination: Coordinate, units: UnitSystem = UnitSystem.METRIC
) -> float:
    """Great-circle distance using the haversine formula."""
    phi1 = math.radians(origin.latitude)
    phi2 = math.radians(destination.latitude)
    delta_phi = math.radians(destination.latitude - origin.latitude)
    delta_lambda = math.radians(destination.longitude - origin.longitude)
    h = math.sin(delta_phi / 2) ** 2 + math.sin(delta_lambda / 2) ** 2 * math.cos(
        phi1
    ) * math.cos(phi2)
    d = 2 * math.asin(min(1.0, math.sqrt(h)))
    return d * _earth_radius(units)


def distance(
    origin: Coordinate,
    destination: Coordinate,
    haversine: bool = False,
    units: UnitSystem = UnitSystem.METRIC,
) -> float:
    """Great-circle distance in kilometres (METRIC) or miles (IMPERIAL)."""
    if haversine:
        return distance_haversine(origin, destination, units)
    return distance_cosine(origin, destination, units)


# ---------------------------------------------------------------------------
# Bearings and Destination
# ---------------------------------------------------------------------------
def bearing_initial(start: Coordinate, destination: Coordinate) -> float:
    """Initial great-circle bearing from ``start`` in degrees, [0, 360)."""
    phi1 = math.radians(start.latitude)
    phi2 = math.radians(destination.latitude)
    delta_lambda = math.radians(destination.longitude - start.longitude)
    y = math.sin(delta_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(
        phi2
    ) * math.cos(delta_lambda)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def bearing_final(start: Coordinate, destination: Coordinate) -> float:
    """Bearing on arrival at ``destination`` in degrees, [0, 360)."""
    return (bearing_initial(destination, start) + 180.0) % 360.0


def destination(
    origin: Coordinate,
    travel_distance: float,
    bearing: float,
    units: UnitSystem = UnitSystem.METRIC,
) -> Coordinate:
    """Point reached travelling ``travel_distance`` along ``bearing`` (degrees).

    Args:
        origin: Starting point
        travel_distance: Kilometres (METRIC) or miles (IMPERIAL)
        bearing: Initial bearing in degrees clockwise from north
        units: Unit system of ``travel_distance``

    Returns:
        Destination coordinate without altitude, longitude wrapped.
    """
    phi1 = math.radians(origin.latitude)
    lambda1 = math.radians(origin.longitude)
    theta = math.radians(bearing)
    delta = travel_distance / _earth_radius(units)

    phi2 = math.asin(
        math.sin(phi1) * math.cos(delta)
        + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    )
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )
    return Coordinate(
        latitude=math.degrees(phi2), longitude=fix_longitude(math.degrees(lambda2))
    )


# ---------------------------------------------------------------------------
# Geodesic Distance (WGS84)
# ---------------------------------------------------------------------------
def geodesic_distance(start: Coordinate, end: Coordinate) -> float:
    """Calculate geodesic distance between two points in meters.

    Uses WGS84 ellipsoid for millimeter-level precision. Altitude is ignored.
    """
    _, _, dist = _geod.inv(start.longitude, start.latitude, end.longitude, end.latitude)
    return float(abs(dist))


def interpolate_geodesic_path(
    start: Coordinate, end: Coordinate, num_intermediate: int
) -> list[Coordinate]:
    """Interpolate points along the WGS84 geodesic.

    Args:
        start: Starting point
        end: Ending point
        num_intermediate: Number of points BETWEEN start and end

    Returns:
        List of all points: [start, ...intermediate..., end]. Intermediate
        points carry no altitude.
    """
    if num_intermediate <= 0:
        return [start, end]

    # npts returns intermediate points (excludes endpoints)
    intermediate = _geod.npts(
        start.longitude, start.latitude, end.longitude, end.latitude, num_intermediate
    )

    result = [start]
    for lon, lat in intermediate:
        result.append(Coordinate(latitude=lat, longitude=lon))
    result.append(end)

    return result


# ---------------------------------------------------------------------------
# Bounds Construction
# ---------------------------------------------------------------------------
def bounds_of(coordinates: Iterable[Coordinate]) -> GeoBounds:
    """Grow a box point by point, starting from the empty box.

    Order matters near the antimeridian: each step picks the side giving
    the smaller longitudinal span for the box built so far.
    """
    bounds = GeoBounds()
    for coordinate in coordinates:
        bounds = bounds.extend(coordinate)
    return bounds


# ---------------------------------------------------------------------------
# View Framing
# ---------------------------------------------------------------------------
def bounds_view(
    bounds: GeoBounds,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    default_range_m: float = DEFAULT_RANGE_M,
    scale_range: float = DEFAULT_SCALE_RANGE,
) -> BoundsView:
    """Compute a camera view that frames ``bounds``.

    Looks at the box center from a range derived from the larger of the
    east-west and north-south extents, using the look-at distance formula
    from the Earth API utility library. Boxes with no lat/lon extent use
    ``default_range_m``.

    Args:
        bounds: Box to frame
        aspect_ratio: Viewport width / height; clamped to at most 1
        default_range_m: Range for a point-like box
        scale_range: Padding factor applied to the computed range

    Returns:
        BoundsView at the box center and top altitude.

    Example:
        >>> box = GeoBounds.from_arrays([30, -110], [40, -100])
        >>> view = bounds_view(box)
        >>> round(view.latitude), round(view.longitude)
        (35, -105)
    """
    center = bounds.center()
    extent = bounds.span()
    look_at_range = default_range_m

    if extent.latitude or extent.longitude:
        radius_m = EARTH_MEAN_RADIUS_KM * 1000.0
        dist_ew = 1000.0 * distance(
            Coordinate(latitude=center.latitude, longitude=bounds.east),
            Coordinate(latitude=center.latitude, longitude=bounds.west),
        )
        dist_ns = 1000.0 * distance(
            Coordinate(latitude=bounds.north, longitude=center.longitude),
            Coordinate(latitude=bounds.south, longitude=center.longitude),
        )
        box_ratio = dist_ew / dist_ns if dist_ns else math.inf
        aspect_ratio = min(max(aspect_ratio, box_ratio), 1.0)

        alpha = math.radians(45.0 / (aspect_ratio + 0.4) - 2.0)
        expand_to_distance = max(dist_ns, dist_ew)
        beta = min(math.pi / 2, alpha + expand_to_distance / (2 * radius_m))
        look_at_range = max(
            0.0,
            scale_range
            * radius_m
            * (math.sin(beta) * math.sqrt(1 + 1 / math.tan(alpha) ** 2) - 1),
        )

    return BoundsView(
        latitude=center.latitude,
        longitude=center.longitude,
        altitude=bounds.top,
        range_m=look_at_range,
    )
