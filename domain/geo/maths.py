"""Geo Bounded Context - Scalar angle helpers.

Plain float arithmetic on degrees and radians. No value objects here so
both value_objects and services can import it.

Remainders use ``math.fmod`` (truncated, sign follows the dividend) rather
than ``%`` (floored); the wrap rules below depend on it.
"""

from __future__ import annotations

import math

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
EARTH_MEAN_RADIUS_KM = 6371.0
EARTH_MEAN_RADIUS_MILES = 3959.0
MILES_TO_KILOMETRES_RATIO = 0.621371192

MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0


# ---------------------------------------------------------------------------
# Latitude / Longitude normalization
# ---------------------------------------------------------------------------
def fix_latitude(latitude: float) -> float:
    """Clamp latitude to [-90, 90]."""
    return max(MIN_LATITUDE, min(MAX_LATITUDE, latitude))


def fix_longitude(longitude: float) -> float:
    """Wrap longitude into [-180, 180].

    Odd multiples of 180 map to 180 when positive (540 -> 180) and -180 is
    kept as is. Non-finite values are returned unchanged.
    """
    if not math.isfinite(longitude):
        return longitude
    remainder = math.fmod(longitude, 360.0)
    if remainder == 180.0:
        return 180.0
    if remainder < MIN_LONGITUDE:
        return remainder + 360.0
    if remainder > MAX_LONGITUDE:
        return remainder - 360.0
    return remainder


def longitudinal_span(west: float, east: float) -> float:
    """Eastward distance in degrees from ``west`` to ``east``.

    Longitude is circular: when ``west > east`` the arc crosses the
    antimeridian and the result is ``east + 360 - west``. Always >= 0.
    """
    if west > east:
        return east + 360.0 - west
    return east - west


# ---------------------------------------------------------------------------
# Generic wrapping
# ---------------------------------------------------------------------------
def wrap_value(
    value: float, min_value: float, max_value: float, favor_min: bool = False
) -> float:
    """Wrap ``value`` into the range [min_value, max_value].

    ``min_value`` itself is never wrapped to ``max_value``. Any other result
    landing exactly on a boundary returns ``max_value`` unless ``favor_min``.
    """
    if value == min_value:
        return min_value
    width = max_value - min_value
    value = math.fmod(value - min_value, width)
    if value < 0:
        value += width
    value += min_value
    if value == min_value:
        return min_value if favor_min else max_value
    return value


def constrain_value(value: float, min_value: float, max_value: float) -> float:
    """Clamp ``value`` to [min_value, max_value]."""
    return max(min_value, min(max_value, value))


def normalize_angle(radians: float) -> float:
    """Normalize an angle into [0, 2*pi)."""
    radians = math.fmod(radians, 2 * math.pi)
    return radians if radians >= 0 else radians + 2 * math.pi


def reverse_angle(radians: float) -> float:
    """Return the opposite direction of ``radians``, normalized."""
    return normalize_angle(radians + math.pi)


def heading_to_bearing(heading: float) -> float:
    """Convert a signed heading in degrees to a compass bearing."""
    if heading <= 0:
        return 360.0 - math.fmod(-heading, 360.0)
    return math.fmod(heading, 360.0)


# ---------------------------------------------------------------------------
# Unit conversion
# ---------------------------------------------------------------------------
def kilometres_to_miles(kilometres: float) -> float:
    return kilometres * MILES_TO_KILOMETRES_RATIO


def miles_to_kilometres(miles: float) -> float:
    return miles / MILES_TO_KILOMETRES_RATIO
