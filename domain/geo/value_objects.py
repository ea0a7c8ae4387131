"""Geo Bounded Context - Value Objects.

Immutable data structures representing geographic concepts.
All validation occurs at construction time via Pydantic.

GeoBounds is a persistent value: ``extend`` returns a new box, it never
mutates the receiver.

Preconditions (not checked): latitude, longitude and altitude are finite.
NaN or infinite components give unspecified results.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.geo.errors import InvalidBoundsError, InvalidCoordinateError
from domain.geo.maths import fix_latitude, fix_longitude, longitudinal_span


def format_number(value: float) -> str:
    """Render a float positionally, locale-independent.

    Shortest round-trip digits, no exponent, no grouping, trailing ``.0``
    trimmed (10.0 -> "10", 1e-05 -> "0.00001").
    """
    # -0.0 renders as "0"
    return np.format_float_positional(value + 0.0, trim="-")


# ---------------------------------------------------------------------------
# UnitSystem
# ---------------------------------------------------------------------------
class UnitSystem(str, Enum):
    """Distance units for spherical calculations."""

    METRIC = "metric"  # kilometres
    IMPERIAL = "imperial"  # miles


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------
class Coordinate(BaseModel):
    """Geographic coordinate: latitude, longitude, altitude (Value Object).

    Invariants:
        CO-1: latitude in [-90, 90] (input is clamped)
        CO-2: longitude in [-180, 180] (input wraps: 190 -> -170)
        CO-3: altitude in meters, 0 means "no altitude"

    Equality and hashing compare all three components (Pydantic frozen
    models compare by value).
    """

    latitude: float = 0.0
    longitude: float = 0.0
    altitude: float = 0.0

    model_config = ConfigDict(frozen=True)

    @field_validator("latitude")
    @classmethod
    def _fix_latitude(cls, value: float) -> float:
        return fix_latitude(value)

    @field_validator("longitude")
    @classmethod
    def _fix_longitude(cls, value: float) -> float:
        return fix_longitude(value)

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Coordinate":
        """Build from ``[latitude, longitude]`` or ``[latitude, longitude, altitude]``.

        Raises:
            InvalidCoordinateError: If ``values`` has another length
        """
        if len(values) not in (2, 3):
            raise InvalidCoordinateError(
                f"Coordinate sequence must have 2 or 3 elements, got {len(values)}"
            )
        altitude = float(values[2]) if len(values) == 3 else 0.0
        return cls(
            latitude=float(values[0]), longitude=float(values[1]), altitude=altitude
        )

    @property
    def is_3d(self) -> bool:
        """True if the coordinate carries a non-zero altitude."""
        return self.altitude != 0

    def equals_2d(self, other: "Coordinate") -> bool:
        """Compare latitude and longitude only."""
        return self.latitude == other.latitude and self.longitude == other.longitude

    def flatten(self) -> "Coordinate":
        """Return a copy with the altitude dropped."""
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    def __str__(self) -> str:
        return (
            f"({format_number(self.latitude)}, {format_number(self.longitude)}, "
            f"{format_number(self.altitude)})"
        )


# ---------------------------------------------------------------------------
# GeoBounds
# ---------------------------------------------------------------------------
class GeoBounds(BaseModel):
    """Axis-aligned lat/lon/alt box on the sphere (Value Object).

    Defined by its southwest and northeast corners. A box whose west
    longitude is greater than its east longitude crosses the antimeridian;
    longitude ordering is therefore never validated.

    Invariants:
        GB-1: southwest.latitude <= northeast.latitude
        GB-2: southwest.altitude <= northeast.altitude
        GB-3: empty <=> southwest is (0, 0) and southwest == northeast

    A degenerate box built at exactly (0, 0, 0) is indistinguishable from
    the empty box and reports empty-box values for every derived quantity.
    """

    southwest: Coordinate = Field(default_factory=Coordinate)
    northeast: Coordinate = Field(default_factory=Coordinate)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_corners(self) -> "GeoBounds":
        if self.southwest.latitude > self.northeast.latitude:
            raise InvalidBoundsError(
                self.southwest,
                self.northeast,
                "southwest coordinate cannot be north of the northeast coordinate",
            )
        if self.southwest.altitude > self.northeast.altitude:
            raise InvalidBoundsError(
                self.southwest,
                self.northeast,
                "southwest coordinate cannot be above the northeast coordinate",
            )
        return self

    # -----------------------------------------------------------------------
    # Alternate constructors
    # -----------------------------------------------------------------------
    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "GeoBounds":
        """Degenerate box with both corners at ``coordinate``."""
        return cls(southwest=coordinate, northeast=coordinate)

    @classmethod
    def from_bounds(cls, bounds: "GeoBounds") -> "GeoBounds":
        return cls(southwest=bounds.southwest, northeast=bounds.northeast)

    @classmethod
    def from_arrays(
        cls, southwest: Sequence[float], northeast: Sequence[float]
    ) -> "GeoBounds":
        """Build from two ``[lat, lng(, alt)]`` sequences.

        Raises:
            InvalidCoordinateError: If either sequence has the wrong length
            InvalidBoundsError: If the corners are out of order
        """
        return cls(
            southwest=Coordinate.from_sequence(southwest),
            northeast=Coordinate.from_sequence(northeast),
        )

    # -----------------------------------------------------------------------
    # Derived quantities
    # -----------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        sw = self.southwest
        return sw.latitude == 0 and sw.longitude == 0 and sw == self.northeast

    @property
    def north(self) -> float:
        return 0.0 if self.is_empty else self.northeast.latitude

    @property
    def south(self) -> float:
        return 0.0 if self.is_empty else self.southwest.latitude

    @property
    def east(self) -> float:
        return 0.0 if self.is_empty else self.northeast.longitude

    @property
    def west(self) -> float:
        return 0.0 if self.is_empty else self.southwest.longitude

    @property
    def top(self) -> float:
        return 0.0 if self.is_empty else self.northeast.altitude

    @property
    def bottom(self) -> float:
        return 0.0 if self.is_empty else self.southwest.altitude

    @property
    def is_3d(self) -> bool:
        """True if non-empty and either corner carries an altitude."""
        return not self.is_empty and (self.southwest.is_3d or self.northeast.is_3d)

    @property
    def is_full_latitude(self) -> bool:
        return self.south == -90 and self.north == 90

    @property
    def is_full_longitude(self) -> bool:
        return self.west == -180 and self.east == 180

    @property
    def crosses_antimeridian(self) -> bool:
        return self.southwest.longitude > self.northeast.longitude

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------
    def contains_longitude(self, longitude: float) -> bool:
        """Check longitude containment, honoring antimeridian crossing."""
        if self.crosses_antimeridian:
            return longitude <= self.east or longitude >= self.west
        return self.west <= longitude <= self.east

    def contains_coordinate(self, coordinate: Coordinate) -> bool:
        """Check if ``coordinate`` lies inside the box (inclusive).

        Altitude is only checked when the box is 3D.
        """
        if not (self.south <= coordinate.latitude <= self.north):
            return False
        if self.is_3d and not (self.bottom <= coordinate.altitude <= self.top):
            return False
        return self.contains_longitude(coordinate.longitude)

    def center(self) -> Coordinate:
        """Geometric center; the zero coordinate for an empty box."""
        if self.is_empty:
            return Coordinate()
        sw, ne = self.southwest, self.northeast
        if self.crosses_antimeridian:
            longitude = fix_longitude(
                sw.longitude + longitudinal_span(sw.longitude, ne.longitude) / 2
            )
        else:
            longitude = (sw.longitude + ne.longitude) / 2
        return Coordinate(
            latitude=(sw.latitude + ne.latitude) / 2,
            longitude=longitude,
            altitude=(sw.altitude + ne.altitude) / 2,
        )

    def span(self) -> Coordinate:
        """Extent along each axis; the zero coordinate for an empty box.

        The result is a delta, not a position: it is built without the
        latitude clamp and longitude wrap (latitude span may reach 180,
        longitude span may exceed 180).
        """
        if self.is_empty:
            return Coordinate()
        sw, ne = self.southwest, self.northeast
        return Coordinate.model_construct(
            latitude=float(ne.latitude - sw.latitude),
            longitude=float(longitudinal_span(sw.longitude, ne.longitude)),
            altitude=float(ne.altitude - sw.altitude) if self.is_3d else 0.0,
        )

    # -----------------------------------------------------------------------
    # Growth
    # -----------------------------------------------------------------------
    def extend(self, coordinate: Coordinate) -> "GeoBounds":
        """Return the smallest box containing this box and ``coordinate``.

        Returns ``self`` if the coordinate is already contained. When the
        longitude lies outside the box, the side (east or west) giving the
        smaller longitudinal span is moved; ties move east.
        """
        if self.contains_coordinate(coordinate):
            return self
        if self.is_empty:
            return GeoBounds.from_coordinate(coordinate)

        new_bottom, new_top = self.bottom, self.top
        if self.is_3d:
            new_bottom = min(new_bottom, coordinate.altitude)
            new_top = max(new_top, coordinate.altitude)

        new_south = min(self.south, coordinate.latitude)
        new_north = max(self.north, coordinate.latitude)

        new_west, new_east = self.west, self.east
        if not self.contains_longitude(coordinate.longitude):
            extend_east_span = longitudinal_span(new_west, coordinate.longitude)
            extend_west_span = longitudinal_span(coordinate.longitude, new_east)
            if extend_east_span <= extend_west_span:
                new_east = coordinate.longitude
            else:
                new_west = coordinate.longitude

        return GeoBounds(
            southwest=Coordinate(
                latitude=new_south, longitude=new_west, altitude=new_bottom
            ),
            northeast=Coordinate(
                latitude=new_north, longitude=new_east, altitude=new_top
            ),
        )

    def __str__(self) -> str:
        return f"[{self.northeast}, {self.southwest}]"


# ---------------------------------------------------------------------------
# BoundsView
# ---------------------------------------------------------------------------
class BoundsView(BaseModel):
    """Camera "look at" framing a GeoBounds (Value Object).

    The caller applies it to a globe view: look at (latitude, longitude,
    altitude) from ``range_m`` meters away, no tilt or heading.
    """

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    altitude: float = 0.0
    range_m: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)
