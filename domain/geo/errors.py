"""Geo Bounded Context - Error Hierarchy.

Custom exceptions for coordinate, bounds and KML operations.

Errors raised from pydantic model validators derive from ``Exception`` (not
``ValueError``) so they reach the caller unwrapped instead of being folded
into a ``pydantic.ValidationError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.geo.value_objects import Coordinate


class GeoError(Exception):
    """Base error for geo operations."""


class InvalidBoundsError(GeoError):
    """Southwest corner lies north of, or above, the northeast corner.

    Attributes:
        southwest: The offending southwest Coordinate
        northeast: The offending northeast Coordinate
    """

    def __init__(
        self, southwest: "Coordinate", northeast: "Coordinate", reason: str
    ) -> None:
        self.southwest = southwest
        self.northeast = northeast
        super().__init__(f"Invalid bounds {southwest} -> {northeast}: {reason}")


class InvalidCoordinateError(GeoError):
    """Coordinate values cannot be interpreted (wrong arity)."""


class InvalidKmlError(GeoError):
    """File is not a readable KML document, or is too large to read."""
