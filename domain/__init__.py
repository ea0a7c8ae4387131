"""Geobounds Domain Layer.

This package contains the core business logic organized by bounded contexts:
- geo: Coordinates, antimeridian-aware bounding boxes, spherical calculations
"""

from domain import geo

__all__ = ["geo"]
