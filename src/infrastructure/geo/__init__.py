"""Infrastructure adapters for the geo bounded context.

This module provides the infrastructure layer implementations for geo
operations, including computing bounds from KML documents.
"""

from .kml_adapter import KmlBoundsAdapter

__all__ = ["KmlBoundsAdapter"]
