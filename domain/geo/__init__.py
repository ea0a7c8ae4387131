"""Geo Bounded Context.

Responsible for geographic extents on the sphere:
- Value Objects: Coordinate, GeoBounds, BoundsView
- Services: spherical distance/bearing, geodesics, bounds_of, bounds_view
"""
