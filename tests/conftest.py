"""Root pytest configuration for all tests.

Provides the small set of boxes most geo tests start from. Domain tests build
value objects directly; no I/O is needed for anything in tests/geo/.
"""

import pytest

from domain.geo.value_objects import Coordinate, GeoBounds


@pytest.fixture
def simple_bounds() -> GeoBounds:
    """2D box lat [10, 20], lon [10, 20]."""
    return GeoBounds(
        southwest=Coordinate(latitude=10.0, longitude=10.0),
        northeast=Coordinate(latitude=20.0, longitude=20.0),
    )


@pytest.fixture
def antimeridian_bounds() -> GeoBounds:
    """2D box lat [-10, 10] spanning 20 degrees across the antimeridian."""
    return GeoBounds(
        southwest=Coordinate(latitude=-10.0, longitude=170.0),
        northeast=Coordinate(latitude=10.0, longitude=-170.0),
    )


@pytest.fixture
def bounds_3d() -> GeoBounds:
    """3D box lat [10, 20], lon [10, 20], altitude [100, 200] m."""
    return GeoBounds(
        southwest=Coordinate(latitude=10.0, longitude=10.0, altitude=100.0),
        northeast=Coordinate(latitude=20.0, longitude=20.0, altitude=200.0),
    )
