"""Domain Port(s) for Geo I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .value_objects import GeoBounds


class BoundsRepository(Protocol):
    """Port for obtaining bounds of geographic documents.

    Implementations live in infrastructure (e.g., KML adapter).
    """

    def load_bounds(self, file_path: Path | str) -> GeoBounds:
        """Load a document and return the GeoBounds of all its coordinates."""
        ...
