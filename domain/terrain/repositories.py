"""Domain Port(s) for Terrain I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from typing import Protocol

from .value_objects import ElevationGrid


class TileRepository(Protocol):
    """Port for obtaining elevation grids from persistent storage.

    Implementations live in infrastructure (e.g., the ``.hgt`` adapter).
    Every call performs an independent load; implementations keep no cache.
    """

    def load_grid(self, tile_id: str) -> ElevationGrid:
        """Load the grid stored under ``tile_id``."""
        ...

    def resolve(self, latitude: float, longitude: float) -> ElevationGrid:
        """Load the grid whose cell contains the coordinate."""
        ...
