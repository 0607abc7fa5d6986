"""Terrain Bounded Context - Error Hierarchy.

Custom exceptions for tile loading, point lookup and profile sampling.
"""

from __future__ import annotations

from typing import Any


class TerrainError(Exception):
    """Base error for terrain operations."""


# ---------------------------------------------------------------------------
# Tile Errors
# ---------------------------------------------------------------------------
class TileFormatError(TerrainError):
    """Malformed tile identifier or raster buffer of the wrong length."""


class TileNotFoundError(TerrainError):
    """No tile file exists for the requested tile identifier.

    Attributes:
        tile_id: The identifier that could not be resolved
    """

    def __init__(self, tile_id: str) -> None:
        self.tile_id = tile_id
        super().__init__(f"No elevation tile for {tile_id}")


class TileReadError(TerrainError):
    """Tile file exists but could not be read from storage."""


class PointOutOfBoundsError(TerrainError):
    """Point is outside the one-degree cell covered by a grid.

    Attributes:
        latitude: Latitude of the offending point
        longitude: Longitude of the offending point
        tile_id: Identifier of the grid that was queried
    """

    def __init__(self, latitude: float, longitude: float, tile_id: str) -> None:
        self.latitude = latitude
        self.longitude = longitude
        self.tile_id = tile_id
        super().__init__(
            f"Point ({latitude:.6f}, {longitude:.6f}) is out of bounds "
            f"for tile {tile_id}"
        )


# ---------------------------------------------------------------------------
# Profile Errors
# ---------------------------------------------------------------------------
class InvalidProfileError(TerrainError):
    """Profile parameters are invalid."""


class SampleLimitExceededError(InvalidProfileError):
    """Profile would generate more samples than allowed per request."""

    def __init__(self, requested: float, limit: int) -> None:
        self.requested = requested
        self.limit = limit
        super().__init__(f"Profile requires {requested} samples, limit is {limit}")


class InvalidRequestError(TerrainError):
    """Request payload failed validation before any sampling started.

    Attributes:
        errors: Structured validation errors (pydantic ``errors()`` format)
    """

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        super().__init__(f"Invalid request: {len(errors)} validation error(s)")
