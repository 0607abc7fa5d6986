"""HGT adapter for TileRepository.

Loads one-degree elevation tiles stored as raw ``.hgt`` files (big-endian
signed 16-bit samples, row-major from the north-west corner) and returns
domain ElevationGrid Value Objects.

Lifecycle (one load per call, nothing cached):
1) Derive tile id from the coordinate (floor-based origin)
2) Build ``<data_dir>/<TILE_ID><extension>`` and check it is a regular file
3) Pre-flight size check against ``square_size² * 2``
4) Read bytes and decode into an ElevationGrid
"""

from __future__ import annotations

import logging
from pathlib import Path

from domain.terrain.errors import TileFormatError, TileNotFoundError, TileReadError
from domain.terrain.tile_codec import (
    DEFAULT_TILE_EXTENSION,
    TILE_ID_LENGTH,
    decode_tile_id,
    encode_tile_id,
    tile_filename,
)
from domain.terrain.value_objects import (
    SQUARE_SIZE,
    ElevationGrid,
    expected_tile_bytes,
)

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)


class HgtTileRepository:
    """Infrastructure adapter for loading elevation tiles from a directory.

    Parameters
    ----------
    data_dir: Path | str
        Directory holding one file per tile, named by tile id.
    square_size: int
        Side length of every tile (3601 for 1", 1201 for 3").
    extension: str
        File extension including the dot.
    """

    def __init__(
        self,
        data_dir: Path | str,
        square_size: int = SQUARE_SIZE,
        extension: str = DEFAULT_TILE_EXTENSION,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.square_size = square_size
        self.extension = extension

    def tile_path(self, tile_id: str) -> Path:
        """Storage path for ``tile_id``. Raises TileFormatError if malformed."""
        return self.data_dir / tile_filename(tile_id, self.extension)

    def resolve(self, latitude: float, longitude: float) -> ElevationGrid:
        """Load the grid whose cell contains the coordinate."""
        return self.load_grid(encode_tile_id(latitude, longitude))

    def load_grid(self, tile_id: str) -> ElevationGrid:
        """Read and decode the tile stored under ``tile_id``.

        Raises:
            TileFormatError: Malformed tile id or wrong file size
            TileNotFoundError: No regular file for the tile
            TileReadError: File exists but cannot be read
        """
        path = self.tile_path(tile_id)

        expected = expected_tile_bytes(self.square_size)
        try:
            # Directories are treated like a missing tile
            if not path.is_file():
                raise TileNotFoundError(tile_id)
            size = path.stat().st_size
            if size != expected:
                raise TileFormatError(
                    f"Tile {tile_id}: expected {expected} bytes, got {size}"
                )
            raw = path.read_bytes()
        except FileNotFoundError as e:
            # Removed between the is_file() check and the read
            raise TileNotFoundError(tile_id) from e
        except OSError as e:
            # Log only filename, errno, and strerror to avoid leaking absolute paths
            logger.error(
                "Failed to read %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise TileReadError(f"Cannot read tile {tile_id}") from e

        grid = ElevationGrid.from_bytes(tile_id, raw, self.square_size)
        logger.debug(
            "Tile %s: Loaded %dx%d grid", path.name, self.square_size, self.square_size
        )
        return grid

    def available_tiles(self) -> list[str]:
        """Sorted tile ids with a file in ``data_dir`` (unreadable names skipped)."""
        if not self.data_dir.is_dir():
            return []

        tile_ids: list[str] = []
        suffix = self.extension.lower()
        for entry in self.data_dir.iterdir():
            name = entry.name
            if not entry.is_file() or not name.lower().endswith(suffix):
                continue
            stem = name[: len(name) - len(self.extension)]
            if len(stem) != TILE_ID_LENGTH:
                continue
            try:
                decode_tile_id(stem)
            except TileFormatError:
                logger.debug("Skipping non-tile file %s", entry.name)
                continue
            tile_ids.append(stem.upper())
        return sorted(tile_ids)
