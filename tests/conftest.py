"""Root pytest configuration for all tests.

Provides tile directories populated with small synthetic ``.hgt`` files.
Domain tests that do not need I/O build ElevationGrids directly via
``tests.conftest_utils``.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from domain.terrain.value_objects import NO_DATA
from tests.conftest_utils import SMALL_SIZE, indexed_data, write_hgt_tile


@pytest.fixture
def tile_dir(tmp_path: Path) -> Path:
    """Directory with three 11x11 tiles.

    - N00E000: cell (r, c) = r * 100 + c
    - N00E001: cell (r, c) = 2000 + r * 100 + c
    - S10W005: cell (r, c) = -(r * 100 + c), NW cell is NO_DATA
    """
    directory = tmp_path / "hgt"
    directory.mkdir()

    write_hgt_tile(directory, "N00E000", indexed_data())
    write_hgt_tile(directory, "N00E001", indexed_data(offset=2000))

    southern = -indexed_data()
    southern[0, 0] = NO_DATA
    write_hgt_tile(directory, "S10W005", southern.astype(np.int16))
    return directory


@pytest.fixture
def small_size() -> int:
    return SMALL_SIZE
