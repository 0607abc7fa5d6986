#!/usr/bin/env python3
"""Generate synthetic ``.hgt`` fixture tiles.

Fixtures are minimal synthetic rasters - not real terrain data. Each tile is
``FIXTURE_SQUARE_SIZE²`` big-endian signed 16-bit samples, row 0 at the
northern edge.

Usage:
    python scripts/gen_fixtures.py [--output DIR] [--square-size N]

Requirements:
    pip install numpy

Output:
    tests/fixtures/*.hgt

Dependencies:
    This script imports from shared/fixtures_expected.py (not tests/) to avoid
    circular dependencies between scripts and tests packages.
"""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from shared.fixtures_expected import (
    EXPECTED_FIXTURE_COUNT,
    EXPECTED_FIXTURES,
    FIXTURE_SQUARE_SIZE,
)

# Output directory
FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"

NO_DATA = -9999


# =============================================================================
# Helper: write_hgt
# =============================================================================
def write_hgt(path: Path, data: NDArray[np.int16]) -> None:
    """Write a square int16 array as a raw big-endian tile."""
    if data.ndim != 2 or data.shape[0] != data.shape[1]:
        raise ValueError(f"Data must be a square 2D array, got {data.shape}")
    path.write_bytes(data.astype(">i2").tobytes())


# =============================================================================
# Tiles
# =============================================================================
def gen_n00e000(out_dir: Path, size: int) -> None:
    """Sea-level tile; the four reachable corner cells hold 1, 2, 3, 4.

    The last column is the overlap with the eastern neighbour and is never
    sampled, so the east corners sit in column ``size - 2``.
    """
    data = np.zeros((size, size), dtype=np.int16)
    data[0, 0] = 1  # NW
    data[0, size - 2] = 2  # NE
    data[size - 1, 0] = 3  # SW
    data[size - 1, size - 2] = 4  # SE
    write_hgt(out_dir / "N00E000.hgt", data)
    print("  Created: N00E000.hgt (flat, marked corners)")


def gen_n46e007(out_dir: Path, size: int) -> None:
    """Gradient tile: elevation = 400 + row + 2 * column."""
    rows, cols = np.indices((size, size), dtype=np.int32)
    data = (400 + rows + 2 * cols).astype(np.int16)
    write_hgt(out_dir / "N46E007.hgt", data)
    print("  Created: N46E007.hgt (gradient 400 + row + 2*col)")


def gen_s10w005(out_dir: Path, size: int) -> None:
    """Southern/western tile below sea level with a NoData block.

    - NW 100x100 block: NO_DATA (-9999)
    - elsewhere: -(column % 400) metres
    """
    cols = np.indices((size, size), dtype=np.int32)[1]
    data = (-(cols % 400)).astype(np.int16)
    data[:100, :100] = NO_DATA
    write_hgt(out_dir / "S10W005.hgt", data)
    print("  Created: S10W005.hgt (negative values, NoData block)")


def gen_truncated(out_dir: Path, size: int) -> None:
    """Raster two bytes short of a full tile."""
    (out_dir / "N10E010.hgt").write_bytes(b"\x00" * (size * size * 2 - 2))
    print("  Created: N10E010.hgt (truncated)")


# =============================================================================
# Main
# =============================================================================
def main(argv: list[str] | None = None) -> int:
    """Generate all fixtures.

    Returns:
        0 on success, 1 on failure
    """
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--output", type=Path, default=FIXTURES_DIR)
    parser.add_argument("--square-size", type=int, default=FIXTURE_SQUARE_SIZE)
    args = parser.parse_args(argv)

    out_dir: Path = args.output
    size: int = args.square_size

    print("=" * 60)
    print("Generating .hgt Test Fixtures")
    print("=" * 60)

    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"ERROR: Cannot create fixtures directory: {e}")
        return 1
    print(f"Output directory: {out_dir}\n")

    gen_n00e000(out_dir, size)
    gen_n46e007(out_dir, size)
    gen_s10w005(out_dir, size)
    gen_truncated(out_dir, size)

    # Verify generated fixtures match expected list exactly
    found_set = {f.name for f in out_dir.iterdir() if f.suffix.lower() == ".hgt"}
    expected_set = set(EXPECTED_FIXTURES)

    if found_set != expected_set:
        print("ERROR: Fixture filenames do not match expected list!")
        missing = expected_set - found_set
        extra = found_set - expected_set
        if missing:
            print(f"  Missing (expected but not generated): {sorted(missing)}")
        if extra:
            print(f"  Extra (generated but not expected): {sorted(extra)}")
        print("\nUpdate shared/fixtures_expected.py to match generated fixtures.")
        return 1

    print(f"\nAll {EXPECTED_FIXTURE_COUNT} fixtures generated in {out_dir}.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
