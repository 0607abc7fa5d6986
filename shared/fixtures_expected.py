"""Single source of truth for expected ``.hgt`` fixture tiles.

This module defines the fixture tiles written by ``scripts/gen_fixtures.py``
and checked by ``tests/gis/test_fixtures_sanity.py``.

Location: shared/ (not tests/) to avoid scripts->tests dependency.
"""

from __future__ import annotations

# Side length used for generated fixtures (3 arc-second tiles keep files small)
FIXTURE_SQUARE_SIZE: int = 1201

# Tile id -> purpose. Sorted for deterministic comparison.
FIXTURE_TILES: dict[str, str] = {
    "N00E000": "Flat sea-level tile with marked corners",
    "N46E007": "Alpine gradient, known values",
    "S10W005": "Southern/western tile with negative values and NoData",
}

# Deliberately malformed files (name -> purpose)
MALFORMED_FIXTURES: dict[str, str] = {
    "N10E010.hgt": "Truncated raster (wrong byte length)",
}

EXPECTED_FIXTURES: list[str] = sorted(
    [f"{tile_id}.hgt" for tile_id in FIXTURE_TILES] + list(MALFORMED_FIXTURES)
)

# Count derived from list for verification
EXPECTED_FIXTURE_COUNT: int = len(EXPECTED_FIXTURES)
