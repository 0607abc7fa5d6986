"""Tile identifier codec.

Converts between 7-character tile identifiers (``N46E007``, ``S10W005``) and
the integer (latitude, longitude) origin of the one-degree cell they name.

Origins are the south-west corner of the cell and are selected with
``math.floor``, so ``-0.5`` belongs to ``S01`` rather than ``S00``.
"""

from __future__ import annotations

import math

from domain.terrain.errors import TileFormatError

TILE_ID_LENGTH = 7
DEFAULT_TILE_EXTENSION = ".hgt"


def decode_tile_id(tile_id: str) -> tuple[int, int]:
    """Return the (latitude, longitude) origin encoded in ``tile_id``.

    Raises:
        TileFormatError: Wrong length, unknown hemisphere letter or
            non-numeric magnitude.
    """
    if len(tile_id) != TILE_ID_LENGTH:
        raise TileFormatError(
            f"Tile id {tile_id!r} has invalid length {len(tile_id)} "
            f"(expected {TILE_ID_LENGTH})"
        )

    lat_hemisphere = tile_id[0].upper()
    lon_hemisphere = tile_id[3].upper()
    if lat_hemisphere not in ("N", "S"):
        raise TileFormatError(f"Tile id {tile_id!r}: bad latitude hemisphere")
    if lon_hemisphere not in ("E", "W"):
        raise TileFormatError(f"Tile id {tile_id!r}: bad longitude hemisphere")

    lat_digits = tile_id[1:3]
    lon_digits = tile_id[4:7]
    digits = lat_digits + lon_digits
    if not (digits.isascii() and digits.isdigit()):
        raise TileFormatError(f"Tile id {tile_id!r}: magnitudes must be digits")

    latitude = int(lat_digits)
    longitude = int(lon_digits)
    if lat_hemisphere == "S":
        latitude = -latitude
    if lon_hemisphere == "W":
        longitude = -longitude

    return latitude, longitude


def tile_origin(latitude: float, longitude: float) -> tuple[int, int]:
    """Return the south-west corner of the cell containing the coordinate."""
    return int(math.floor(latitude)), int(math.floor(longitude))


def encode_tile_id(latitude: float, longitude: float) -> str:
    """Return the identifier of the tile whose cell contains the coordinate.

    Example:
        >>> encode_tile_id(46.5, 7.9)
        'N46E007'
        >>> encode_tile_id(-9.5, -4.2)
        'S10W005'
    """
    origin_lat, origin_lon = tile_origin(latitude, longitude)
    ns = "N" if origin_lat >= 0 else "S"
    ew = "E" if origin_lon >= 0 else "W"
    return f"{ns}{abs(origin_lat):02d}{ew}{abs(origin_lon):03d}"


def tile_filename(tile_id: str, extension: str = DEFAULT_TILE_EXTENSION) -> str:
    """Return the storage file name for ``tile_id`` (validated)."""
    decode_tile_id(tile_id)
    return f"{tile_id.upper()}{extension}"
