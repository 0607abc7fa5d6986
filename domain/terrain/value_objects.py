"""Terrain Bounded Context - Value Objects.

Immutable data structures representing geographic concepts.
All validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.terrain.errors import PointOutOfBoundsError, TileFormatError
from domain.terrain.tile_codec import decode_tile_id

# ---------------------------------------------------------------------------
# Raster Constants
# ---------------------------------------------------------------------------
SQUARE_SIZE = 3601  # 1 arc-second tiles (SRTM1)
SRTM3_SQUARE_SIZE = 1201  # 3 arc-second tiles
NO_DATA = -9999  # Sentinel for "no measurement available"
BYTES_PER_SAMPLE = 2  # signed 16-bit, big-endian

# Tolerance for floating-point distance comparisons
DISTANCE_TOLERANCE_KM = 1e-6


def expected_tile_bytes(square_size: int = SQUARE_SIZE) -> int:
    """Return the exact byte length of a raw tile of the given side length."""
    return square_size * square_size * BYTES_PER_SAMPLE


def is_nodata(value: int) -> bool:
    return value == NO_DATA


# ---------------------------------------------------------------------------
# GeoPoint
# ---------------------------------------------------------------------------
class GeoPoint(BaseModel):
    """Geographic coordinate in decimal degrees (Value Object).

    Invariants:
        GP-1: latitude in [-90, 90]
        GP-2: longitude in [-180, 180]
    """

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Segment
# ---------------------------------------------------------------------------
class Segment(BaseModel):
    """One leg of a profile path, from ``start`` to ``end`` (Value Object)."""

    start: GeoPoint
    end: GeoPoint

    model_config = ConfigDict(frozen=True)

    @property
    def span_deg(self) -> float:
        """Largest absolute per-axis change in degrees."""
        return max(
            abs(self.end.latitude - self.start.latitude),
            abs(self.end.longitude - self.start.longitude),
        )


# ---------------------------------------------------------------------------
# ElevationGrid
# ---------------------------------------------------------------------------
class ElevationGrid(BaseModel):
    """One decoded tile: square raster of signed elevations (Value Object).

    Row 0 is the northern edge, column 0 the western edge. The cell covered is
    the half-open interval ``[origin, origin + 1)`` on both axes, for every
    hemisphere; the north and east edges belong to the neighbouring tiles.

    The data array is an owned, read-only int16 copy.
    """

    tile_id: str
    data: NDArray[np.int16]

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_grid(self) -> "ElevationGrid":
        try:
            decode_tile_id(self.tile_id)
        except TileFormatError as e:
            raise ValueError(str(e)) from e
        if self.data.ndim != 2:
            raise ValueError(f"Data must be 2D, got {self.data.ndim}D")
        height, width = self.data.shape
        if height != width:
            raise ValueError(f"Data must be square, got {self.data.shape}")
        if height < 2:
            raise ValueError(f"Data too small: {self.data.shape}")

        # Native byte order, owned and frozen; never flips flags on caller arrays
        immutable = np.array(self.data, dtype=np.int16, copy=True, order="C")
        immutable.flags.writeable = False
        object.__setattr__(self, "data", immutable)
        return self

    @classmethod
    def from_bytes(
        cls, tile_id: str, raw: bytes, square_size: int = SQUARE_SIZE
    ) -> "ElevationGrid":
        """Decode a raw big-endian tile buffer.

        Raises:
            TileFormatError: Bad tile id or ``len(raw) != square_size² * 2``
        """
        decode_tile_id(tile_id)
        expected = expected_tile_bytes(square_size)
        if len(raw) != expected:
            raise TileFormatError(
                f"Tile {tile_id}: expected {expected} bytes, got {len(raw)}"
            )
        # '>i2' keeps the sign bit, so sub-sea-level values and NO_DATA survive
        data = np.frombuffer(raw, dtype=">i2").reshape(square_size, square_size)
        return cls(tile_id=tile_id.upper(), data=data)

    @property
    def square_size(self) -> int:
        return int(self.data.shape[0])

    @property
    def origin(self) -> tuple[int, int]:
        """(latitude, longitude) of the south-west corner."""
        return decode_tile_id(self.tile_id)

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check ``origin <= coordinate < origin + 1`` on both axes."""
        origin_lat, origin_lon = self.origin
        return (
            origin_lat <= latitude < origin_lat + 1
            and origin_lon <= longitude < origin_lon + 1
        )

    def cell_index(self, latitude: float, longitude: float) -> tuple[int, int]:
        """Return the (row, column) sampled for a contained coordinate."""
        origin_lat, origin_lon = self.origin
        scale = self.square_size - 1
        row = int(math.floor((origin_lat + 1 - latitude) * scale))
        column = int(math.floor((longitude - origin_lon) * scale))
        return row, column

    def lookup(self, latitude: float, longitude: float) -> int:
        """Return the nearest-cell elevation in metres (may be NO_DATA).

        Raises:
            PointOutOfBoundsError: If the coordinate is not contained
        """
        if not self.contains(latitude, longitude):
            raise PointOutOfBoundsError(latitude, longitude, self.tile_id)
        row, column = self.cell_index(latitude, longitude)
        return int(self.data[row, column])

    def nodata_ratio(self) -> float:
        """Fraction of samples equal to NO_DATA (0.0 to 1.0)."""
        return float(np.count_nonzero(self.data == NO_DATA) / self.data.size)


# ---------------------------------------------------------------------------
# ProfileSample
# ---------------------------------------------------------------------------
class ProfileSample(BaseModel):
    """Single sample point along an elevation profile (Value Object).

    Invariants:
        PS-1: distance_km >= 0
        PS-2: is_nodata == True  <=> elevation_m is None
    """

    point: GeoPoint
    elevation_m: int | None = None
    is_nodata: bool = False
    distance_km: float = Field(default=0.0, ge=0)  # Cumulative from first sample

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_nodata_consistency(self) -> "ProfileSample":
        if self.is_nodata and self.elevation_m is not None:
            raise ValueError("is_nodata=True requires elevation_m=None")
        if not self.is_nodata and self.elevation_m is None:
            raise ValueError("is_nodata=False requires an elevation_m value")
        return self

    @property
    def present(self) -> bool:
        return not self.is_nodata

    def as_row(self) -> list[float | int | None]:
        """Return ``[lat, lon, elevation]`` with ``None`` for missing data."""
        return [self.point.latitude, self.point.longitude, self.elevation_m]


# ---------------------------------------------------------------------------
# ElevationProfile
# ---------------------------------------------------------------------------
class ElevationProfile(BaseModel):
    """Ordered elevation samples along a multi-segment path (Value Object).

    Invariants:
        EP-1: Sample distances are non-decreasing
        EP-2: total_distance_km equals the last sample distance (0 when empty)
        EP-3: has_nodata matches actual samples
    """

    samples: tuple[ProfileSample, ...]
    step_deg: float = Field(gt=0)
    sampling: str
    has_nodata: bool
    total_distance_km: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_profile(self) -> "ElevationProfile":
        for i in range(1, len(self.samples)):
            if self.samples[i].distance_km < self.samples[i - 1].distance_km:
                raise ValueError("Sample distances must be non-decreasing")

        last = self.samples[-1].distance_km if self.samples else 0.0
        if abs(last - self.total_distance_km) > DISTANCE_TOLERANCE_KM:
            raise ValueError(
                f"total_distance_km ({self.total_distance_km:.6f}) must equal "
                f"last sample distance ({last:.6f})"
            )

        actual_has_nodata = any(s.is_nodata for s in self.samples)
        if self.has_nodata != actual_has_nodata:
            raise ValueError(
                f"has_nodata={self.has_nodata} but samples say {actual_has_nodata}"
            )
        return self

    def elevations(self) -> tuple[int | None, ...]:
        """Return elevation values (None for missing data)."""
        return tuple(s.elevation_m for s in self.samples)

    def points(self) -> tuple[GeoPoint, ...]:
        return tuple(s.point for s in self.samples)

    def nodata_count(self) -> int:
        """Return number of NoData samples."""
        return sum(1 for s in self.samples if s.is_nodata)

    def nodata_ratio(self) -> float:
        """Return fraction of samples that are NoData (0.0 to 1.0)."""
        if not self.samples:
            return 0.0
        return self.nodata_count() / len(self.samples)

    def as_rows(self) -> list[list[float | int | None]]:
        return [s.as_row() for s in self.samples]
