"""Terrain Bounded Context - Domain Services.

Pure domain logic for point elevation, path sampling and distances.
NO file I/O - tiles are obtained through the ``TileRepository`` port,
implemented by ``src/infrastructure/terrain/hgt_adapter.py``.
"""

from __future__ import annotations

import logging
import math
from collections import OrderedDict
from collections.abc import Sequence
from enum import Enum

from domain.terrain.errors import (
    InvalidProfileError,
    PointOutOfBoundsError,
    SampleLimitExceededError,
    TileFormatError,
    TileNotFoundError,
    TileReadError,
)
from domain.terrain.repositories import TileRepository
from domain.terrain.tile_codec import encode_tile_id
from domain.terrain.value_objects import (
    ElevationGrid,
    ElevationProfile,
    GeoPoint,
    ProfileSample,
    Segment,
    is_nodata,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
EARTH_RADIUS_KM = 6371.0
DEFAULT_MAX_SAMPLES = 100_000  # Per profile request
NODATA_WARNING_RATIO = 0.8
MEMO_MAX_TILES = 2  # Grids held at once during one profile call

# Absorbs float error in span/step so that an exact divisor includes the end
_RANGE_EPSILON = 1e-9

# Per-sample failures that degrade to a nodata sample instead of aborting
_RECOVERABLE_TILE_ERRORS = (TileNotFoundError, TileFormatError, TileReadError)


class SamplingMode(str, Enum):
    """How sample coordinates are generated along a segment."""

    PARAMETRIC = "parametric"  # i/n interpolation of both axes
    LEGACY = "legacy"  # per-axis ranges zipped, truncated to the shorter


# ---------------------------------------------------------------------------
# Great-Circle Distance
# ---------------------------------------------------------------------------
def great_circle_distance(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """Spherical law-of-cosines distance in kilometres.

    The cosine is clamped to [-1, 1]; rounding can push it just above 1.0
    for coincident points, which would make ``acos`` raise. Identical
    coordinates short-circuit to exactly 0.0, since the cosine can also round
    to just below 1.0.
    """
    if lat1 == lat2 and lon1 == lon2:
        return 0.0

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_lambda = math.radians(lon1 - lon2)

    cosine = math.sin(phi1) * math.sin(phi2) + math.cos(phi1) * math.cos(
        phi2
    ) * math.cos(delta_lambda)
    cosine = max(-1.0, min(1.0, cosine))

    return EARTH_RADIUS_KM * math.acos(cosine)


# ---------------------------------------------------------------------------
# Segment Sampling
# ---------------------------------------------------------------------------
def _parametric_steps(segment: Segment, step_deg: float) -> int:
    return int(round(segment.span_deg / step_deg))


def _axis_count(start: float, end: float, step_deg: float) -> int:
    if end < start:
        return 0
    return int(math.floor((end - start) / step_deg + _RANGE_EPSILON)) + 1


def axis_range(start: float, end: float, step_deg: float) -> list[float]:
    """Ascending values ``start, start + step, ...`` not exceeding ``end``.

    Empty when ``end < start``.
    """
    return [start + i * step_deg for i in range(_axis_count(start, end, step_deg))]


def count_segment_samples(
    segment: Segment,
    step_deg: float,
    sampling: SamplingMode = SamplingMode.PARAMETRIC,
) -> int:
    """Number of points ``sample_segment`` would generate."""
    if sampling == SamplingMode.LEGACY:
        return min(
            _axis_count(segment.start.latitude, segment.end.latitude, step_deg),
            _axis_count(segment.start.longitude, segment.end.longitude, step_deg),
        )
    return _parametric_steps(segment, step_deg) + 1


def sample_segment(
    segment: Segment,
    step_deg: float,
    sampling: SamplingMode = SamplingMode.PARAMETRIC,
) -> list[GeoPoint]:
    """Generate sample coordinates from ``segment.start`` to ``segment.end``.

    Parametric mode uses ``n = round(max(|dlat|, |dlon|) / step)`` and emits
    ``start + (end - start) * i / n`` for ``i = 0..n``, so both endpoints are
    always included and a zero-length segment yields one point.

    Legacy mode pairs two ascending per-axis ranges positionally and drops
    the tail of the longer one. It only follows the segment at 45 degrees.
    """
    start, end = segment.start, segment.end

    if sampling == SamplingMode.LEGACY:
        lats = axis_range(start.latitude, end.latitude, step_deg)
        lons = axis_range(start.longitude, end.longitude, step_deg)
        return [GeoPoint(latitude=a, longitude=o) for a, o in zip(lats, lons)]

    n = _parametric_steps(segment, step_deg)
    if n == 0:
        return [start]

    d_lat = end.latitude - start.latitude
    d_lon = end.longitude - start.longitude
    points = [start]
    for i in range(1, n):
        points.append(
            GeoPoint(
                latitude=start.latitude + d_lat * i / n,
                longitude=start.longitude + d_lon * i / n,
            )
        )
    points.append(end)
    return points


def count_samples(
    path: Sequence[Segment],
    step_deg: float,
    sampling: SamplingMode = SamplingMode.PARAMETRIC,
) -> int:
    """Total number of samples for a path, without generating them."""
    return sum(count_segment_samples(s, step_deg, sampling) for s in path)


# ---------------------------------------------------------------------------
# Point Elevation
# ---------------------------------------------------------------------------
def point_elevation(
    resolver: TileRepository, latitude: float, longitude: float
) -> int:
    """Elevation in metres at a coordinate (raw sample, may be NO_DATA).

    Raises:
        TileNotFoundError: No tile covers the coordinate
        TileReadError: Tile could not be read
        TileFormatError: Tile has the wrong size
    """
    grid = resolver.resolve(latitude, longitude)
    return grid.lookup(latitude, longitude)


# ---------------------------------------------------------------------------
# Per-call Grid Memo
# ---------------------------------------------------------------------------
class GridMemo:
    """Most recently used grids for a single profile call.

    Holds at most ``max_tiles`` grids; the least recently used one is dropped
    first. Tiles that failed to load are remembered as ``None`` so a run of
    samples over a missing tile does not retry it.
    """

    def __init__(
        self, resolver: TileRepository, max_tiles: int = MEMO_MAX_TILES
    ) -> None:
        self.resolver = resolver
        self.max_tiles = max_tiles
        self.touched: set[str] = set()
        self._grids: OrderedDict[str, ElevationGrid | None] = OrderedDict()

    def __len__(self) -> int:
        return len(self._grids)

    def get(self, tile_id: str) -> ElevationGrid | None:
        if tile_id in self._grids:
            self._grids.move_to_end(tile_id)
            return self._grids[tile_id]

        try:
            grid = self.resolver.load_grid(tile_id)
        except _RECOVERABLE_TILE_ERRORS as e:
            logger.debug("Tile %s unavailable: %s", tile_id, e)
            grid = None

        self.touched.add(tile_id)
        self._grids[tile_id] = grid
        while len(self._grids) > self.max_tiles:
            self._grids.popitem(last=False)
        return grid


def _sample_elevation(memo: GridMemo, point: GeoPoint) -> int | None:
    grid = memo.get(encode_tile_id(point.latitude, point.longitude))
    if grid is None:
        return None

    try:
        value = grid.lookup(point.latitude, point.longitude)
    except PointOutOfBoundsError as e:
        logger.debug("%s", e)
        return None
    return None if is_nodata(value) else value


# ---------------------------------------------------------------------------
# Main Service: elevation_profile
# ---------------------------------------------------------------------------
def elevation_profile(
    path: Sequence[Segment],
    step_deg: float,
    resolver: TileRepository,
    sampling: SamplingMode = SamplingMode.PARAMETRIC,
    max_samples: int = DEFAULT_MAX_SAMPLES,
) -> ElevationProfile:
    """Extract the elevation profile along a multi-segment path.

    Segments are sampled independently and concatenated in input order.
    Samples without coverage (missing, unreadable or malformed tile, or a
    NO_DATA cell) are kept with ``elevation_m=None``; the profile is never
    aborted for a single point.

    At most ``MEMO_MAX_TILES`` grids are held at once; samples arrive in path
    order, so each tile is normally loaded once. Nothing is kept between calls.

    Args:
        path: Ordered segments
        step_deg: Sampling increment in degrees
        resolver: Tile source
        sampling: Coordinate generation mode
        max_samples: Upper bound on generated samples

    Returns:
        ElevationProfile with samples in path order

    Raises:
        InvalidProfileError: Empty path or non-positive step
        SampleLimitExceededError: Path would exceed ``max_samples``

    Example:
        >>> repo = HgtTileRepository("data/hgt")
        >>> path = [Segment(start=GeoPoint(latitude=46.0, longitude=7.0),
        ...                 end=GeoPoint(latitude=46.5, longitude=7.5))]
        >>> profile = elevation_profile(path, 0.001, repo)
        >>> print(f"Samples: {len(profile.samples)}")
    """
    if not path:
        raise InvalidProfileError("Path must contain at least one segment")
    if not (step_deg > 0 and math.isfinite(step_deg)):
        raise InvalidProfileError("step_deg must be positive")

    sampling = SamplingMode(sampling)
    try:
        total: float = count_samples(path, step_deg, sampling)
    except OverflowError:
        # span / step is not finite for subnormal steps
        total = math.inf
    if total > max_samples:
        raise SampleLimitExceededError(total, max_samples)

    memo = GridMemo(resolver)
    samples: list[ProfileSample] = []
    distance = 0.0
    previous: GeoPoint | None = None

    for segment in path:
        for point in sample_segment(segment, step_deg, sampling):
            if previous is not None:
                distance += great_circle_distance(
                    previous.latitude,
                    previous.longitude,
                    point.latitude,
                    point.longitude,
                )
            elevation = _sample_elevation(memo, point)
            samples.append(
                ProfileSample(
                    point=point,
                    elevation_m=elevation,
                    is_nodata=elevation is None,
                    distance_km=distance,
                )
            )
            previous = point

    profile = ElevationProfile(
        samples=tuple(samples),
        step_deg=step_deg,
        sampling=sampling.value,
        has_nodata=any(s.is_nodata for s in samples),
        total_distance_km=distance,
    )

    logger.info(
        "Profile: %d segments, %d samples, %d tiles touched",
        len(path),
        len(samples),
        len(memo.touched),
    )
    if samples and profile.nodata_ratio() > NODATA_WARNING_RATIO:
        logger.warning(
            "Profile: %.1f%% of samples have no elevation data",
            profile.nodata_ratio() * 100.0,
        )
    return profile
