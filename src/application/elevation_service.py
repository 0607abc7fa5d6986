"""Elevation application service.

Use cases behind the point and profile endpoints. Payloads are validated
with the request schemas and rejected with ``InvalidRequestError`` before any
tile is touched; domain errors from point queries propagate to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from domain.terrain.errors import InvalidRequestError
from domain.terrain.repositories import TileRepository
from domain.terrain.services import (
    DEFAULT_MAX_SAMPLES,
    SamplingMode,
    elevation_profile,
    point_elevation,
)
from domain.terrain.value_objects import ElevationProfile
from infrastructure.terrain import HgtTileRepository

from .config import ServiceConfig
from .schemas import PointRequest, ProfileRequest, ProfileResponse

logger = logging.getLogger(__name__)


class ElevationService:
    """Point and profile queries over a tile repository.

    Holds no per-request state; concurrent calls share only the repository
    and limits given at construction.
    """

    def __init__(
        self,
        repository: TileRepository,
        *,
        sampling: SamplingMode = SamplingMode.PARAMETRIC,
        max_samples: int = DEFAULT_MAX_SAMPLES,
    ) -> None:
        self.repository = repository
        self.sampling = SamplingMode(sampling)
        self.max_samples = max_samples

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "ElevationService":
        repository = HgtTileRepository(
            config.data_dir,
            square_size=config.square_size,
            extension=config.tile_extension,
        )
        return cls(
            repository, sampling=config.sampling, max_samples=config.max_samples
        )

    def point_elevation(self, latitude: Any, longitude: Any) -> int:
        """Elevation in metres at a coordinate.

        Raises:
            InvalidRequestError: Coordinate is not a valid lat/lon pair
            TileNotFoundError: No tile covers the coordinate
            TileReadError: Tile could not be read
            TileFormatError: Tile file has the wrong size
        """
        try:
            request = PointRequest(latitude=latitude, longitude=longitude)
        except ValidationError as e:
            raise InvalidRequestError(e.errors(include_url=False)) from e

        elevation = point_elevation(
            self.repository, request.latitude, request.longitude
        )
        logger.debug(
            "Point (%.6f, %.6f): %d m", request.latitude, request.longitude, elevation
        )
        return elevation

    def parse_profile_request(
        self, payload: Mapping[str, Any] | str | bytes
    ) -> ProfileRequest:
        """Validate a decoded mapping or a raw JSON body."""
        try:
            if isinstance(payload, (str, bytes)):
                return ProfileRequest.model_validate_json(payload)
            return ProfileRequest.model_validate(payload)
        except ValidationError as e:
            raise InvalidRequestError(e.errors(include_url=False)) from e

    def profile_for(self, request: ProfileRequest) -> ElevationProfile:
        return elevation_profile(
            request.segments(),
            request.step_deg,
            self.repository,
            sampling=self.sampling,
            max_samples=self.max_samples,
        )

    def profile(self, payload: Mapping[str, Any] | str | bytes) -> dict[str, Any]:
        """Run a profile request and return the response body.

        Returns:
            ``{"result": [[lat, lon, elevation_or_None], ...]}``

        Raises:
            InvalidRequestError: Payload has the wrong shape or values
            InvalidProfileError: Request exceeds the sample limit
        """
        request = self.parse_profile_request(payload)
        profile = self.profile_for(request)
        return ProfileResponse(result=profile.as_rows()).model_dump(mode="json")
