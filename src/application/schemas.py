"""Pydantic schemas for elevation requests and responses.

Request bodies are validated here, before any sampling starts. Shapes follow
the wire format: a profile request is
``{"step": <int micro-degrees>, "path": [[[lat, lon], [lat, lon]], ...]}``.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from domain.terrain.value_objects import GeoPoint, Segment

MICRODEGREES_PER_DEGREE = 1_000_000

Latitude = Annotated[float, Field(ge=-90, le=90)]
Longitude = Annotated[float, Field(ge=-180, le=180)]
Coordinate = tuple[Latitude, Longitude]


class PointRequest(BaseModel):
    """Point elevation query."""

    latitude: Latitude
    longitude: Longitude

    model_config = ConfigDict(frozen=True)


class ProfileRequest(BaseModel):
    """Profile query: sampling step and an ordered list of segments."""

    step: int = Field(gt=0)  # millionths of a degree
    path: list[tuple[Coordinate, Coordinate]] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)

    @property
    def step_deg(self) -> float:
        return self.step / MICRODEGREES_PER_DEGREE

    def segments(self) -> list[Segment]:
        return [
            Segment(
                start=GeoPoint(latitude=a[0], longitude=a[1]),
                end=GeoPoint(latitude=b[0], longitude=b[1]),
            )
            for a, b in self.path
        ]


class ProfileResponse(BaseModel):
    """``result`` rows are ``[lat, lon, elevation]``; elevation is null
    where no tile covers the sample."""

    result: list[tuple[float, float, int | None]]
