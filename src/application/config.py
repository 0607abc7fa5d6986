"""Service configuration.

A frozen pydantic model holding the only shared state of the service: where
tiles live and how requests are bounded. Built explicitly or from the
environment; never read from module-level constants at query time.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from domain.terrain.services import DEFAULT_MAX_SAMPLES, SamplingMode
from domain.terrain.tile_codec import DEFAULT_TILE_EXTENSION
from domain.terrain.value_objects import SQUARE_SIZE

DEFAULT_DATA_DIR = Path("data/hgt")

# field name -> environment variable
ENV_VARS: dict[str, str] = {
    "data_dir": "DEM_DATA_DIR",
    "square_size": "DEM_SQUARE_SIZE",
    "tile_extension": "DEM_TILE_EXTENSION",
    "max_samples": "DEM_MAX_SAMPLES",
    "sampling": "DEM_SAMPLING",
}


class ServiceConfig(BaseModel):
    """Read-only configuration for the elevation service."""

    data_dir: Path = DEFAULT_DATA_DIR
    square_size: int = Field(default=SQUARE_SIZE, ge=2)
    tile_extension: str = DEFAULT_TILE_EXTENSION
    max_samples: int = Field(default=DEFAULT_MAX_SAMPLES, gt=0)
    sampling: SamplingMode = SamplingMode.PARAMETRIC

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServiceConfig":
        """Build from ``DEM_*`` environment variables; unset ones use defaults.

        Raises:
            pydantic.ValidationError: If a variable cannot be coerced
        """
        env = os.environ if environ is None else environ
        values = {field: env[var] for field, var in ENV_VARS.items() if var in env}
        return cls.model_validate(values)
