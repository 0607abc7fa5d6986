"""Application Layer.

Application services that validate request payloads, wire configuration to
infrastructure adapters and orchestrate domain operations.
"""

from .config import ServiceConfig
from .elevation_service import ElevationService

__all__ = ["ElevationService", "ServiceConfig"]
