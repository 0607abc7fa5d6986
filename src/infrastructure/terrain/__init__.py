"""Infrastructure adapters for the terrain bounded context.

This module provides the infrastructure layer implementations for terrain
operations, including loading elevation tiles from ``.hgt`` files.
"""

from .hgt_adapter import HgtTileRepository

__all__ = ["HgtTileRepository"]
