"""Elevation Service Domain Layer.

This package contains the core business logic organized by bounded contexts:
- terrain: Elevation tiles, point lookup, profile sampling, distances
"""

from domain import terrain

__all__ = ["terrain"]
