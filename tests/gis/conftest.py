"""Pytest configuration for GIS integration tests.

This conftest is for tests/gis/ directory only.

Fixture tiles are generated once per session by ``scripts/gen_fixtures.py``
into a temporary directory, so the repository never needs to carry binary
``.hgt`` files.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from infrastructure.terrain.hgt_adapter import HgtTileRepository
from scripts.gen_fixtures import main as generate_fixtures
from shared.fixtures_expected import FIXTURE_SQUARE_SIZE

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session")
def fixtures_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Session-scoped directory populated with the generated fixture tiles."""
    out_dir = tmp_path_factory.mktemp("hgt_fixtures")
    exit_code = generate_fixtures(["--output", str(out_dir)])
    if exit_code != 0:
        pytest.fail(f"gen_fixtures.py exited with {exit_code}")
    logger.debug("Generated fixtures in %s", out_dir)
    return out_dir


@pytest.fixture
def fixture_repository(fixtures_dir: Path) -> HgtTileRepository:
    """HgtTileRepository reading the generated fixtures."""
    return HgtTileRepository(fixtures_dir, square_size=FIXTURE_SQUARE_SIZE)
