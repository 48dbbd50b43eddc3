"""Shared fixtures."""

import pytest

from hex_tactics.data import load_sector, sectors_path
from hex_tactics.sector.models import SectorState


@pytest.fixture
def skirmish() -> SectorState:
    """The bundled two-ship skirmish sector."""
    return load_sector(sectors_path / "skirmish.yaml")
