"""Bundled data: ship visuals and sample sectors."""

import logging
from pathlib import Path

from pydantic_yaml import parse_yaml_file_as

from hex_tactics.sector.models import SectorState
from .models import ShipCatalog

__all__ = ["data_path", "sectors_path", "ship_catalog", "load_sector", "load_sectors"]

logger = logging.getLogger(__name__)

data_path = Path(__file__).parent
sectors_path = data_path / "sectors"

ship_catalog = parse_yaml_file_as(ShipCatalog, data_path / "ship_models.yaml")


def load_sector(path: Path | str) -> SectorState:
    """Load a sector snapshot from a YAML file."""
    return parse_yaml_file_as(SectorState, Path(path))


def load_sectors(directory: Path | str = sectors_path) -> dict[str, SectorState]:
    """Load all sector snapshots in a directory, by file stem.

    Files that fail to load are skipped.
    """
    res: dict[str, SectorState] = {}
    for yml_path in sorted(Path(directory).rglob("*.yaml")):
        try:
            res[yml_path.stem] = load_sector(yml_path)
        except Exception:
            logger.warning(f"Failed to load file as sector: {yml_path!s}")
    return res
