"""Environmental hazards: nebulae and ion storms."""

from collections.abc import Set

from hex_tactics.grid.hexes import Position
from .models import SectorState

COMM_BLACKOUT_RADIUS = 2


def _is_deep(pos: Position, cells: Set[Position]) -> bool:
    """A cell is "deep" if it and all six neighbors are in `cells`."""
    if pos not in cells:
        return False
    return all(n in cells for n in pos.neighbors)


def is_in_nebula(pos: Position, sector: SectorState) -> bool:
    """Whether the cell is nebula."""
    return pos in sector.nebula_cells


def is_deep_nebula(pos: Position, sector: SectorState) -> bool:
    """Whether the cell is nebula surrounded by nebula."""
    return _is_deep(pos, sector.nebula_cells)


def is_in_ion_storm(pos: Position, sector: SectorState) -> bool:
    """Whether the cell is in an ion storm."""
    return pos in sector.ion_storm_cells


def is_deep_ion_storm(pos: Position, sector: SectorState) -> bool:
    """Whether the cell is ion storm surrounded by ion storm."""
    return _is_deep(pos, sector.ion_storm_cells)


def is_comm_blackout(
    pos: Position, sector: SectorState, radius: int = COMM_BLACKOUT_RADIUS
) -> bool:
    """Whether the cell is so far inside a nebula that comms are cut.

    Every cell within `radius` steps must be nebula.
    """
    if not is_in_nebula(pos, sector):
        return False
    area = pos.to_cube().get_neighborhood(radius)
    return all(Position.from_cube(c) in sector.nebula_cells for c in area)
