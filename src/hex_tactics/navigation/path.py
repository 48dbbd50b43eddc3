"""Straight-line courses across the hex grid."""

import logging

from pydantic import BaseModel, ConfigDict

from hex_tactics.grid.hexes import HexCoord, Position, hex_distance
from hex_tactics.sector.models import EntityID, SectorState, Ship

logger = logging.getLogger(__name__)

LERP_NUDGE = (1e-6, 2e-6, -3e-6)
"""Offset so interpolated points never sit exactly on a cell edge.

https://www.redblobgames.com/grids/hexagons/#line-drawing
"""


def compute_path(start: Position, destination: Position | None) -> list[Position]:
    """Cells on the straight line from `start` to `destination`, both included.

    Returns an empty list if there's no destination or it's the start cell.
    """
    if destination is None or destination == start:
        return []
    a = start.to_cube()
    b = destination.to_cube()
    n = a.distance_to(b)
    dq, dr, ds = LERP_NUDGE
    res: list[Position] = []
    for i in range(n + 1):
        qf, rf, sf = a.lerp(b, i / n)
        cell = HexCoord.nearest_hex(qf + dq, rf + dr, sf + ds)
        res.append(Position.from_cube(cell))
    return res


def next_step(start: Position, destination: Position | None) -> Position | None:
    """First move along the course, if there is one."""
    path = compute_path(start, destination)
    if len(path) < 2:
        return None
    return path[1]


class NavigationPreview(BaseModel):
    """Course preview for a ship."""

    model_config = ConfigDict(frozen=True)

    ship_id: EntityID
    destination: Position
    distance: int
    breadcrumbs: list[Position]
    blocked_at: int | None = None
    """Index into the full course (start is 0) of the first blocked cell."""

    @property
    def is_clear(self) -> bool:
        """Whether nothing stands in the way."""
        return self.blocked_at is None


def navigation_preview(
    sector: SectorState, ship_id: EntityID, destination: Position
) -> NavigationPreview:
    """Course preview: intermediate cells plus where the course is blocked."""
    ship = sector.get_entity(ship_id)
    if not isinstance(ship, Ship):
        raise ValueError(f"No ship with id: {ship_id!r}")
    if not sector.in_bounds(destination):
        raise ValueError(f"Destination is off the grid: {destination}")

    path = compute_path(ship.position, destination)
    blocked_at: int | None = None
    for i, pos in enumerate(path[1:], start=1):
        if not sector.is_navigable(pos, mover_id=ship.id):
            blocked_at = i
            logger.debug(f"Course of {ship.id} to {destination} blocked at {pos}")
            break

    return NavigationPreview(
        ship_id=ship.id,
        destination=destination,
        distance=hex_distance(ship.position, destination),
        breadcrumbs=path[1:-1],
        blocked_at=blocked_at,
    )
