"""Targeting relationships around a selected entity, for overlay lines.

All id references are weak: a reference to something no longer in the list
simply resolves to nothing.
"""

import logging
from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict

from hex_tactics.grid.hexes import Position
from hex_tactics.sector.models import Entity, EntityID, Ship, TorpedoProjectile

logger = logging.getLogger(__name__)

OverlayKind = Literal["attacker", "target", "inbound", "projectile_target"]


def _find(entities: Sequence[Entity], entity_id: EntityID | None) -> Entity | None:
    """Look up an entity by id."""
    if entity_id is None:
        return None
    for ent in entities:
        if ent.id == entity_id:
            return ent
    return None


def attackers_of(entities: Sequence[Entity], selected_id: EntityID) -> list[EntityID]:
    """Ships currently targeting the selection."""
    return [
        ent.id
        for ent in entities
        if isinstance(ent, Ship)
        and ent.current_target_id == selected_id
        and ent.id != selected_id
    ]


def target_of(entities: Sequence[Entity], selected_id: EntityID) -> EntityID | None:
    """Ship targeted by the selection, if the selection is a ship."""
    selected = _find(entities, selected_id)
    if not isinstance(selected, Ship) or selected.current_target_id is None:
        return None
    target = _find(entities, selected.current_target_id)
    if not isinstance(target, Ship):
        logger.debug(
            f"Target {selected.current_target_id!r} of {selected_id!r} is not a ship"
            " in this snapshot"
        )
        return None
    return target.id


def inbound_projectiles_to(
    entities: Sequence[Entity], selected_id: EntityID
) -> list[EntityID]:
    """Torpedoes flying at the selection."""
    return [
        ent.id
        for ent in entities
        if isinstance(ent, TorpedoProjectile) and ent.target_id == selected_id
    ]


def projectile_target_of(
    entities: Sequence[Entity], selected_id: EntityID
) -> EntityID | None:
    """What a selected torpedo is flying at."""
    selected = _find(entities, selected_id)
    if not isinstance(selected, TorpedoProjectile):
        return None
    target = _find(entities, selected.target_id)
    if target is None:
        return None
    return target.id


class OverlayLine(BaseModel):
    """A line to draw between two cells."""

    model_config = ConfigDict(frozen=True)

    kind: OverlayKind
    source_id: EntityID
    target_id: EntityID
    start: Position
    end: Position


class TargetingOverlay(BaseModel):
    """Everything the tactical overlay shows for one selection."""

    model_config = ConfigDict(frozen=True)

    selected_id: EntityID
    attackers: list[EntityID] = []
    target: EntityID | None = None
    inbound_projectiles: list[EntityID] = []
    projectile_target: EntityID | None = None
    lines: list[OverlayLine] = []


def build_overlay(
    entities: Sequence[Entity], selected_id: EntityID
) -> TargetingOverlay:
    """Derive the overlay for a selection.

    Lines always point from the shooter to what it shoots at.
    """
    selected = _find(entities, selected_id)
    if selected is None:
        return TargetingOverlay(selected_id=selected_id)

    attackers = attackers_of(entities, selected_id)
    target = target_of(entities, selected_id)
    inbound = inbound_projectiles_to(entities, selected_id)
    proj_target = projectile_target_of(entities, selected_id)

    pairs: list[tuple[OverlayKind, EntityID, EntityID]] = []
    pairs += [("attacker", a, selected_id) for a in attackers]
    if target is not None:
        pairs.append(("target", selected_id, target))
    pairs += [("inbound", t, selected_id) for t in inbound]
    if proj_target is not None:
        pairs.append(("projectile_target", selected_id, proj_target))

    positions = {ent.id: ent.position for ent in entities}
    lines = [
        OverlayLine(
            kind=kind,
            source_id=src,
            target_id=dst,
            start=positions[src],
            end=positions[dst],
        )
        for (kind, src, dst) in pairs
    ]
    return TargetingOverlay(
        selected_id=selected_id,
        attackers=attackers,
        target=target,
        inbound_projectiles=inbound,
        projectile_target=proj_target,
        lines=lines,
    )
