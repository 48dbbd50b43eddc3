"""Who can see what.

`can_observer_see` applies the hard overrides (torpedoes, cloaks, mines) and
only then asks a general distance/environment rule. The package ships one such
rule, `can_observer_see_entity`, but any callable with the same signature works.
"""

import logging
from collections.abc import Callable
from functools import partial

from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field

from hex_tactics.grid.hexes import hex_distance
from hex_tactics.sector.environment import (
    is_comm_blackout,
    is_deep_ion_storm,
    is_deep_nebula,
    is_in_ion_storm,
    is_in_nebula,
)
from hex_tactics.sector.models import (
    AsteroidField,
    Entity,
    EventBeacon,
    Mine,
    Planet,
    SectorState,
    Ship,
    Shuttle,
    Starbase,
    TorpedoProjectile,
)

logger = logging.getLogger(__name__)

VisibilityRule = Callable[[Ship, Entity, SectorState], bool]
"""General rule: (observer, candidate, sector) -> visible."""

Range = Annotated[int, Field(ge=0)]


class SensorRules(BaseModel):
    """Tuning for the general visibility rule. Ranges are in cells."""

    model_config = ConfigDict(frozen=True)

    asteroid_concealment_range: Annotated[
        Range, Field(description="Ships in asteroid fields are hidden beyond this.")
    ] = 4
    nebula_sensor_range: Annotated[
        Range, Field(description="Sensor range of an observer inside a nebula.")
    ] = 1
    comm_blackout_radius: Annotated[
        Range, Field(description="Nebula depth that cuts allied comms.")
    ] = 2
    comm_blackout_range: Annotated[
        Range, Field(description="Allies in a blackout are seen only this close.")
    ] = 1
    ion_storm_sensor_range: Range = 4
    deep_ion_storm_sensor_range: Range = 2


DEFAULT_SENSOR_RULES = SensorRules()


def _ion_storm_cap(
    ship: Ship, candidate: Entity, sector: SectorState, rules: SensorRules
) -> int | None:
    """Sensor range cap from ion storms on either end, if any."""
    cells = (ship.position, candidate.position)
    if any(is_deep_ion_storm(p, sector) for p in cells):
        return rules.deep_ion_storm_sensor_range
    if any(is_in_ion_storm(p, sector) for p in cells):
        return rules.ion_storm_sensor_range
    return None


def can_observer_see_entity(
    observer: Ship,
    candidate: Entity,
    sector: SectorState,
    rules: SensorRules = DEFAULT_SENSOR_RULES,
) -> bool:
    """General distance/environment visibility rule."""
    if candidate.id == observer.id:
        return True

    distance = hex_distance(observer.position, candidate.position)

    if candidate.faction == observer.faction:
        # Allies share data unless comms are cut
        blackout = any(
            is_comm_blackout(p, sector, radius=rules.comm_blackout_radius)
            for p in (observer.position, candidate.position)
        )
        if blackout:
            return distance <= rules.comm_blackout_range
        return True

    if is_deep_nebula(candidate.position, sector):
        return False

    if is_in_nebula(observer.position, sector):
        return distance <= rules.nebula_sensor_range

    effective_range = observer.sensor_range
    cap = _ion_storm_cap(observer, candidate, sector, rules)
    if cap is not None:
        effective_range = cap if effective_range is None else min(effective_range, cap)
    if effective_range is not None and distance > effective_range:
        return False

    if isinstance(candidate, Ship):
        in_asteroids = any(
            isinstance(e, AsteroidField) for e in sector.entities_at(candidate.position)
        )
        if in_asteroids and distance > rules.asteroid_concealment_range:
            return False

    return True


def can_observer_see(
    observer: Ship,
    candidate: Entity,
    sector: SectorState,
    general_rule: VisibilityRule | None = None,
) -> bool:
    """Whether `observer` perceives `candidate` this turn.

    The first matching rule decides:

    1. Torpedoes are always visible.
    2. Cloaked or cloaking ships are never visible.
    3. Mines are visible only to ship models on their `visible_to` list.
    4. Anything else is decided by `general_rule`
       (default: `can_observer_see_entity`).
    """
    if general_rule is None:
        general_rule = can_observer_see_entity

    if isinstance(candidate, TorpedoProjectile):
        return True
    elif isinstance(candidate, Ship):
        if candidate.is_concealed:
            return False
        return general_rule(observer, candidate, sector)
    elif isinstance(candidate, Mine):
        return observer.ship_model in candidate.visible_to
    elif isinstance(candidate, (Planet, Starbase, AsteroidField, EventBeacon, Shuttle)):
        return general_rule(observer, candidate, sector)
    raise TypeError(f"Unknown entity type passed: {candidate!r}")


def visible_entities(
    observer: Ship,
    sector: SectorState,
    general_rule: VisibilityRule | None = None,
    rules: SensorRules | None = None,
) -> list[Entity]:
    """Entities of the sector that `observer` perceives, in snapshot order.

    `rules` tunes the default general rule and can't be combined with a custom one.
    """
    if rules is not None:
        if general_rule is not None:
            raise ValueError("Pass either `general_rule` or `rules`, not both.")
        general_rule = partial(can_observer_see_entity, rules=rules)
    res = [
        ent
        for ent in sector.entities
        if can_observer_see(observer, ent, sector, general_rule=general_rule)
    ]
    logger.debug(f"{observer.id} sees {len(res)} of {len(sector.entities)} entities")
    return res
