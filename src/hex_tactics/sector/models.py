"""Sector snapshot models: entities and environment cells."""

from enum import Enum
from typing import Literal, Union

from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field, model_validator

from hex_tactics.grid.hexes import Position

SECTOR_WIDTH = 11
SECTOR_HEIGHT = 10

EntityID = str


class CloakState(str, Enum):
    """Cloaking device state of a ship."""

    NONE = "none"
    CLOAKING = "cloaking"
    CLOAKED = "cloaked"
    DECLOAKING = "decloaking"


class PlanetClass(str, Enum):
    """Planet class."""

    M = "M"  # Earth-like
    J = "J"  # Gas giant
    L = "L"  # Barren/marginal
    D = "D"  # Rock/asteroid


class BeaconEvent(str, Enum):
    """What an event beacon marks."""

    DERELICT_SHIP = "derelict_ship"
    DISTRESS_CALL = "distress_call"
    ANCIENT_PROBE = "ancient_probe"


class BaseEntity(BaseModel):
    """Fields shared by everything placed in a sector."""

    model_config = ConfigDict(frozen=True)

    id: EntityID
    name: str = ""
    faction: str = "None"
    position: Position


class Ship(BaseEntity):
    """A starship."""

    type: Literal["ship"] = "ship"
    ship_model: str
    hull: Annotated[int, Field(ge=0)] = 100
    max_hull: Annotated[int, Field(gt=0)] = 100
    cloak_state: CloakState = CloakState.NONE
    current_target_id: EntityID | None = None
    sensor_range: Annotated[int, Field(ge=0)] | None = None  # cells, None is unlimited
    is_derelict: bool = False

    @property
    def is_concealed(self) -> bool:
        """Whether the cloak is up (or going up)."""
        return self.cloak_state in (CloakState.CLOAKED, CloakState.CLOAKING)


class Planet(BaseEntity):
    """A planet."""

    type: Literal["planet"] = "planet"
    planet_class: PlanetClass = PlanetClass.M


class Starbase(BaseEntity):
    """A starbase."""

    type: Literal["starbase"] = "starbase"
    hull: Annotated[int, Field(ge=0)] = 500
    max_hull: Annotated[int, Field(gt=0)] = 500


class AsteroidField(BaseEntity):
    """Asteroid field. Shares its cell with other entities."""

    type: Literal["asteroid_field"] = "asteroid_field"


class EventBeacon(BaseEntity):
    """Event beacon."""

    type: Literal["event_beacon"] = "event_beacon"
    event_type: BeaconEvent = BeaconEvent.DISTRESS_CALL
    is_resolved: bool = False


class TorpedoProjectile(BaseEntity):
    """Torpedo in flight."""

    type: Literal["torpedo_projectile"] = "torpedo_projectile"
    target_id: EntityID
    source_id: EntityID | None = None
    torpedo_type: str = "Photon"
    speed: Annotated[int, Field(ge=0)] = 2
    path: tuple[Position, ...] = ()


class Shuttle(BaseEntity):
    """A shuttlecraft."""

    type: Literal["shuttle"] = "shuttle"
    hull: Annotated[int, Field(ge=0)] = 10
    max_hull: Annotated[int, Field(gt=0)] = 10


class Mine(BaseEntity):
    """A mine, only visible to the ship models it lists."""

    type: Literal["mine"] = "mine"
    visible_to: frozenset[str] = frozenset()


Entity = Annotated[
    Union[
        Ship,
        Planet,
        Starbase,
        AsteroidField,
        EventBeacon,
        TorpedoProjectile,
        Shuttle,
        Mine,
    ],
    Field(discriminator="type"),
]


def blocks_cell(entity: Entity) -> bool:
    """Whether an entity claims its cell, for occupancy and navigation."""
    if isinstance(entity, Ship):
        return not entity.is_concealed
    elif isinstance(entity, (Planet, Starbase, EventBeacon, Shuttle)):
        return True
    elif isinstance(entity, (AsteroidField, TorpedoProjectile, Mine)):
        return False
    raise TypeError(f"Unknown entity type passed: {entity!r}")


class SectorState(BaseModel):
    """Snapshot of one sector: grid extent, entities and environment.

    Never modified in place; a new snapshot is made every turn.
    """

    model_config = ConfigDict(frozen=True)

    width: Annotated[int, Field(gt=0)] = SECTOR_WIDTH
    height: Annotated[int, Field(gt=0)] = SECTOR_HEIGHT
    entities: tuple[Entity, ...] = ()
    nebula_cells: frozenset[Position] = frozenset()
    ion_storm_cells: frozenset[Position] = frozenset()

    @model_validator(mode="after")
    def _check_entities(self) -> "SectorState":
        """Ensure entities are unique, on the grid and not stacked."""
        seen_ids: set[EntityID] = set()
        claimed: dict[Position, EntityID] = {}
        for ent in self.entities:
            if ent.id in seen_ids:
                raise ValueError(f"Duplicate entity id: {ent.id!r}")
            seen_ids.add(ent.id)
            if not self.in_bounds(ent.position):
                raise ValueError(f"Entity {ent.id!r} is off the grid at {ent.position}")
            if blocks_cell(ent):
                if ent.position in claimed:
                    raise ValueError(
                        f"Entities {claimed[ent.position]!r} and {ent.id!r} "
                        f"both occupy {ent.position}"
                    )
                claimed[ent.position] = ent.id
        for name in ("nebula_cells", "ion_storm_cells"):
            outside = [p for p in getattr(self, name) if not self.in_bounds(p)]
            if outside:
                raise ValueError(f"Cells outside the grid in {name}: {outside}")
        return self

    def in_bounds(self, pos: Position) -> bool:
        """Whether a position is a cell of this grid."""
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    @property
    def ships(self) -> list[Ship]:
        """All ships in the sector."""
        return [e for e in self.entities if isinstance(e, Ship)]

    def get_entity(self, entity_id: EntityID | None) -> Entity | None:
        """Resolve an id reference, `None` if it points nowhere."""
        if entity_id is None:
            return None
        for ent in self.entities:
            if ent.id == entity_id:
                return ent
        return None

    def entities_at(self, pos: Position) -> list[Entity]:
        """Entities on a cell, in snapshot order."""
        return [e for e in self.entities if e.position == pos]

    def occupant_at(self, pos: Position) -> Entity | None:
        """The entity claiming a cell, if any."""
        for ent in self.entities_at(pos):
            if blocks_cell(ent):
                return ent
        return None

    def is_navigable(self, pos: Position, mover_id: EntityID | None = None) -> bool:
        """Whether a ship could move into a cell.

        Cloaked ships, asteroid fields and projectiles never block.
        """
        if not self.in_bounds(pos):
            return False
        occupant = self.occupant_at(pos)
        return occupant is None or occupant.id == mover_id

    def is_navigation_target(
        self, pos: Position, mover_id: EntityID | None = None
    ) -> bool:
        """Whether a cell can be picked as a course destination.

        Only empty cells and asteroid fields qualify; anything else there is
        something to select rather than fly to.
        """
        if not self.in_bounds(pos):
            return False
        others = [e for e in self.entities_at(pos) if e.id != mover_id]
        return all(isinstance(e, AsteroidField) for e in others)
