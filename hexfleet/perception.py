"""
Perception Module for the hexfleet naval skirmish bot.

Turns the raw entity records of one turn into what the decision logic needs.

Key classes:
- EntityRecord: One raw entity line as delivered by the referee
- Ship, Barrel, OtherEntity: Typed entities (rebuilt fresh every turn)
- Perception: The per-turn snapshot (own ships, enemy contact, best barrel)

Nothing here survives between turns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Union

from .hexgrid import CubeCoord, Direction, OffsetCoord, to_cube, to_direction

logger = logging.getLogger(__name__)


# =============================================================================
# RAW RECORDS
# =============================================================================

class EntityKind(Enum):
    """Entity kinds reported by the referee."""
    SHIP = "SHIP"
    BARREL = "BARREL"


OWNER_SELF = 1


@dataclass(frozen=True)
class EntityRecord:
    """
    One entity line: ``id kind x y arg1 arg2 arg3 arg4``.

    The meaning of the four integer arguments depends on the kind.
    """
    entity_id: int
    kind: str
    x: int
    y: int
    arg1: int = 0
    arg2: int = 0
    arg3: int = 0
    arg4: int = 0


# =============================================================================
# TYPED ENTITIES
# =============================================================================

@dataclass(frozen=True)
class Ship:
    """
    A ship seen this turn.

    Attributes:
        entity_id: Referee entity id.
        position: Offset position of the ship's center.
        heading: Direction the bow points.
        speed: Cells moved per turn (0-2).
        health: Rum stock, which doubles as health.
        is_mine: True for ships we control.
    """
    entity_id: int
    position: OffsetCoord
    heading: Direction
    speed: int
    health: int
    is_mine: bool

    @property
    def cube(self) -> CubeCoord:
        return to_cube(self.position)


@dataclass(frozen=True)
class Barrel:
    """A floating rum barrel."""
    entity_id: int
    position: OffsetCoord
    rum: int


@dataclass(frozen=True)
class OtherEntity:
    """Mines, cannonballs and anything else the decision logic ignores."""
    entity_id: int
    kind: str
    position: OffsetCoord


Entity = Union[Ship, Barrel, OtherEntity]


def entity_from_record(record: EntityRecord) -> Entity:
    """
    Build a typed entity from a raw record.

    SHIP arguments are heading, speed, health and owner flag (1 = ours);
    BARREL's first argument is the rum quantity.

    Raises:
        InvalidDirectionError: If a ship reports a heading outside 0..5.
    """
    position = OffsetCoord(record.x, record.y)

    if record.kind == EntityKind.SHIP.value:
        return Ship(
            entity_id=record.entity_id,
            position=position,
            heading=to_direction(record.arg1),
            speed=record.arg2,
            health=record.arg3,
            is_mine=record.arg4 == OWNER_SELF,
        )
    if record.kind == EntityKind.BARREL.value:
        return Barrel(entity_id=record.entity_id, position=position, rum=record.arg1)
    return OtherEntity(entity_id=record.entity_id, kind=record.kind, position=position)


# =============================================================================
# PERCEPTION SNAPSHOT
# =============================================================================

@dataclass(frozen=True)
class EnemyContact:
    """The enemy ship we are tracking this turn."""
    position: OffsetCoord
    heading: Direction
    speed: int

    @property
    def cube(self) -> CubeCoord:
        return to_cube(self.position)


@dataclass(frozen=True)
class BarrelContact:
    """The most valuable barrel seen this turn."""
    position: OffsetCoord
    rum: int


@dataclass
class Perception:
    """
    What the captain knows at the start of a turn.

    Attributes:
        own_ships: Positions of our ships in the order they were reported.
        enemy: Last enemy ship reported, if any.
        barrel: Barrel with the most rum, if any.
    """
    own_ships: List[OffsetCoord] = field(default_factory=list)
    enemy: Optional[EnemyContact] = None
    barrel: Optional[BarrelContact] = None

    @property
    def own_ship(self) -> Optional[OffsetCoord]:
        """Last own ship reported this turn."""
        return self.own_ships[-1] if self.own_ships else None

    def own_ship_at(self, index: int) -> Optional[OffsetCoord]:
        """
        Position of the index-th own ship, falling back to the last one seen.

        The referee's ship count and entity list normally agree; when they
        do not, the last known own position is the best guess available.
        """
        if 0 <= index < len(self.own_ships):
            return self.own_ships[index]
        return self.own_ship


def perceive(entities: Iterable[Entity]) -> Perception:
    """
    Reduce one turn's entities to a Perception in a single pass.

    - Every ship flagged as ours is recorded, in order.
    - The last enemy ship seen replaces any earlier one.
    - A barrel replaces the current best only with strictly more rum,
      so ties keep the earlier barrel and empty barrels (rum <= 0) are
      never chosen.
    - Other kinds are skipped.

    Args:
        entities: Typed entities for the current turn.

    Returns:
        Perception snapshot for this turn.
    """
    perception = Perception()

    for entity in entities:
        if isinstance(entity, Ship):
            if entity.is_mine:
                perception.own_ships.append(entity.position)
            else:
                perception.enemy = EnemyContact(
                    position=entity.position,
                    heading=entity.heading,
                    speed=entity.speed,
                )
        elif isinstance(entity, Barrel):
            best_rum = perception.barrel.rum if perception.barrel is not None else 0
            if entity.rum > best_rum:
                perception.barrel = BarrelContact(position=entity.position, rum=entity.rum)

    logger.debug(
        "Perceived %d own ship(s), enemy=%s, barrel=%s",
        len(perception.own_ships), perception.enemy, perception.barrel,
    )
    return perception


def perceive_records(records: Iterable[EntityRecord]) -> Perception:
    """Convenience wrapper: build typed entities from raw records and perceive them."""
    return perceive(entity_from_record(record) for record in records)
