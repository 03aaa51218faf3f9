"""
Captain Module for the hexfleet naval skirmish bot.

The turn controller: owns the cannon cooldown and the random stream, and
turns each turn's perception into one command per owned ship.

Key classes:
- Command: MOVE or FIRE order for one ship
- TurnInput: What the referee tells us at the start of a turn
- Captain: Per-turn decision loop

Per turn:
1. Cooldown ticks down by one (never below zero), even with no ships left.
2. Entities are reduced to a Perception.
3. Each owned ship, in report order, fires if the cannon is ready and the
   lead solution is in range; otherwise it sails for the best barrel, or
   the idle destination when no barrel is in sight.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional

from .hexgrid import OffsetCoord, clamp_to_map
from .perception import EntityRecord, Perception, perceive_records
from .prng import SeededRandom
from .rules import COOLDOWN_CANNON, MAP_HEIGHT, MAP_WIDTH, MAX_TURNS
from .targeting import LeadCalculator

logger = logging.getLogger(__name__)


# =============================================================================
# COMMANDS AND TURN INPUT
# =============================================================================

class CommandType(Enum):
    """Orders a ship can receive."""
    MOVE = "MOVE"
    FIRE = "FIRE"


@dataclass(frozen=True)
class Command:
    """
    One order for one ship.

    Attributes:
        command_type: MOVE or FIRE.
        target: Offset cell to sail to or shoot at.
    """
    command_type: CommandType
    target: OffsetCoord

    @classmethod
    def move(cls, target: OffsetCoord) -> Command:
        return cls(CommandType.MOVE, target)

    @classmethod
    def fire(cls, target: OffsetCoord) -> Command:
        return cls(CommandType.FIRE, target)

    def to_line(self) -> str:
        """Protocol form, e.g. ``FIRE 12 5``."""
        return f"{self.command_type.value} {self.target.x} {self.target.y}"

    def __str__(self) -> str:
        return self.to_line()


@dataclass
class TurnInput:
    """
    Referee input for one turn.

    Attributes:
        my_ship_count: Number of our ships still afloat.
        entities: Raw entity records, in report order.
    """
    my_ship_count: int
    entities: List[EntityRecord] = field(default_factory=list)


class IdleMode(Enum):
    """Where ships go when no barrel is in sight."""
    FIXED = "fixed"    # Sail to the configured idle destination
    WANDER = "wander"  # Sail to a random cell on the map


DEFAULT_IDLE_DESTINATION = OffsetCoord(0, 0)

# Every on-map cell, row by row; wander destinations are drawn from these
MAP_CELLS = tuple(
    OffsetCoord(x, y) for y in range(MAP_HEIGHT) for x in range(MAP_WIDTH)
)


# =============================================================================
# CAPTAIN
# =============================================================================

class Captain:
    """
    Turn controller for our fleet.

    The cooldown is shared by the whole fleet: after any ship fires, the
    rest of the fleet moves until the cannon is ready again.

    Example:
        >>> captain = Captain()
        >>> for command in captain.play_turn(turn):
        ...     print(command.to_line())
    """

    def __init__(
        self,
        rng: Optional[SeededRandom] = None,
        lead_calculator: Optional[LeadCalculator] = None,
        cooldown: int = COOLDOWN_CANNON,
        idle_destination: OffsetCoord = DEFAULT_IDLE_DESTINATION,
        idle_mode: IdleMode = IdleMode.FIXED,
        reload_turns: int = COOLDOWN_CANNON
    ):
        """
        Initialize the captain.

        Args:
            rng: Random stream for wandering; a default-seeded one if None.
            lead_calculator: Targeting solver; default lead and range if None.
            cooldown: Starting cannon cooldown.
            idle_destination: Fallback destination with no barrel in sight.
            idle_mode: FIXED or WANDER fallback behaviour.
            reload_turns: Cooldown set after each shot.

        Raises:
            ValueError: If cooldown is outside [0, reload_turns].
        """
        if not 0 <= cooldown <= reload_turns:
            raise ValueError(
                f"Cooldown must be in [0, {reload_turns}], got {cooldown}"
            )

        self.rng = rng or SeededRandom()
        self.lead_calculator = lead_calculator or LeadCalculator()
        self.reload_turns = reload_turns
        self.idle_destination = clamp_to_map(idle_destination)
        self.idle_mode = idle_mode
        self.turn = 0
        self._cooldown = cooldown

    @property
    def cooldown(self) -> int:
        """Turns until the cannon can fire again."""
        return self._cooldown

    def tick_cooldown(self) -> int:
        """Count the cooldown down by one turn, stopping at zero."""
        self._cooldown = max(self._cooldown - 1, 0)
        return self._cooldown

    def idle_target(self) -> OffsetCoord:
        """Destination for a ship with no barrel to chase."""
        if self.idle_mode == IdleMode.WANDER:
            return self.rng.choice(MAP_CELLS)
        return self.idle_destination

    def decide(self, ship_index: int, perception: Perception) -> Command:
        """
        Choose the command for one ship.

        Args:
            ship_index: Position of the ship in this turn's report order.
            perception: This turn's snapshot.

        Returns:
            FIRE at the lead point when the cannon is ready and the shot is
            in range, otherwise MOVE.
        """
        shooter = perception.own_ship_at(ship_index)

        if self._cooldown == 0 and shooter is not None and perception.enemy is not None:
            solution = self.lead_calculator.solve(shooter, perception.enemy)
            if solution.can_fire:
                self._cooldown = self.reload_turns
                return Command.fire(solution.aim_point)
            logger.debug(
                "Ship %d: aim point %s out of range (%d)",
                ship_index, solution.aim_point, solution.range_to_target,
            )

        if perception.barrel is not None:
            return Command.move(clamp_to_map(perception.barrel.position))
        return Command.move(self.idle_target())

    def play_turn(self, turn_input: TurnInput) -> List[Command]:
        """
        Play one turn.

        Args:
            turn_input: Referee input for this turn.

        Returns:
            One command per owned ship, in report order. Empty when no
            ships are left.
        """
        self.tick_cooldown()
        perception = perceive_records(turn_input.entities)

        commands = [
            self.decide(index, perception)
            for index in range(max(turn_input.my_ship_count, 0))
        ]

        logger.info(
            "Turn %d: cooldown=%d commands=%s",
            self.turn, self._cooldown, [c.to_line() for c in commands],
        )
        self.turn += 1
        return commands

    def run(
        self,
        turns: Iterable[TurnInput],
        emit: Callable[[List[Command]], None],
        max_turns: int = MAX_TURNS
    ) -> int:
        """
        Run the turn loop.

        Stops after max_turns turns or when the turn source runs dry.

        Args:
            turns: Source of turn inputs, consumed lazily.
            emit: Called with each turn's commands before the next turn
                is read.
            max_turns: Upper bound on turns played.

        Returns:
            Number of turns played.
        """
        played = 0
        if max_turns <= 0:
            return played

        for turn_input in turns:
            emit(self.play_turn(turn_input))
            played += 1
            if played >= max_turns:
                break

        logger.info("Turn loop finished after %d turn(s)", played)
        return played
