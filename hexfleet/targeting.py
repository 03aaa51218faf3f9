"""
Targeting Module for the hexfleet naval skirmish bot.

Implements the cannon lead calculation:
- LeadCalculator: extrapolates the enemy's position along its heading
- FiringSolution: the aim point and whether it is within cannon range

The lead uses a fixed lookahead of LEAD_RANGE hex-steps per unit of enemy
speed rather than the true distance to the target. A predicted point may
fall off the map; it is still converted and range-checked as is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .hexgrid import (
    CubeCoord,
    OffsetCoord,
    distance,
    to_cube,
    to_offset,
    unit_vector,
)
from .perception import EnemyContact
from .rules import FIRE_DISTANCE_MAX

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Turns of enemy travel the shot is led by
LEAD_RANGE = 2


# =============================================================================
# FIRING SOLUTION
# =============================================================================

@dataclass(frozen=True)
class FiringSolution:
    """
    Firing solution against the tracked enemy.

    Attributes:
        can_fire: Whether the aim point is within cannon range.
        predicted_position: Extrapolated enemy cell (cube form).
        aim_point: Predicted cell in offset form, used for the FIRE command.
        range_to_target: Hex distance from the shooter to the aim point.
    """
    can_fire: bool
    predicted_position: CubeCoord
    aim_point: OffsetCoord
    range_to_target: int


# =============================================================================
# LEAD CALCULATION
# =============================================================================

class LeadCalculator:
    """
    Calculates where to aim at a ship moving along a straight heading.

    Example:
        >>> calc = LeadCalculator()
        >>> solution = calc.solve(OffsetCoord(5, 5), enemy)
        >>> if solution.can_fire:
        ...     print(f"FIRE {solution.aim_point.x} {solution.aim_point.y}")
    """

    def __init__(
        self,
        lead_range: int = LEAD_RANGE,
        max_fire_distance: int = FIRE_DISTANCE_MAX
    ):
        self.lead_range = lead_range
        self.max_fire_distance = max_fire_distance

    def predict_position(
        self,
        enemy_position: CubeCoord,
        heading: int,
        speed: int
    ) -> CubeCoord:
        """
        Extrapolate the enemy's position.

        predicted = position + unit(heading) * lead_range * speed

        Args:
            enemy_position: Enemy's current cell.
            heading: Enemy heading (0-5).
            speed: Enemy speed in cells per turn.

        Returns:
            Predicted cell. Equals the current cell when speed is 0.

        Raises:
            InvalidDirectionError: If heading is not in 0..5.
        """
        course = unit_vector(heading)
        return enemy_position + course * (self.lead_range * speed)

    def solve(
        self,
        shooter: OffsetCoord,
        enemy: EnemyContact
    ) -> FiringSolution:
        """
        Compute a firing solution from a shooter position against an enemy.

        Args:
            shooter: Shooter's offset position.
            enemy: Tracked enemy contact.

        Returns:
            FiringSolution; can_fire is False when the aim point is beyond
            max_fire_distance.
        """
        target = enemy.cube
        predicted = self.predict_position(target, enemy.heading, enemy.speed)
        aim_point = to_offset(predicted)
        range_to_target = distance(to_cube(shooter), predicted)

        logger.debug(
            "Lead: target=%s course=%s lead_range=%d predicted=%s aim=%s range=%d",
            target, unit_vector(enemy.heading), self.lead_range,
            predicted, aim_point, range_to_target,
        )

        return FiringSolution(
            can_fire=range_to_target <= self.max_fire_distance,
            predicted_position=predicted,
            aim_point=aim_point,
            range_to_target=range_to_target,
        )


def compute_firing_solution(
    shooter: OffsetCoord,
    enemy: EnemyContact,
    lead_range: int = LEAD_RANGE,
    max_fire_distance: int = FIRE_DISTANCE_MAX
) -> Optional[FiringSolution]:
    """
    Firing solution if a shot fired now is in range, else None.

    Args:
        shooter: Shooter's offset position.
        enemy: Tracked enemy contact.
        lead_range: Lookahead in hex-steps per unit of enemy speed.
        max_fire_distance: Maximum hex distance to the aim point.

    Returns:
        FiringSolution with can_fire True, or None.
    """
    solution = LeadCalculator(lead_range, max_fire_distance).solve(shooter, enemy)
    return solution if solution.can_fire else None
