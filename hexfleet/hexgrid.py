"""
Hexagonal Grid Module for the hexfleet naval skirmish bot.

Implements the two coordinate systems of the arena:
- OffsetCoord: (col, row) pairs used by the map and the referee protocol
- CubeCoord: (x, y, z) triples with x + y + z = 0 for exact hex math

The map uses "odd-r" offset layout: odd rows are shifted half a cell to the
right. Conversion between the two systems is total over all integers, so
points off the map convert just as well as points on it.

Directions are numbered clockwise from RIGHT the way the referee reports a
ship's heading:

        2   1
      3   *   0
        4   5
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .rules import MAP_HEIGHT, MAP_WIDTH


# =============================================================================
# EXCEPTIONS
# =============================================================================

class InvalidDirectionError(ValueError):
    """Raised when a direction index falls outside 0..5."""


# =============================================================================
# COORDINATE TYPES
# =============================================================================

@dataclass(frozen=True)
class OffsetCoord:
    """
    Map cell in offset (column, row) form.

    Attributes:
        x: Column, 0 at the left edge.
        y: Row, 0 at the top edge.
    """
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class CubeCoord:
    """
    Hex cell (or hex offset vector) in cube form.

    The three axes always sum to zero; anything else is not a hex cell.
    Supports vector addition, subtraction, negation and integer scaling.

    Attributes:
        x: Cube x axis.
        y: Cube y axis.
        z: Cube z axis (equals the offset row).
    """
    x: int
    y: int
    z: int

    def __post_init__(self) -> None:
        """Reject triples that break the zero-sum invariant."""
        if self.x + self.y + self.z != 0:
            raise ValueError(
                f"Cube coordinate ({self.x}, {self.y}, {self.z}) must sum to zero"
            )

    def __add__(self, other: CubeCoord) -> CubeCoord:
        """Vector addition."""
        return CubeCoord(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: CubeCoord) -> CubeCoord:
        """Vector subtraction."""
        return CubeCoord(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: int) -> CubeCoord:
        """Integer scaling."""
        return CubeCoord(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: int) -> CubeCoord:
        return self.__mul__(scalar)

    def __neg__(self) -> CubeCoord:
        return CubeCoord(-self.x, -self.y, -self.z)

    def distance_to(self, other: CubeCoord) -> int:
        """Number of single hex steps to another cell."""
        return distance(self, other)

    def __str__(self) -> str:
        return f"cube({self.x}, {self.y}, {self.z})"


ORIGIN = CubeCoord(0, 0, 0)


# =============================================================================
# DIRECTIONS
# =============================================================================

class Direction(IntEnum):
    """Ship headings, clockwise from RIGHT as reported by the referee."""
    RIGHT = 0
    UP_RIGHT = 1
    UP_LEFT = 2
    LEFT = 3
    DOWN_LEFT = 4
    DOWN_RIGHT = 5


DIRECTION_VECTORS = {
    Direction.RIGHT: CubeCoord(1, -1, 0),
    Direction.UP_RIGHT: CubeCoord(1, 0, -1),
    Direction.UP_LEFT: CubeCoord(0, 1, -1),
    Direction.LEFT: CubeCoord(-1, 1, 0),
    Direction.DOWN_LEFT: CubeCoord(-1, 0, 1),
    Direction.DOWN_RIGHT: CubeCoord(0, -1, 1),
}


def to_direction(index: int) -> Direction:
    """
    Convert a raw heading index to a Direction.

    Args:
        index: Heading as reported by the referee (0-5).

    Returns:
        The matching Direction.

    Raises:
        InvalidDirectionError: If index is not in 0..5.
    """
    try:
        return Direction(index)
    except ValueError:
        raise InvalidDirectionError(
            f"Direction index must be in 0..5, got {index!r}"
        ) from None


def unit_vector(direction: int) -> CubeCoord:
    """
    Unit cube vector for a heading.

    Args:
        direction: A Direction or a raw index 0..5.

    Returns:
        CubeCoord one step away from the origin in that direction.

    Raises:
        InvalidDirectionError: If direction is not in 0..5.
    """
    return DIRECTION_VECTORS[to_direction(direction)]


# =============================================================================
# CONVERSION AND ARITHMETIC
# =============================================================================

def to_cube(offset: OffsetCoord) -> CubeCoord:
    """
    Convert an odd-r offset coordinate to cube form.

    Args:
        offset: Map cell in (col, row) form.

    Returns:
        Equivalent cube coordinate.
    """
    x = offset.x - (offset.y - (offset.y & 1)) // 2
    z = offset.y
    return CubeCoord(x, -(x + z), z)


def to_offset(cube: CubeCoord) -> OffsetCoord:
    """
    Convert a cube coordinate to odd-r offset form.

    Args:
        cube: Hex cell in cube form.

    Returns:
        Equivalent (col, row) coordinate. May lie outside the map.
    """
    return OffsetCoord(cube.x + (cube.z - (cube.z & 1)) // 2, cube.z)


def add(a: CubeCoord, b: CubeCoord) -> CubeCoord:
    """Component-wise sum of two cube coordinates."""
    return a + b


def scale(vector: CubeCoord, factor: int) -> CubeCoord:
    """Component-wise integer scaling of a cube vector."""
    return vector * factor


def distance(a: CubeCoord, b: CubeCoord) -> int:
    """
    Hex distance between two cells.

    Half the Manhattan distance in cube space; the zero-sum invariant makes
    the sum of absolute differences always even.

    Args:
        a: First cell.
        b: Second cell.

    Returns:
        Minimum number of single-step moves between a and b.
    """
    return (abs(a.x - b.x) + abs(a.y - b.y) + abs(a.z - b.z)) // 2


def neighbor(cube: CubeCoord, direction: int) -> CubeCoord:
    """Adjacent cell in the given direction."""
    return cube + unit_vector(direction)


# =============================================================================
# MAP BOUNDS
# =============================================================================

def is_inside_map(
    offset: OffsetCoord,
    width: int = MAP_WIDTH,
    height: int = MAP_HEIGHT
) -> bool:
    """
    Check whether an offset coordinate lies on the map.

    Args:
        offset: Cell to check.
        width: Map width in columns.
        height: Map height in rows.

    Returns:
        True if 0 <= x < width and 0 <= y < height.
    """
    return 0 <= offset.x < width and 0 <= offset.y < height


def clamp_to_map(
    offset: OffsetCoord,
    width: int = MAP_WIDTH,
    height: int = MAP_HEIGHT
) -> OffsetCoord:
    """Nearest on-map offset coordinate (per axis)."""
    return OffsetCoord(
        max(0, min(width - 1, offset.x)),
        max(0, min(height - 1, offset.y)),
    )
