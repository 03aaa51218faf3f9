"""hexfleet: decision engine for a hex-grid naval skirmish bot."""

from .hexgrid import (
    # Coordinate types
    OffsetCoord,
    CubeCoord,
    Direction,
    # Errors
    InvalidDirectionError,
    # Functions
    to_cube,
    to_offset,
    distance,
    unit_vector,
    is_inside_map,
)

from .prng import (
    Xorshift128Plus,
    SeededRandom,
    RandomRangeError,
)

from .perception import (
    EntityRecord,
    Ship,
    Barrel,
    OtherEntity,
    Perception,
    perceive,
)

from .targeting import (
    FiringSolution,
    LeadCalculator,
    compute_firing_solution,
)

from .captain import (
    Captain,
    Command,
    CommandType,
    IdleMode,
    TurnInput,
)

__all__ = [
    # Hex grid
    "OffsetCoord",
    "CubeCoord",
    "Direction",
    "InvalidDirectionError",
    "to_cube",
    "to_offset",
    "distance",
    "unit_vector",
    "is_inside_map",
    # Random
    "Xorshift128Plus",
    "SeededRandom",
    "RandomRangeError",
    # Perception
    "EntityRecord",
    "Ship",
    "Barrel",
    "OtherEntity",
    "Perception",
    "perceive",
    # Targeting
    "FiringSolution",
    "LeadCalculator",
    "compute_firing_solution",
    # Captain
    "Captain",
    "Command",
    "CommandType",
    "IdleMode",
    "TurnInput",
]
