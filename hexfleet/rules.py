"""
Game Rules for the hexfleet naval skirmish bot.

Fixed constants of the pirate skirmish arena. Values mirror the referee's
published rules; the ones the decision logic does not act on yet are kept so
the whole rule set lives in one place.
"""

# =============================================================================
# MAP
# =============================================================================

MAP_WIDTH = 23
MAP_HEIGHT = 21


# =============================================================================
# COOLDOWNS (turns)
# =============================================================================

COOLDOWN_CANNON = 2
COOLDOWN_MINE = 5


# =============================================================================
# SHIPS
# =============================================================================

INITIAL_SHIP_HEALTH = 100
MAX_SHIP_HEALTH = 100
MIN_SHIPS = 1


# =============================================================================
# RUM BARRELS
# =============================================================================

MIN_RUM_BARRELS = 10
MAX_RUM_BARRELS = 26
MIN_RUM_BARREL_VALUE = 10
MAX_RUM_BARREL_VALUE = 20
REWARD_RUM_BARREL_VALUE = 30


# =============================================================================
# WEAPONS
# =============================================================================

MINE_VISIBILITY_RANGE = 5
FIRE_DISTANCE_MAX = 10  # hex-steps from shooter to aim point
LOW_DAMAGE = 25
HIGH_DAMAGE = 50
MINE_DAMAGE = 25
NEAR_MINE_DAMAGE = 10


# =============================================================================
# TURN LOOP
# =============================================================================

MAX_TURNS = 200
