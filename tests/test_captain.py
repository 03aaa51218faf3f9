"""
Tests for the captain (turn controller).

Tests cover:
- Cooldown bookkeeping across turns
- Fire vs move decisions per ship
- Barrel chasing and idle fallback (fixed and wander)
- Turn loop bounds
"""

import pytest

from hexfleet.captain import (
    DEFAULT_IDLE_DESTINATION,
    MAP_CELLS,
    Captain,
    Command,
    CommandType,
    IdleMode,
    TurnInput,
)
from hexfleet.hexgrid import OffsetCoord, is_inside_map
from hexfleet.perception import EntityRecord
from hexfleet.prng import SeededRandom
from hexfleet.rules import COOLDOWN_CANNON, MAP_HEIGHT, MAP_WIDTH


# =============================================================================
# HELPERS
# =============================================================================

def own_ship(entity_id, x, y):
    return EntityRecord(entity_id, "SHIP", x, y, 0, 0, 100, 1)


def enemy_ship(entity_id, x, y, heading=0, speed=1):
    return EntityRecord(entity_id, "SHIP", x, y, heading, speed, 100, 0)


def barrel(entity_id, x, y, rum):
    return EntityRecord(entity_id, "BARREL", x, y, rum, 0, 0, 0)


@pytest.fixture
def duel_turn():
    """One own ship at (5,5), an enemy at (10,5) heading right at speed 1."""
    return TurnInput(
        my_ship_count=1,
        entities=[own_ship(0, 5, 5), enemy_ship(1, 10, 5)],
    )


# =============================================================================
# COMMAND TESTS
# =============================================================================

class TestCommand:
    """Tests for command formatting."""

    def test_move_line(self):
        assert Command.move(OffsetCoord(3, 7)).to_line() == "MOVE 3 7"

    def test_fire_line(self):
        assert Command.fire(OffsetCoord(12, 5)).to_line() == "FIRE 12 5"

    def test_str_is_line(self):
        command = Command(CommandType.FIRE, OffsetCoord(1, 2))
        assert str(command) == "FIRE 1 2"


# =============================================================================
# COOLDOWN TESTS
# =============================================================================

class TestCooldown:
    """Tests for cannon cooldown bookkeeping."""

    @pytest.mark.parametrize("bad", [-1, COOLDOWN_CANNON + 1])
    def test_initial_cooldown_validated(self, bad):
        with pytest.raises(ValueError):
            Captain(cooldown=bad)

    def test_default_starts_reloading(self):
        assert Captain().cooldown == COOLDOWN_CANNON

    def test_tick_stops_at_zero(self):
        captain = Captain(cooldown=1)
        assert captain.tick_cooldown() == 0
        assert captain.tick_cooldown() == 0
        assert captain.cooldown == 0

    def test_fire_resets_cooldown(self, duel_turn):
        captain = Captain(cooldown=0)
        commands = captain.play_turn(duel_turn)
        assert commands == [Command.fire(OffsetCoord(12, 5))]
        assert captain.cooldown == COOLDOWN_CANNON

    def test_fires_every_other_turn(self, duel_turn):
        """After a shot the cooldown counts down one per turn before the next."""
        captain = Captain(cooldown=0)
        kinds = []
        cooldowns = []
        for _ in range(6):
            kinds.append(captain.play_turn(duel_turn)[0].command_type)
            cooldowns.append(captain.cooldown)

        assert kinds == [CommandType.FIRE, CommandType.MOVE] * 3
        assert cooldowns == [2, 1] * 3

    def test_default_captain_waits_before_first_shot(self, duel_turn):
        captain = Captain()
        assert captain.play_turn(duel_turn)[0].command_type == CommandType.MOVE
        assert captain.play_turn(duel_turn)[0].command_type == CommandType.FIRE

    def test_cooldown_decrements_without_ships(self):
        captain = Captain(cooldown=2)
        assert captain.play_turn(TurnInput(my_ship_count=0)) == []
        assert captain.cooldown == 1

    def test_cooldown_never_negative(self, duel_turn):
        captain = Captain(cooldown=0)
        empty = TurnInput(my_ship_count=1)
        for turn in [empty, duel_turn, empty, empty, duel_turn, empty]:
            captain.play_turn(turn)
            assert 0 <= captain.cooldown <= COOLDOWN_CANNON


# =============================================================================
# DECISION TESTS
# =============================================================================

class TestDecisions:
    """Tests for per-ship fire/move decisions."""

    def test_no_entities_moves_to_idle(self):
        """Nothing in sight and cannon reloading: sail to the idle destination."""
        captain = Captain(cooldown=2)
        commands = captain.play_turn(TurnInput(my_ship_count=1))
        assert commands == [Command.move(DEFAULT_IDLE_DESTINATION)]
        assert commands[0].to_line() == "MOVE 0 0"

    def test_moves_to_richest_barrel(self):
        captain = Captain(cooldown=2)
        turn = TurnInput(
            my_ship_count=1,
            entities=[own_ship(0, 5, 5), barrel(3, 2, 2, 12), barrel(4, 14, 9, 18)],
        )
        assert captain.play_turn(turn) == [Command.move(OffsetCoord(14, 9))]

    def test_out_of_range_enemy_moves(self):
        captain = Captain(cooldown=0)
        turn = TurnInput(
            my_ship_count=1,
            entities=[own_ship(0, 0, 0), enemy_ship(1, 20, 18), barrel(2, 3, 3, 10)],
        )
        assert captain.play_turn(turn) == [Command.move(OffsetCoord(3, 3))]
        assert captain.cooldown == 0

    def test_cannot_fire_without_own_position(self):
        captain = Captain(cooldown=0)
        turn = TurnInput(my_ship_count=1, entities=[enemy_ship(1, 10, 5)])
        assert captain.play_turn(turn)[0].command_type == CommandType.MOVE

    def test_one_shot_per_fleet_per_reload(self):
        """Two ships in range: the first fires, the second moves."""
        captain = Captain(cooldown=0)
        turn = TurnInput(
            my_ship_count=2,
            entities=[own_ship(0, 5, 5), own_ship(2, 6, 6), enemy_ship(1, 10, 5), barrel(3, 1, 1, 10)],
        )
        assert captain.play_turn(turn) == [
            Command.fire(OffsetCoord(12, 5)),
            Command.move(OffsetCoord(1, 1)),
        ]

    def test_each_ship_uses_own_position(self):
        """A far ship moves, and the next ship in range still gets to fire."""
        captain = Captain(cooldown=0)
        turn = TurnInput(
            my_ship_count=2,
            entities=[own_ship(0, 0, 0), own_ship(2, 5, 5), enemy_ship(1, 10, 5)],
        )
        commands = captain.play_turn(turn)
        assert [c.command_type for c in commands] == [CommandType.MOVE, CommandType.FIRE]

    def test_command_count_matches_ship_count(self):
        """Reported ship count wins over the own ships actually listed."""
        captain = Captain(cooldown=2)
        turn = TurnInput(my_ship_count=3, entities=[own_ship(0, 5, 5)])
        assert len(captain.play_turn(turn)) == 3

    def test_idle_destination_clamped_to_map(self):
        captain = Captain(idle_destination=OffsetCoord(40, -2))
        assert captain.idle_destination == OffsetCoord(22, 0)

    def test_wander_stays_on_map(self):
        captain = Captain(rng=SeededRandom(5, 9), idle_mode=IdleMode.WANDER)
        for _ in range(200):
            (command,) = captain.play_turn(TurnInput(my_ship_count=1))
            assert command.command_type == CommandType.MOVE
            assert is_inside_map(command.target)

    def test_wander_draws_from_map_cells(self):
        """Wander destinations follow choice() over the map cells."""
        expected_rng = SeededRandom(5, 9)
        expected = [expected_rng.choice(MAP_CELLS) for _ in range(10)]

        captain = Captain(rng=SeededRandom(5, 9), idle_mode=IdleMode.WANDER)
        targets = [captain.play_turn(TurnInput(my_ship_count=1))[0].target for _ in range(10)]
        assert targets == expected

    def test_map_cells_cover_the_map(self):
        assert len(MAP_CELLS) == MAP_WIDTH * MAP_HEIGHT
        assert len(set(MAP_CELLS)) == len(MAP_CELLS)
        assert all(is_inside_map(cell) for cell in MAP_CELLS)

    def test_empty_barrel_falls_back_to_idle(self):
        captain = Captain()
        turn = TurnInput(my_ship_count=1, entities=[own_ship(0, 5, 5), barrel(2, 9, 9, 0)])
        assert captain.play_turn(turn) == [Command.move(DEFAULT_IDLE_DESTINATION)]

    def test_wander_is_reproducible(self):
        def destinations(seed0, seed1):
            captain = Captain(rng=SeededRandom(seed0, seed1), idle_mode=IdleMode.WANDER)
            return [captain.play_turn(TurnInput(my_ship_count=1))[0].target for _ in range(20)]

        assert destinations(5, 9) == destinations(5, 9)


# =============================================================================
# TURN LOOP TESTS
# =============================================================================

class TestRun:
    """Tests for the bounded turn loop."""

    def test_stops_at_max_turns(self, duel_turn):
        emitted = []
        played = Captain().run(iter([duel_turn] * 10), emitted.append, max_turns=4)
        assert played == 4
        assert len(emitted) == 4

    def test_does_not_read_past_max_turns(self, duel_turn):
        consumed = []

        def source():
            for i in range(10):
                consumed.append(i)
                yield duel_turn

        Captain().run(source(), lambda commands: None, max_turns=3)
        assert consumed == [0, 1, 2]

    def test_stops_when_source_exhausted(self, duel_turn):
        emitted = []
        played = Captain().run([duel_turn, TurnInput(my_ship_count=0)], emitted.append)
        assert played == 2
        assert emitted[1] == []

    def test_zero_max_turns(self, duel_turn):
        assert Captain().run([duel_turn], lambda commands: None, max_turns=0) == 0

    def test_turn_counter_advances(self, duel_turn):
        captain = Captain()
        captain.run([duel_turn] * 3, lambda commands: None)
        assert captain.turn == 3
