"""Shared test fixtures for Shadow Realm tests."""

from collections import deque

import pytest

from realm import (
    Board,
    DiceRoller,
    GameConfig,
    Player,
    Tile,
    TileType,
    TurnEngine,
    create_session,
)


class ScriptedRandom:
    """Stand-in for random.Random that hands out queued values in order."""

    def __init__(self, *values):
        self.values = deque(values)
        self.calls = 0

    def push(self, *values):
        self.values.extend(values)

    def randint(self, a, b):
        if not self.values:
            raise AssertionError("ScriptedRandom ran out of values")
        value = self.values.popleft()
        assert a <= value <= b, f"scripted value {value} outside [{a}, {b}]"
        self.calls += 1
        return value


def make_board(tile_type=TileType.MONSTER, size=100):
    """Board whose start tile is followed by ``size - 1`` tiles of one type."""
    tiles = [Tile(0, TileType.START, name="Shadow Portal")]
    tiles += [Tile(p, tile_type, name=f"Tile {p}") for p in range(1, size)]
    return Board(tiles, size)


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def scripted():
    return ScriptedRandom()


@pytest.fixture
def engine(scripted):
    """Engine whose dice come from the scripted source."""
    return TurnEngine(dice=DiceRoller(scripted))


@pytest.fixture
def two_players():
    """Two test characters."""
    return [Player("Aria"), Player("Borin")]


@pytest.fixture
def basic_session(game_config, two_players):
    """Active two-player session on the standard board."""
    return create_session(game_config, two_players)


@pytest.fixture
def monster_session(game_config, two_players):
    """Active two-player session where every non-start tile is a monster."""
    return create_session(game_config, two_players, board=make_board(TileType.MONSTER))


@pytest.fixture
def board_of():
    """Factory for single-type boards."""
    return make_board
