"""
Pytest fixtures for LogicDuel tests.
"""

import random

import pytest

from ..config import CombatConfig, GameConfig
from ..engine_core.combat import CombatEngine
from ..engine_core.state import CombatState
from ..grid.generator import Puzzle
from ..grid.shape import GridShape, copy_grid
from ..session.game_session import GameSession


# A valid 6x6 grid with 2x3 boxes
KNOWN_SOLUTION = [
    [1, 2, 3, 4, 5, 6],
    [4, 5, 6, 1, 2, 3],
    [2, 3, 1, 5, 6, 4],
    [5, 6, 4, 2, 3, 1],
    [3, 1, 2, 6, 4, 5],
    [6, 4, 5, 3, 1, 2],
]


class StubRandom(random.Random):
    """Random source whose random() always returns the same value."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def make_puzzle(holes, solution=None) -> Puzzle:
    """Carve the given cells out of a solution."""
    solution = copy_grid(solution or KNOWN_SOLUTION)
    puzzle = copy_grid(solution)
    for row, col in holes:
        puzzle[row][col] = 0
    return Puzzle(solution=solution, puzzle=puzzle)


@pytest.fixture
def known_solution():
    return copy_grid(KNOWN_SOLUTION)


@pytest.fixture
def shape() -> GridShape:
    return GridShape()


@pytest.fixture
def combat_config() -> CombatConfig:
    return CombatConfig()


@pytest.fixture
def engine(combat_config, shape) -> CombatEngine:
    """Engine whose crit roll never succeeds."""
    return CombatEngine(config=combat_config, shape=shape, rng=StubRandom(0.99))


@pytest.fixture
def crit_engine(combat_config, shape) -> CombatEngine:
    """Engine whose crit roll always succeeds."""
    return CombatEngine(config=combat_config, shape=shape, rng=StubRandom(0.0))


@pytest.fixture
def fresh_state(combat_config) -> CombatState:
    return CombatState.initial(combat_config)


@pytest.fixture
def seeded_session() -> GameSession:
    """A generated session with a fixed seed."""
    return GameSession(config=GameConfig(seed=1234))


@pytest.fixture
def box_session() -> GameSession:
    """
    Session where filling (0,0) completes only the top-left box and
    filling (3,3) completes nothing.
    """
    holes = [(0, 0), (0, 3), (2, 0), (3, 3), (3, 4), (4, 3)]
    return GameSession.from_puzzle(make_puzzle(holes), rng=StubRandom(0.99))


@pytest.fixture
def goldbach_session() -> GameSession:
    """Session with holes at (1,0)=4 and (1,2)=6 for sum-to-10 fills."""
    holes = [(1, 0), (1, 2), (3, 0), (3, 2)]
    return GameSession.from_puzzle(make_puzzle(holes), rng=StubRandom(0.99))


@pytest.fixture
def empty_session() -> GameSession:
    """Session on a completely empty grid."""
    all_cells = [(r, c) for r in range(6) for c in range(6)]
    return GameSession.from_puzzle(make_puzzle(all_cells), rng=StubRandom(0.99))
