"""
Grid Generator - Randomized backtracking fill and puzzle carving.

Two steps:
  1. Fill: depth-first search over cells in row-major order, trying the
     digits in a freshly shuffled order at every cell.
  2. Carve: zero a random subset of cells in a copy of the solution.

Carving does not check that the puzzle has a unique completion. Play is
validated against the live grid, never against the stored solution.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random

from ..exceptions import GenerationError
from ..utils.logger import get_logger
from .shape import EMPTY, Cell, Grid, GridShape, copy_grid
from .validator import MoveValidator

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Puzzle:
    """A solved grid and the holed snapshot handed to the player."""
    solution: Grid
    puzzle: Grid

    @property
    def fixed_cells(self) -> frozenset[Cell]:
        return frozenset(
            (r, c)
            for r, row in enumerate(self.puzzle)
            for c, value in enumerate(row)
            if value != EMPTY
        )

    @property
    def hole_count(self) -> int:
        return sum(1 for row in self.puzzle for value in row if value == EMPTY)


@dataclass
class GridGenerator:
    """
    Produces solved grids and puzzles for one grid shape.

    All randomness comes from rng, so a seeded random.Random makes
    generation reproducible.
    """
    shape: GridShape = field(default_factory=GridShape)
    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self):
        self.validator = MoveValidator(self.shape)

    def generate_complete(self) -> Grid:
        """
        Return a fully solved grid.

        Raises GenerationError if the search exhausts every candidate at
        the root instead of returning a partially filled grid.
        """
        grid = self.shape.empty_grid()
        if not self.fill_grid(grid):
            raise GenerationError(
                f"Backtracking exhausted all candidates for a {self.shape.size}x{self.shape.size} "
                f"grid with {self.shape.box_rows}x{self.shape.box_cols} boxes"
            )
        return grid

    def fill_grid(self, grid: Grid) -> bool:
        """Fill grid in place. Returns False when no completion exists."""
        empty = self.find_empty(grid)
        if empty is None:
            return True

        row, col = empty
        for num in self.shuffled(self.shape.digits):
            if self.validator.is_valid(grid, row, col, num):
                grid[row][col] = num
                if self.fill_grid(grid):
                    return True
                grid[row][col] = EMPTY
        return False

    def find_empty(self, grid: Grid) -> Cell | None:
        for r, c in self.shape.cells():
            if grid[r][c] == EMPTY:
                return r, c
        return None

    def create_puzzle(self, holes: int) -> Puzzle:
        """Generate a solution and zero min(holes, N*N) random cells in a copy."""
        solution = self.generate_complete()
        puzzle = copy_grid(solution)

        positions = self.shuffled(self.shape.cells())
        count = min(max(holes, 0), len(positions))
        for row, col in positions[:count]:
            puzzle[row][col] = EMPTY

        LOGGER.debug("Carved %d holes from a %dx%d solution", count, self.shape.size, self.shape.size)
        return Puzzle(solution=solution, puzzle=puzzle)

    def shuffled(self, items) -> list:
        """Uniform random permutation (random.Random.shuffle is Fisher-Yates)."""
        items = list(items)
        self.rng.shuffle(items)
        return items


def generate_puzzle(
    size: int = 6,
    box_dims: tuple[int, int] = (2, 3),
    hole_count: int = 18,
    rng: random.Random | None = None,
    retry_limit: int = 3,
) -> Puzzle:
    """
    Convenience function to build a puzzle.

    Retries generation up to retry_limit times and re-raises the last
    GenerationError if every attempt fails.
    """
    shape = GridShape(size=size, box_rows=box_dims[0], box_cols=box_dims[1])
    generator = GridGenerator(shape=shape, rng=rng or random.Random())

    last_error: GenerationError | None = None
    for attempt in range(1, retry_limit + 1):
        LOGGER.debug("Generation attempt %s/%s", attempt, retry_limit)
        try:
            puzzle = generator.create_puzzle(hole_count)
        except GenerationError as exc:
            LOGGER.warning("Generation attempt failed: %s", exc)
            last_error = exc
            continue
        LOGGER.info("Generated %dx%d puzzle with %d holes", size, size, puzzle.hole_count)
        return puzzle

    raise last_error or GenerationError("Unable to generate a puzzle: retry_limit must be >= 1")
