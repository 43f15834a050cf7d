"""
Tests for grid generation and move validation.

Tests:
- Generated solutions satisfy row, column and box uniqueness
- Carving removes exactly the requested number of cells
- Seeded generation is reproducible
- Failure propagates instead of returning a partial grid
"""

import random

import pytest

from ..exceptions import GenerationError
from ..grid.generator import GridGenerator, Puzzle, generate_puzzle
from ..grid.shape import GridShape
from ..grid.validator import MoveValidator, validate_move


def assert_valid_solution(grid, shape):
    digits = set(shape.digits)
    for r in range(shape.size):
        assert set(grid[r]) == digits
    for c in range(shape.size):
        assert {grid[r][c] for r in range(shape.size)} == digits
    for box_row in range(shape.size // shape.box_rows):
        for box_col in range(shape.size // shape.box_cols):
            values = {grid[r][c] for r, c in shape.box_cells(box_row, box_col)}
            assert values == digits


class TestGridShape:
    """Tests for grid geometry."""

    def test_default_shape_has_six_boxes(self, shape):
        """2x3 boxes tile the 6x6 grid exactly."""
        boxes = {shape.box_of(r, c) for r, c in shape.cells()}
        assert len(boxes) == 6
        assert all(len(list(shape.box_cells(*box))) == 6 for box in boxes)

    def test_box_of(self, shape):
        """Cells map to the box holding them."""
        assert shape.box_of(0, 0) == (0, 0)
        assert shape.box_of(1, 2) == (0, 0)
        assert shape.box_of(1, 3) == (0, 1)
        assert shape.box_of(5, 5) == (2, 1)

    def test_mismatched_box_rejected(self):
        """Box dimensions that cannot tile the grid are rejected."""
        with pytest.raises(ValueError):
            GridShape(size=6, box_rows=2, box_cols=2)


class TestGenerateComplete:
    """Tests for the backtracking fill."""

    @pytest.mark.parametrize("seed", [0, 1, 7, 42, 2024])
    def test_solution_is_valid(self, seed, shape):
        """Every row, column and box holds 1..6 exactly once."""
        generator = GridGenerator(shape=shape, rng=random.Random(seed))
        grid = generator.generate_complete()
        assert_valid_solution(grid, shape)

    def test_same_seed_same_grid(self, shape):
        """Generation is reproducible with a seeded rng."""
        a = GridGenerator(shape=shape, rng=random.Random(99)).generate_complete()
        b = GridGenerator(shape=shape, rng=random.Random(99)).generate_complete()
        assert a == b

    def test_fill_reports_failure(self, shape):
        """An unsatisfiable partial grid returns False and is left unfilled."""
        generator = GridGenerator(shape=shape, rng=random.Random(0))
        grid = shape.empty_grid()
        grid[0] = [1, 2, 3, 4, 5, 0]
        grid[1][5] = 6  # (0,5) can only be 6, but column 5 already has it
        assert generator.fill_grid(grid) is False
        assert grid[0][5] == 0

    def test_generate_complete_raises_on_failure(self, shape, monkeypatch):
        """A failed search raises GenerationError instead of returning a partial grid."""
        generator = GridGenerator(shape=shape, rng=random.Random(0))
        monkeypatch.setattr(generator, "fill_grid", lambda grid: False)
        with pytest.raises(GenerationError):
            generator.generate_complete()


class TestCreatePuzzle:
    """Tests for carving."""

    @pytest.mark.parametrize("holes", [0, 1, 18, 35, 36])
    def test_exact_hole_count(self, holes, shape):
        """The puzzle differs from the solution at exactly `holes` zeroed cells."""
        generator = GridGenerator(shape=shape, rng=random.Random(holes))
        result = generator.create_puzzle(holes)

        zeroed = 0
        for r, c in shape.cells():
            if result.puzzle[r][c] == 0:
                zeroed += 1
            else:
                assert result.puzzle[r][c] == result.solution[r][c]
        assert zeroed == holes
        assert result.hole_count == holes

    def test_holes_capped_at_cell_count(self, shape):
        """Asking for more holes than cells empties the grid."""
        result = GridGenerator(shape=shape, rng=random.Random(3)).create_puzzle(100)
        assert result.hole_count == 36
        assert result.fixed_cells == frozenset()

    def test_fixed_cells_are_non_zero_cells(self, shape):
        """Fixed cells are exactly the pre-filled cells."""
        result = GridGenerator(shape=shape, rng=random.Random(5)).create_puzzle(18)
        assert len(result.fixed_cells) == 18
        for r, c in result.fixed_cells:
            assert result.puzzle[r][c] != 0

    def test_solution_not_aliased(self, shape):
        """Carving works on a copy of the solution."""
        result = GridGenerator(shape=shape, rng=random.Random(8)).create_puzzle(18)
        assert_valid_solution(result.solution, shape)


class TestGeneratePuzzle:
    """Tests for the module-level generate_puzzle."""

    def test_defaults(self):
        """Default call builds a 6x6 puzzle with 18 holes."""
        result = generate_puzzle(rng=random.Random(11))
        assert isinstance(result, Puzzle)
        assert len(result.solution) == 6
        assert result.hole_count == 18

    def test_seeded_reproducible(self):
        """Same seed, same puzzle."""
        a = generate_puzzle(6, (2, 3), 18, random.Random(5))
        b = generate_puzzle(6, (2, 3), 18, random.Random(5))
        assert a == b

    def test_retries_then_raises(self, monkeypatch):
        """Each attempt is retried up to retry_limit, then the error propagates."""
        calls = []

        def failing_create(self, holes):
            calls.append(holes)
            raise GenerationError("no completion")

        monkeypatch.setattr(GridGenerator, "create_puzzle", failing_create)
        with pytest.raises(GenerationError):
            generate_puzzle(rng=random.Random(0), retry_limit=3)
        assert len(calls) == 3


class TestMoveValidator:
    """Tests for placement rules."""

    def test_solution_values_valid_others_invalid(self, known_solution, shape):
        """Each cell accepts only its own value against a full solution."""
        validator = MoveValidator(shape)
        for r, c in shape.cells():
            for num in shape.digits:
                expected = num == known_solution[r][c]
                assert validator.is_valid_move(known_solution, r, c, num, exclude_self=True) is expected

    def test_row_conflict(self, shape):
        validator = MoveValidator(shape)
        grid = shape.empty_grid()
        grid[0][5] = 4
        assert not validator.is_valid_move(grid, 0, 0, 4)

    def test_column_conflict(self, shape):
        validator = MoveValidator(shape)
        grid = shape.empty_grid()
        grid[5][0] = 4
        assert not validator.is_valid_move(grid, 0, 0, 4)

    def test_box_conflict(self, shape):
        """A digit elsewhere in the 2x3 box blocks the placement."""
        validator = MoveValidator(shape)
        grid = shape.empty_grid()
        grid[1][2] = 4
        assert not validator.is_valid_move(grid, 0, 0, 4)
        assert validator.is_valid_move(grid, 0, 3, 4)

    def test_exclude_self(self, shape):
        """Rewriting a cell with its own value is valid only when the cell is excluded."""
        validator = MoveValidator(shape)
        grid = shape.empty_grid()
        grid[2][2] = 3
        assert validator.is_valid_move(grid, 2, 2, 3, exclude_self=True)
        assert not validator.is_valid(grid, 2, 2, 3)

    def test_candidates(self, known_solution, shape):
        """A single hole in a solved grid has exactly one candidate."""
        validator = MoveValidator(shape)
        known_solution[3][4] = 0
        assert validator.candidates(known_solution, 3, 4) == (3,)

    def test_is_solved(self, known_solution, shape):
        validator = MoveValidator(shape)
        assert validator.is_solved(known_solution)
        known_solution[0][0] = 0
        assert not validator.is_solved(known_solution)

    def test_validate_move_function(self, known_solution):
        """validate_move builds the shape from the grid and box dimensions."""
        assert validate_move(known_solution, 0, 0, 1, (2, 3))
        assert not validate_move(known_solution, 0, 0, 2, (2, 3))
