"""
Move Validator - Row, column and box uniqueness checks.

Stateless: every check reads the grid it is given. Used by the generator
while filling (the target cell is still empty) and by the session during
play (the target cell may hold the value being replaced, so it is excluded).
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .shape import EMPTY, Grid, GridShape


@dataclass(frozen=True)
class MoveValidator:
    """Checks digit placements against one grid shape."""
    shape: GridShape = field(default_factory=GridShape)

    def is_valid_move(
        self,
        grid: Grid,
        row: int,
        col: int,
        num: int,
        exclude_self: bool = True,
    ) -> bool:
        """
        True iff num does not already occur in the row, column or box.

        With exclude_self the target cell itself is ignored, so re-checking
        an in-place edit compares only against the rest of the grid.
        """
        size = self.shape.size

        for c in range(size):
            if exclude_self and c == col:
                continue
            if grid[row][c] == num:
                return False

        for r in range(size):
            if exclude_self and r == row:
                continue
            if grid[r][col] == num:
                return False

        box_row, box_col = self.shape.box_of(row, col)
        for r, c in self.shape.box_cells(box_row, box_col):
            if exclude_self and (r, c) == (row, col):
                continue
            if grid[r][c] == num:
                return False

        return True

    def is_valid(self, grid: Grid, row: int, col: int, num: int) -> bool:
        """Generation-time check: nothing is excluded."""
        return self.is_valid_move(grid, row, col, num, exclude_self=False)

    def candidates(self, grid: Grid, row: int, col: int) -> tuple[int, ...]:
        """Digits that could legally go into a cell right now."""
        return tuple(
            num for num in self.shape.digits
            if self.is_valid_move(grid, row, col, num, exclude_self=True)
        )

    def is_solved(self, grid: Grid) -> bool:
        """True iff the grid is full and every placement is legal."""
        for r, c in self.shape.cells():
            value = grid[r][c]
            if value == EMPTY or not self.is_valid_move(grid, r, c, value):
                return False
        return True


def validate_move(
    grid: Grid,
    row: int,
    col: int,
    num: int,
    box_dims: tuple[int, int] = (2, 3),
) -> bool:
    """
    Convenience function to validate a placement.

    Builds a MoveValidator for the grid's size and box dimensions.
    """
    shape = GridShape(size=len(grid), box_rows=box_dims[0], box_cols=box_dims[1])
    return MoveValidator(shape).is_valid_move(grid, row, col, num, exclude_self=True)
