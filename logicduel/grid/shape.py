"""Grid geometry: size and the rectangular boxes that tile it."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator

Grid = list[list[int]]
Cell = tuple[int, int]

EMPTY = 0


@dataclass(frozen=True)
class GridShape:
    """
    An N x N grid partitioned into box_rows x box_cols boxes.

    The default game uses N=6 with 2x3 boxes, six boxes in total.
    """
    size: int = 6
    box_rows: int = 2
    box_cols: int = 3

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"Grid size must be positive, got {self.size}")
        if self.box_rows * self.box_cols != self.size:
            raise ValueError(
                f"Box {self.box_rows}x{self.box_cols} must hold exactly {self.size} cells"
            )
        if self.size % self.box_rows or self.size % self.box_cols:
            raise ValueError(
                f"Box {self.box_rows}x{self.box_cols} does not tile a {self.size}x{self.size} grid"
            )

    @property
    def digits(self) -> range:
        return range(1, self.size + 1)

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def box_of(self, row: int, col: int) -> tuple[int, int]:
        """Return (box_row, box_col) index of the box holding a cell."""
        return row // self.box_rows, col // self.box_cols

    def box_cells(self, box_row: int, box_col: int) -> Iterator[Cell]:
        start_row = box_row * self.box_rows
        start_col = box_col * self.box_cols
        for r in range(start_row, start_row + self.box_rows):
            for c in range(start_col, start_col + self.box_cols):
                yield r, c

    def cells(self) -> Iterator[Cell]:
        """All coordinates in row-major order."""
        for r in range(self.size):
            for c in range(self.size):
                yield r, c

    def empty_grid(self) -> Grid:
        return [[EMPTY] * self.size for _ in range(self.size)]


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]
