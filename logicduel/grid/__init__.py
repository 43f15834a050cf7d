"""
Grid - Puzzle generation and placement rules.

The grid layer has no combat knowledge:
1. GridShape describes the N x N grid and its boxes
2. MoveValidator checks row/column/box uniqueness
3. GridGenerator fills a solution and carves a puzzle
"""

from .shape import EMPTY, Grid, Cell, GridShape, copy_grid
from .validator import MoveValidator, validate_move
from .generator import GridGenerator, Puzzle, generate_puzzle

__all__ = [
    "EMPTY",
    "Grid",
    "Cell",
    "GridShape",
    "copy_grid",
    "MoveValidator",
    "validate_move",
    "GridGenerator",
    "Puzzle",
    "generate_puzzle",
]
