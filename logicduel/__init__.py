"""
LogicDuel - Puzzle-combat engine

A deterministic engine for a turn-based puzzle battle. The player fills a
6x6 grid with 2x3 boxes and every legal digit strikes a scripted enemy.
The engine provides:
- Randomized puzzle generation and move validation
- Pure combat transitions over an explicit state
- Session orchestration (turn order, undo, win/lose)
"""

__version__ = "0.1.0"
