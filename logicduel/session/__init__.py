"""
Session Module - Turn orchestration for one fight.

A session represents one play-through:
- Created with a freshly generated puzzle
- Holds the user grid, combat state, relics and undo history
- Resolves each move in a fixed order
- Restarted in place or dropped when the caller is done

Sessions are in-memory only. Nothing is persisted.
"""

from .outcome import MoveOutcome, OutcomeKind, Terminal
from .snapshot import SessionSnapshot, CombatStateInfo, RelicInfo
from .game_session import GameSession, apply_move, undo, get_state
from .manager import SessionManager, ManagedSession

__all__ = [
    "MoveOutcome",
    "OutcomeKind",
    "Terminal",
    "SessionSnapshot",
    "CombatStateInfo",
    "RelicInfo",
    "GameSession",
    "apply_move",
    "undo",
    "get_state",
    "SessionManager",
    "ManagedSession",
]
