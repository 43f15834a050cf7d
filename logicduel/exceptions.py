"""Exception hierarchy for the puzzle-combat engine.

Normal game outcomes (invalid placements, fixed-cell edits, empty undo)
are reported as results, never raised.
"""


class LogicDuelError(Exception):
    """Base exception for engine failures."""


class GenerationError(LogicDuelError):
    """Raised when backtracking cannot complete a grid."""


class SessionNotFoundError(LogicDuelError):
    """Raised when a session id is unknown to the service."""
