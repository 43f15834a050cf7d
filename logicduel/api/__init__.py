"""
API Module - In-process interface for a presentation layer.

The presentation layer (browser page, terminal, test harness):
1. Creates a session
2. Sends moves, deletes and undos by session id
3. Receives ordered combat events and a state snapshot
4. Restarts or ends the session

All state is session-scoped and held in memory.
"""

from .schemas import (
    # Enums
    OutcomeStatus,
    ErrorCode,
    # Events
    BandEffectInfo,
    RelicEffectInfo,
    ChainEventInfo,
    EnemyTurnInfo,
    # Responses
    MoveOutcomeResponse,
    SessionResponse,
    GridEditResponse,
    CandidatesResponse,
    ErrorResponse,
)
from .service import GameService

__all__ = [
    # Enums
    "OutcomeStatus",
    "ErrorCode",
    # Events
    "BandEffectInfo",
    "RelicEffectInfo",
    "ChainEventInfo",
    "EnemyTurnInfo",
    # Responses
    "MoveOutcomeResponse",
    "SessionResponse",
    "GridEditResponse",
    "CandidatesResponse",
    "ErrorResponse",
    # Service
    "GameService",
]
