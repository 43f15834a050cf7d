"""
API Service - Business logic layer between a presentation layer and the engine.

The service:
1. Translates calls keyed by session id into GameSession calls
2. Manages sessions
3. Formats results as pydantic responses

This layer is framework-agnostic and in-process; it opens no sockets.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random

from ..config import GameConfig
from ..exceptions import GenerationError, SessionNotFoundError
from ..session import SessionManager, ManagedSession
from .schemas import (
    CandidatesResponse,
    ErrorCode,
    ErrorResponse,
    GridEditResponse,
    MoveOutcomeResponse,
    SessionResponse,
)


@dataclass
class GameService:
    """
    Main service for a presentation layer.

    Usage:
        service = GameService()

        created = service.create_session()
        result = service.apply_move(created.session_id, 0, 2, 5)
        service.undo(created.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(
        self,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ) -> SessionResponse:
        session = self.session_manager.create_session(config=config, rng=rng)
        return self._session_response(session)

    def get_session(self, session_id: str) -> SessionResponse:
        return self._session_response(self._get(session_id))

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def restart(self, session_id: str) -> SessionResponse:
        session = self._get(session_id)
        session.game.restart()
        return self._session_response(session)

    def apply_move(self, session_id: str, row: int, col: int, num: int) -> MoveOutcomeResponse:
        session = self._get(session_id)
        outcome = session.game.apply_move(row, col, num)
        return MoveOutcomeResponse.from_outcome(session_id, outcome, session.game.get_state())

    def delete_cell(self, session_id: str, row: int, col: int) -> GridEditResponse:
        session = self._get(session_id)
        changed = session.game.delete_cell(row, col)
        return GridEditResponse(session_id=session_id, changed=changed, state=session.game.get_state())

    def undo(self, session_id: str) -> GridEditResponse:
        session = self._get(session_id)
        changed = session.game.undo()
        return GridEditResponse(session_id=session_id, changed=changed, state=session.game.get_state())

    def candidates(self, session_id: str, row: int, col: int) -> CandidatesResponse:
        session = self._get(session_id)
        return CandidatesResponse(
            session_id=session_id,
            row=row,
            col=col,
            candidates=list(session.game.candidates(row, col)),
        )

    @staticmethod
    def error_response(exc: Exception) -> ErrorResponse:
        """Map an exception raised by the service to a structured error."""
        if isinstance(exc, SessionNotFoundError):
            code = ErrorCode.SESSION_NOT_FOUND
        elif isinstance(exc, GenerationError):
            code = ErrorCode.GENERATION_FAILED
        elif isinstance(exc, ValueError):
            code = ErrorCode.INVALID_INPUT
        else:
            raise exc
        return ErrorResponse(error_code=code, message=str(exc))

    def _get(self, session_id: str) -> ManagedSession:
        session = self.session_manager.get_session(session_id)
        session.touch()
        return session

    @staticmethod
    def _session_response(session: ManagedSession) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            created_at=session.created_at,
            state=session.game.get_state(),
        )
