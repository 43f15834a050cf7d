"""
Session Manager - Creates and tracks game sessions.

LIFECYCLE:
1. Caller creates a session -> puzzle generated, combat state fresh
2. During the fight the caller applies moves, deletes, undoes
3. Fight ends (win/lose) -> session stays readable until ended
4. Caller restarts (same session, new puzzle) or ends it

PERSISTENCE RULES:
- Sessions live in memory only
- Ending a session drops every reference the manager holds
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random
import time
import uuid

from ..config import GameConfig
from ..exceptions import SessionNotFoundError
from ..utils.logger import get_logger
from .game_session import GameSession

LOGGER = get_logger(__name__)


@dataclass
class ManagedSession:
    """A GameSession plus the bookkeeping the manager needs."""
    session_id: str
    game: GameSession
    created_at: float
    last_active_at: float = field(default=0.0)

    def touch(self) -> None:
        self.last_active_at = time.time()

    def is_active(self) -> bool:
        """A session is active until its fight has ended."""
        return not self.game.is_over()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions from a GameConfig
    - Look sessions up by id
    - Clean up ended or stale sessions
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()
        self._sessions: dict[str, ManagedSession] = {}

    def create_session(
        self,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
    ) -> ManagedSession:
        """
        Create a new game session.

        Args:
            config: Overrides the manager's default config
            rng: Random source; seeded from config.seed when omitted

        Returns:
            New ManagedSession with a freshly generated puzzle
        """
        session_id = str(uuid.uuid4())
        game = GameSession(config=config or self.config, rng=rng)
        now = time.time()
        session = ManagedSession(
            session_id=session_id,
            game=game,
            created_at=now,
            last_active_at=now,
        )
        self._sessions[session_id] = session
        LOGGER.info("Created session %s", session_id)
        return session

    def get_session(self, session_id: str) -> ManagedSession:
        """Get a session by ID. Raises SessionNotFoundError if unknown."""
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        return session

    def end_session(self, session_id: str) -> bool:
        """Remove a session. Returns False if it was not tracked."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        LOGGER.info("Ended session %s", session_id)
        return True

    def list_sessions(self) -> list[str]:
        return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions whose fight is still running."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_idle_seconds: int = 3600) -> list[str]:
        """
        End sessions idle for longer than max_idle_seconds.

        Returns the ids that were removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.last_active_at > max_idle_seconds
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        return to_remove
