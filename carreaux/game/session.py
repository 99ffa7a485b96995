"""Game session management."""

import asyncio
import logging
import time
from typing import Optional

from ..models.game import GameConfig, Session, GameStats, Hint, MoveResult
from .engine import CarreauxEngine
from .errors import UnknownSessionError

logger = logging.getLogger(__name__)


class SessionStore:
    """Owns every game in progress, one per conversation.

    Each conversation has its own lock, so commands for the same
    conversation run one after another while other conversations proceed
    independently. The idle sweep takes the same lock before deleting.
    """

    def __init__(
        self,
        engine: Optional[CarreauxEngine] = None,
        config: Optional[GameConfig] = None,
    ):
        self.engine = engine or CarreauxEngine(config)
        self.config = self.engine.config
        self._sessions: dict[str, Session] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = self._locks[session_id] = asyncio.Lock()
        return lock

    def _require(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise UnknownSessionError(session_id)
        return session

    async def new_session(self, session_id: str) -> Session:
        """Start a new game, replacing any game already in progress."""
        async with self._lock_for(session_id):
            session = self.engine.create_session(session_id)
            self._sessions[session_id] = session
            logger.debug("Created session %s", session_id)
            return session

    async def ensure_session(self, session_id: str) -> Session:
        """Get the current game, creating one on first interaction."""
        async with self._lock_for(session_id):
            session = self._sessions.get(session_id)
            if session is None:
                session = self.engine.create_session(session_id)
                self._sessions[session_id] = session
                logger.debug("Created session %s", session_id)
            return session

    async def has_session(self, session_id: str) -> bool:
        """Check whether a game is in progress."""
        return session_id in self._sessions

    async def get_session(self, session_id: str) -> Session:
        """Get a session by ID."""
        return self._require(session_id)

    async def end_session(self, session_id: str) -> GameStats:
        """Remove a session and return its final stats."""
        async with self._lock_for(session_id):
            session = self._require(session_id)
            stats = self.engine.get_stats(session)
            del self._sessions[session_id]
            logger.debug("Ended session %s", session_id)
            return stats

    async def validate_and_apply_move(self, session_id: str, x, y) -> MoveResult:
        """Play a move; a finished game is removed before returning."""
        async with self._lock_for(session_id):
            session = self._require(session_id)
            result = self.engine.play_move(session, x, y)
            if result.game_over:
                del self._sessions[session_id]
            return result

    async def get_hints(self, session_id: str, max_count: Optional[int] = None) -> list[Hint]:
        """Suggested moves for the player to move."""
        async with self._lock_for(session_id):
            return self.engine.get_hints(self._require(session_id), max_count)

    async def get_stats(self, session_id: str) -> GameStats:
        """Current stats for a session."""
        async with self._lock_for(session_id):
            return self.engine.get_stats(self._require(session_id))

    async def sweep_idle(self, now: Optional[float] = None) -> int:
        """Remove sessions idle longer than the timeout. Returns count removed."""
        now = time.time() if now is None else now
        timeout = self.config.idle_timeout_seconds
        removed = 0

        candidates = [
            sid
            for sid, session in self._sessions.items()
            if now - session.last_activity > timeout
        ]
        for session_id in candidates:
            async with self._lock_for(session_id):
                # A move may have landed while we waited for the lock
                session = self._sessions.get(session_id)
                if session is not None and now - session.last_activity > timeout:
                    del self._sessions[session_id]
                    removed += 1

        for session_id in list(self._locks):
            if session_id not in self._sessions and not self._locks[session_id].locked():
                del self._locks[session_id]

        return removed

    @property
    def active_session_count(self) -> int:
        """Number of active sessions."""
        return len(self._sessions)

    async def clear(self) -> None:
        """Drop all sessions."""
        self._sessions.clear()
        self._locks.clear()
