"""
In-memory registry of fitting-room sessions.

Each session owns one OutfitEngine. Sessions expire after a TTL measured
from their last access; nothing is persisted.
"""

import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from ..engine import OutfitEngine
from ..exceptions import SessionNotFound
from ..utils.logging import get_logger

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FittingSession:
    """An engine plus its bookkeeping."""

    session_id: str
    engine: OutfitEngine
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    ttl_seconds: int = 86400

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or _utcnow()
        return now > self.updated_at + timedelta(seconds=self.ttl_seconds)

    def touch(self) -> None:
        self.updated_at = _utcnow()


class SessionRegistry:
    """
    Thread-safe table of fitting sessions.

    Usage:
        registry = SessionRegistry(lambda: OutfitEngine.from_config(config))
        session = registry.create()
        session.engine.wear("tshirt")
        registry.get(session.session_id)
    """

    def __init__(self, engine_factory: Callable[[], OutfitEngine], ttl_seconds: int = 86400):
        self._engine_factory = engine_factory
        self._ttl_seconds = ttl_seconds
        self._lock = threading.RLock()
        self._sessions: dict[str, FittingSession] = {}

    def create(self) -> FittingSession:
        """Register a new session, dropping any that have expired."""
        session = FittingSession(
            session_id=uuid.uuid4().hex[:12],
            engine=self._engine_factory(),
            ttl_seconds=self._ttl_seconds,
        )
        with self._lock:
            self.cleanup_expired()
            self._sessions[session.session_id] = session
        logger.info("Session created", session_id=session.session_id)
        return session

    def get(self, session_id: str) -> FittingSession:
        """Return a live session, or raise SessionNotFound."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFound(session_id)
            if session.is_expired():
                del self._sessions[session_id]
                logger.info("Session expired", session_id=session_id)
                raise SessionNotFound(session_id)
            session.touch()
            return session

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def cleanup_expired(self) -> int:
        """Drop expired sessions and return how many were removed."""
        with self._lock:
            now = _utcnow()
            expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info("Expired sessions removed", count=len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
