"""Server-side session store.

A session is identified by an opaque random token sent to the browser as a
cookie. The server keeps the two facts it needs per session (user id and user
type) plus an expiry. Sessions are never refreshed: they live until the TTL
runs out or the user logs out.
"""

import asyncio
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from advidly.domain.enums import UserType
from advidly.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Session:
    """State held for one logged-in browser."""

    id: str
    user_id: int
    user_type: UserType
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


class SessionStore:
    """In-memory mapping of session id to :class:`Session`."""

    def __init__(
        self,
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.ttl = ttl
        self._clock = clock or (lambda: datetime.now(UTC))
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, user_id: int, user_type: UserType) -> Session:
        """Start a new session for a user."""
        session = Session(
            id=secrets.token_urlsafe(32),
            user_id=user_id,
            user_type=user_type,
            expires_at=self._clock() + self.ttl,
        )
        self._sessions[session.id] = session
        logger.info("session_created", user_id=user_id)
        return session

    def get(self, session_id: str | None) -> Session | None:
        """Look up a live session. Expired sessions are dropped on sight."""
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.is_expired(self._clock()):
            self._sessions.pop(session_id, None)
            return None
        return session

    def destroy(self, session_id: str) -> bool:
        """End a session. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info("session_destroyed", user_id=session.user_id)
        return True

    def prune(self) -> int:
        """Remove every expired session and return how many were removed."""
        now = self._clock()
        expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("sessions_pruned", count=len(expired))
        return len(expired)

    async def run_pruner(self, interval_seconds: float) -> None:
        """Prune expired sessions forever, every ``interval_seconds``."""
        while True:
            await asyncio.sleep(interval_seconds)
            self.prune()
