"""Server-side session storage.

The browser only holds an opaque session ID cookie; the data, including the
pending OAuth state, stays on the server so a consumed state cannot be
replayed from an old cookie.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel


class SessionData(BaseModel):
    """Values stored for one session ID."""

    values: dict[str, Any]
    expires_at: datetime


class InMemorySessionStore:
    """In-memory session store keyed by session ID.

    Sessions expire after ttl_seconds without writes. Data does not survive
    restarts; a user caught mid-login simply starts the flow again.

    In production with multiple servers, consider:
    - Sticky sessions (route user to same server)
    - Redis for shared session storage
    """

    def __init__(self, ttl_seconds: int = 15 * 60) -> None:
        """Initialize empty session store."""
        self.ttl = timedelta(seconds=ttl_seconds)
        self._sessions: dict[str, SessionData] = {}

    @staticmethod
    def new_session_id() -> str:
        """Generate a fresh opaque session ID."""
        return secrets.token_urlsafe(32)

    def session(self, session_id: str) -> "StoredSession":
        """Bind a Session view to session_id."""
        return StoredSession(self, session_id)

    async def read(self, session_id: str) -> dict[str, Any]:
        """Return the values of a session (empty if unknown or expired)."""
        data = self._sessions.get(session_id)

        # Check expiry and clean up if expired
        if data and data.expires_at < datetime.now(timezone.utc):
            await self.delete(session_id)
            return {}

        return data.values if data else {}

    async def write(self, session_id: str, values: dict[str, Any]) -> None:
        """Replace the values of a session and extend its expiry."""
        self._sessions[session_id] = SessionData(
            values=values, expires_at=datetime.now(timezone.utc) + self.ttl
        )

    async def take(self, session_id: str, key: str) -> Any | None:
        """Remove key from a session and return its value.

        Never suspends, so concurrent takes of one key see it at most once.
        """
        data = self._sessions.get(session_id)
        if data is None or key not in data.values:
            return None
        if data.expires_at < datetime.now(timezone.utc):
            self._sessions.pop(session_id, None)
            return None

        values = dict(data.values)
        value = values.pop(key)
        self._sessions[session_id] = SessionData(
            values=values, expires_at=data.expires_at
        )
        return value

    async def delete(self, session_id: str) -> None:
        """Drop a session."""
        self._sessions.pop(session_id, None)

    async def purge_expired(self) -> int:
        """Drop every expired session.

        Returns:
            Number of sessions removed
        """
        now = datetime.now(timezone.utc)
        expired = [sid for sid, data in self._sessions.items() if data.expires_at < now]
        for sid in expired:
            self._sessions.pop(sid, None)
        return len(expired)


class StoredSession:
    """Session bound to one session ID of an InMemorySessionStore."""

    def __init__(self, store: InMemorySessionStore, session_id: str) -> None:
        self.store = store
        self.session_id = session_id

    async def get(self, key: str) -> Any | None:
        values = await self.store.read(self.session_id)
        return values.get(key)

    async def put(self, key: str, value: Any) -> None:
        values = dict(await self.store.read(self.session_id))
        values[key] = value
        await self.store.write(self.session_id, values)

    async def forget(self, key: str) -> None:
        values = dict(await self.store.read(self.session_id))
        if key in values:
            del values[key]
            await self.store.write(self.session_id, values)

    async def pull(self, key: str) -> Any | None:
        return await self.store.take(self.session_id, key)
