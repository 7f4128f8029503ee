"""Session infrastructure providers."""

from dishka import Scope, provide
from fastapi import Request

from oauthlink.adapter.session import InMemorySessionStore, StoredSession
from oauthlink.config import Settings
from oauthlink.domain.service import Session
from oauthlink.util.di.base import ProviderBase


class SessionProvider(ProviderBase):
    """Session component base."""

    __mock_component__ = "session"


class ProdSessionProvider(SessionProvider):
    """Production session provider backed by a server-side store."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_session_store(self, settings: Settings) -> InMemorySessionStore:
        """Provide the process-wide session store."""
        return InMemorySessionStore(ttl_seconds=settings.session.ttl_seconds)

    @provide(scope=Scope.REQUEST)
    def get_stored_session(
        self, request: Request, store: InMemorySessionStore, settings: Settings
    ) -> StoredSession:
        """Bind the session named by the request cookie, or a fresh one.

        Routes that may start a session must set the cookie from
        StoredSession.session_id on their response.
        """
        session_id = request.cookies.get(settings.session.cookie_name)
        if not session_id:
            session_id = store.new_session_id()
        return store.session(session_id)

    @provide(scope=Scope.REQUEST)
    def get_session(self, stored_session: StoredSession) -> Session:
        """Expose the stored session through the domain interface."""
        return stored_session
