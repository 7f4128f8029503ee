"""Persistence component: PostgreSQL repositories over a request session."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from oauthlink.config import Settings
from oauthlink.domain.repository import OAuthLinkRepository, UserRepository
from oauthlink.persistence.database import create_engine, create_session_factory
from oauthlink.persistence.repository import (
    PostgresOAuthLinkRepository,
    PostgresUserRepository,
)
from oauthlink.util.di.base import ProviderBase
from oauthlink.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Provides UserRepository and OAuthLinkRepository."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings.database, echo=settings.debug)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One transaction per request: commit on success, roll back on error."""
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Rolling back request transaction", error=str(e))
                await session.rollback()
                raise
            await session.commit()

    @provide(scope=Scope.REQUEST)
    def user_repository(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def oauth_link_repository(self, session: AsyncSession) -> OAuthLinkRepository:
        return PostgresOAuthLinkRepository(session)
