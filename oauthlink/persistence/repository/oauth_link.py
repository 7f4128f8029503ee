"""OAuthLink repository implementation using PostgreSQL."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from oauthlink.domain.error import DuplicateLink
from oauthlink.domain.model.oauth_link import OAuthLink
from oauthlink.domain.repository.oauth_link import OAuthLinkRepository
from oauthlink.domain.value import OAuthLinkId, UserId
from oauthlink.persistence.mappers import oauth_link_to_dict, row_to_oauth_link
from oauthlink.persistence.tables import oauth_identities_table


class PostgresOAuthLinkRepository(OAuthLinkRepository):
    """PostgreSQL implementation of OAuthLinkRepository.

    Uniqueness of (provider, provider_user_id) is enforced by the
    uq_oauth_identities_provider_user constraint.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_provider_identity(
        self, provider: str, provider_user_id: str
    ) -> Optional[OAuthLink]:
        """Get link by provider and provider user ID."""
        stmt = select(oauth_identities_table).where(
            oauth_identities_table.c.provider == provider,
            oauth_identities_table.c.provider_user_id == provider_user_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_oauth_link(dict(row))

    async def find_all_by_user_id(self, user_id: UserId) -> list[OAuthLink]:
        """Find all links for a user, oldest first."""
        stmt = (
            select(oauth_identities_table)
            .where(oauth_identities_table.c.user_id == user_id)
            .order_by(oauth_identities_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_oauth_link(dict(row)) for row in rows]

    async def create(
        self,
        user_id: UserId,
        provider: str,
        provider_user_id: str,
        access_token: str,
    ) -> OAuthLink:
        """Insert a link.

        The insert runs in a savepoint so a constraint violation leaves the
        request transaction usable for the follow-up lookup.

        Raises:
            DuplicateLink: If the provider identity is already linked
        """
        now = datetime.now(timezone.utc)
        link = OAuthLink(
            id=OAuthLinkId(uuid4()),
            user_id=user_id,
            provider=provider,
            provider_user_id=provider_user_id,
            access_token=access_token,
            created_at=now,
            updated_at=now,
        )

        stmt = oauth_identities_table.insert().values(**oauth_link_to_dict(link))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateLink(provider, provider_user_id) from e

        return link

    async def update_token(self, link: OAuthLink, access_token: str) -> OAuthLink:
        """Overwrite the stored access token."""
        updated = link.model_copy(
            update={
                "access_token": access_token,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        stmt = (
            oauth_identities_table.update()
            .where(oauth_identities_table.c.id == link.id)
            .values(access_token=updated.access_token, updated_at=updated.updated_at)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return updated
