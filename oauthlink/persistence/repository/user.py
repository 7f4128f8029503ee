"""User repository implementation using PostgreSQL."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from oauthlink.domain.model.user import User
from oauthlink.domain.repository.user import UserRepository
from oauthlink.domain.value import Identity, UserId
from oauthlink.persistence.mappers import row_to_user, user_to_dict
from oauthlink.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    supports_email_lookup = True

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Get user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_user(dict(row))

    async def find_by_email(self, email: str) -> Optional[User]:
        """Get the oldest user with this email, compared case-insensitively."""
        stmt = (
            select(users_table)
            .where(func.lower(users_table.c.email) == email.lower())
            .order_by(users_table.c.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_user(dict(row))

    async def create_from_identity(self, identity: Identity) -> User:
        """Insert a user populated from a provider identity."""
        now = datetime.now(timezone.utc)
        user = User(
            id=UserId(uuid4()),
            nickname=identity.nickname or identity.full_name,
            email=identity.email,
            avatar_url=identity.avatar,
            created_at=now,
            updated_at=now,
        )

        stmt = users_table.insert().values(**user_to_dict(user))
        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def delete(self, user_id: UserId) -> None:
        """Delete user."""
        stmt = users_table.delete().where(users_table.c.id == user_id)
        await self.session.execute(stmt)
        await self.session.flush()
