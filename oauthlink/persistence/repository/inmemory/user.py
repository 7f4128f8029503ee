"""In-memory user repository for testing."""

from typing import Optional
from uuid import uuid4

from oauthlink.domain.model.user import User
from oauthlink.domain.repository.user import UserRepository
from oauthlink.domain.value import Identity, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, supports_email_lookup: bool = True) -> None:
        self._users: dict[UserId, User] = {}
        self.supports_email_lookup = supports_email_lookup

    async def save(self, user: User) -> User:
        """Save user (test setup helper)."""
        self._users[user.id] = user
        return user

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find user by email, case-insensitively."""
        if not self.supports_email_lookup:
            raise NotImplementedError("Email lookup disabled")
        for user in self._users.values():
            if user.email and user.email.lower() == email.lower():
                return user
        return None

    async def create_from_identity(self, identity: Identity) -> User:
        """Create user from identity."""
        user = User(
            id=UserId(uuid4()),
            nickname=identity.nickname or identity.full_name,
            email=identity.email,
            avatar_url=identity.avatar,
        )
        self._users[user.id] = user
        return user

    async def delete(self, user_id: UserId) -> None:
        """Delete user."""
        self._users.pop(user_id, None)

    def all(self) -> list[User]:
        """All stored users (test inspection helper)."""
        return list(self._users.values())
