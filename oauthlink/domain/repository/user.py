"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from oauthlink.domain.model.user import User
from oauthlink.domain.value import Identity, UserId


class UserRepository(ABC):
    """Repository for the host application's users (the user store)."""

    # Stores that implement find_by_email set this to True; otherwise the
    # authenticator never attempts to match users by email.
    supports_email_lookup: bool = False

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        pass

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email address.

        Only called when supports_email_lookup is True.

        Args:
            email: Email address as supplied by the provider

        Returns:
            The user if found, None otherwise
        """
        raise NotImplementedError

    @abstractmethod
    async def create_from_identity(self, identity: Identity) -> User:
        """Create a new user populated from a provider identity.

        Args:
            identity: Completed provider identity

        Returns:
            The created user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Delete a user."""
        pass
