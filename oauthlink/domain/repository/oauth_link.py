"""OAuth link repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from oauthlink.domain.model.oauth_link import OAuthLink
from oauthlink.domain.value import UserId


class OAuthLinkRepository(ABC):
    """Repository for OAuthLink entities (the identity store).

    Implementations must enforce uniqueness of (provider, provider_user_id)
    atomically in create(): of two concurrent creates for the same identity,
    exactly one succeeds and the other raises DuplicateLink.
    """

    @abstractmethod
    async def find_by_provider_identity(
        self, provider: str, provider_user_id: str
    ) -> Optional[OAuthLink]:
        """Find the link for a provider identity.

        Args:
            provider: Provider alias
            provider_user_id: The user's ID on that provider

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[OAuthLink]:
        """Get all links owned by a user, oldest first.

        Args:
            user_id: The user's unique identifier

        Returns:
            List of links (may be empty)
        """
        pass

    @abstractmethod
    async def create(
        self,
        user_id: UserId,
        provider: str,
        provider_user_id: str,
        access_token: str,
    ) -> OAuthLink:
        """Create a link between a user and a provider identity.

        Args:
            user_id: Owning local user
            provider: Provider alias
            provider_user_id: The user's ID on that provider
            access_token: Current provider access token

        Returns:
            The created link

        Raises:
            DuplicateLink: If the provider identity is already linked
        """
        pass

    @abstractmethod
    async def update_token(self, link: OAuthLink, access_token: str) -> OAuthLink:
        """Overwrite the stored access token of a link.

        Args:
            link: Existing link
            access_token: New provider access token

        Returns:
            The updated link
        """
        pass
