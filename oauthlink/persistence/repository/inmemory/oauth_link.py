"""In-memory OAuth link repository for testing."""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from oauthlink.domain.error import DuplicateLink
from oauthlink.domain.model.oauth_link import OAuthLink
from oauthlink.domain.repository.oauth_link import OAuthLinkRepository
from oauthlink.domain.value import OAuthLinkId, UserId


class InMemoryOAuthLinkRepository(OAuthLinkRepository):
    """In-memory implementation of OAuthLinkRepository for testing.

    create() checks and inserts without awaiting in between, so concurrent
    tasks on one event loop cannot both insert the same identity.
    """

    def __init__(self) -> None:
        self._links: list[OAuthLink] = []

    async def find_by_provider_identity(
        self, provider: str, provider_user_id: str
    ) -> Optional[OAuthLink]:
        """Find link by provider and provider user ID."""
        for link in self._links:
            if link.provider == provider and link.provider_user_id == provider_user_id:
                return link
        return None

    async def find_all_by_user_id(self, user_id: UserId) -> list[OAuthLink]:
        """Find all links for a user."""
        matches = [link for link in self._links if link.user_id == user_id]
        matches.sort(key=lambda link: link.created_at)
        return matches

    async def create(
        self,
        user_id: UserId,
        provider: str,
        provider_user_id: str,
        access_token: str,
    ) -> OAuthLink:
        """Create a link.

        Raises:
            DuplicateLink: If the provider identity is already linked
        """
        for existing in self._links:
            if (
                existing.provider == provider
                and existing.provider_user_id == provider_user_id
            ):
                raise DuplicateLink(provider, provider_user_id)

        link = OAuthLink(
            id=OAuthLinkId(uuid4()),
            user_id=user_id,
            provider=provider,
            provider_user_id=provider_user_id,
            access_token=access_token,
        )
        self._links.append(link)
        return link

    async def update_token(self, link: OAuthLink, access_token: str) -> OAuthLink:
        """Overwrite the stored access token."""
        updated = link.model_copy(
            update={
                "access_token": access_token,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        for i, existing in enumerate(self._links):
            if existing.id == link.id:
                self._links[i] = updated
        return updated
