"""Reconciles provider identities with local users."""

import logfire
from pydantic import BaseModel

from oauthlink.domain.error import DuplicateLink
from oauthlink.domain.model.oauth_link import OAuthLink
from oauthlink.domain.repository import OAuthLinkRepository, UserRepository
from oauthlink.domain.value import Identity, LoginBranch, UserId


class LoginResult(BaseModel):
    """Outcome of reconciling an identity."""

    user_id: UserId
    branch: LoginBranch
    link: OAuthLink


class Authenticator:
    """Resolves a completed identity to the local user to log in as.

    Branches, first match wins:

    1. The identity is already linked: refresh its token, use the linked user
       (even if a different user is currently logged in).
    2. A user is logged in: link the identity to that user.
    3. The identity carries an email matching a local user: link to them.
    4. Otherwise: create a user from the identity and link it.

    If link creation loses a race to a concurrent login for the same
    identity, the lookup is retried once and branch 1 applies.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        oauth_link_repository: OAuthLinkRepository,
    ) -> None:
        """Initialize authenticator.

        Args:
            user_repository: Host user store
            oauth_link_repository: Identity link store
        """
        self.user_repository = user_repository
        self.oauth_link_repository = oauth_link_repository

    async def login(
        self, identity: Identity, current_user_id: UserId | None = None
    ) -> LoginResult:
        """Resolve identity to a local user, linking or creating as needed.

        Args:
            identity: Identity returned by the OAuth flow
            current_user_id: User already authenticated in this session, if any

        Returns:
            Resolved user ID, the branch taken and the link
        """
        with logfire.span(
            "authenticator.login",
            provider=identity.provider_alias,
            provider_user_id=identity.provider_user_id,
            has_current_user=current_user_id is not None,
        ):
            existing = await self.oauth_link_repository.find_by_provider_identity(
                identity.provider_alias, identity.provider_user_id
            )
            if existing:
                return await self._login_existing(existing, identity, current_user_id)

            try:
                return await self._link_new(identity, current_user_id)
            except DuplicateLink:
                logfire.info(
                    "Concurrent login linked identity first, retrying lookup",
                    provider=identity.provider_alias,
                    provider_user_id=identity.provider_user_id,
                )
                existing = await self.oauth_link_repository.find_by_provider_identity(
                    identity.provider_alias, identity.provider_user_id
                )
                if not existing:
                    raise
                return await self._login_existing(existing, identity, current_user_id)

    async def _login_existing(
        self,
        link: OAuthLink,
        identity: Identity,
        current_user_id: UserId | None,
    ) -> LoginResult:
        if current_user_id is not None and current_user_id != link.user_id:
            logfire.warn(
                "Identity already linked to another user, switching session user",
                provider=identity.provider_alias,
                current_user_id=str(current_user_id),
                linked_user_id=str(link.user_id),
            )

        updated = await self.oauth_link_repository.update_token(
            link, identity.access_token
        )
        logfire.info(
            "Logged in with existing link",
            provider=identity.provider_alias,
            user_id=str(updated.user_id),
        )
        return LoginResult(
            user_id=updated.user_id, branch=LoginBranch.EXISTING_LINK, link=updated
        )

    async def _link_new(
        self, identity: Identity, current_user_id: UserId | None
    ) -> LoginResult:
        if current_user_id is not None and not await self.user_repository.find_by_id(
            current_user_id
        ):
            # Auth cookie outlived its user
            logfire.warn(
                "Current user no longer exists, ignoring",
                current_user_id=str(current_user_id),
            )
            current_user_id = None

        if current_user_id is not None:
            link = await self._create_link(current_user_id, identity)
            return LoginResult(
                user_id=current_user_id,
                branch=LoginBranch.LINKED_TO_CURRENT_USER,
                link=link,
            )

        if identity.email and self.user_repository.supports_email_lookup:
            user = await self.user_repository.find_by_email(identity.email)
            if user:
                link = await self._create_link(user.id, identity)
                return LoginResult(
                    user_id=user.id, branch=LoginBranch.LINKED_BY_EMAIL, link=link
                )

        user = await self.user_repository.create_from_identity(identity)
        try:
            link = await self._create_link(user.id, identity)
        except DuplicateLink:
            # The provisional user never got a link; drop it
            await self.user_repository.delete(user.id)
            raise

        return LoginResult(user_id=user.id, branch=LoginBranch.CREATED_USER, link=link)

    async def _create_link(self, user_id: UserId, identity: Identity) -> OAuthLink:
        link = await self.oauth_link_repository.create(
            user_id=user_id,
            provider=identity.provider_alias,
            provider_user_id=identity.provider_user_id,
            access_token=identity.access_token,
        )
        logfire.info(
            "OAuth link created",
            provider=identity.provider_alias,
            provider_user_id=identity.provider_user_id,
            user_id=str(user_id),
        )
        return link
