"""OAuth flow orchestration."""

import hmac

import logfire
from pydantic import ValidationError

from oauthlink.domain.error import ProviderFlowError, StateMismatch
from oauthlink.domain.value import AuthorizationState, Identity

from .registry import ProviderRegistry
from .session import Session
from .state import StateGenerator

# Session key holding the pending AuthorizationState
STATE_SESSION_KEY = "oauth.authorization_state"


class OAuthService:
    """Drives the authorization-code flow for any registered provider.

    One instance serves one request; the only state carried between the
    redirect and the callback is the AuthorizationState in the session.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        session: Session,
        state_generator: StateGenerator,
    ) -> None:
        """Initialize OAuth service.

        Args:
            registry: Configured providers by alias
            session: Current visitor's session
            state_generator: Source of anti-forgery tokens
        """
        self.registry = registry
        self.session = session
        self.state_generator = state_generator

    async def initiate(self, alias: str) -> str:
        """Start a login with the provider registered under alias.

        Args:
            alias: Provider alias

        Returns:
            Authorization URL to redirect the user to

        Raises:
            ProviderNotRegistered: If alias is unknown (nothing is stored)
        """
        with logfire.span("oauth_service.initiate", provider=alias):
            provider = self.registry.get(alias)
            state = self.state_generator.generate()

            authorization_state = AuthorizationState(alias=alias, state=state)
            await self.session.put(
                STATE_SESSION_KEY, authorization_state.model_dump(mode="json")
            )

            logfire.info("OAuth flow awaiting callback", provider=alias)
            return provider.authorization_url(state)

    async def complete(self, alias: str, received_state: str, code: str) -> Identity:
        """Finish a login from the provider callback.

        The stored state is consumed before anything else, so a state can be
        presented at most once whether or not the flow succeeds.

        Args:
            alias: Provider alias from the callback route
            received_state: ``state`` query parameter from the callback
            code: Authorization code from the callback

        Returns:
            Normalized identity of the authenticated external account

        Raises:
            StateMismatch: If no state is pending, or it was issued for another
                alias, or it differs from received_state
            ProviderNotRegistered: If alias is unknown
            TokenExchangeFailed: If the code cannot be exchanged
            ProfileFetchFailed: If the profile cannot be fetched
        """
        with logfire.span("oauth_service.complete", provider=alias):
            stored = await self._consume_state()

            if stored is None:
                logfire.warn("OAuth callback without pending state", provider=alias)
                raise StateMismatch("No authorization state pending for this session")

            if stored.alias != alias:
                logfire.warn(
                    "OAuth callback for a different provider than initiated",
                    provider=alias,
                    expected_provider=stored.alias,
                )
                raise StateMismatch(
                    f"Authorization state was issued for '{stored.alias}', not '{alias}'"
                )

            if not hmac.compare_digest(
                stored.state.encode("utf-8"), received_state.encode("utf-8")
            ):
                logfire.warn("OAuth state mismatch", provider=alias)
                raise StateMismatch("Authorization state does not match")

            provider = self.registry.get(alias)

            try:
                token = await provider.exchange_code(code)
                identity = await provider.fetch_identity(token)
            except ProviderFlowError as e:
                logfire.warn(
                    "OAuth flow failed",
                    provider=alias,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                raise

            logfire.info(
                "OAuth flow completed",
                provider=alias,
                provider_user_id=identity.provider_user_id,
            )
            return identity

    async def _consume_state(self) -> AuthorizationState | None:
        """Read and forget the pending state.

        Returns:
            The pending state, or None if absent or unreadable
        """
        raw = await self.session.pull(STATE_SESSION_KEY)

        if raw is None:
            return None
        if isinstance(raw, AuthorizationState):
            return raw

        try:
            return AuthorizationState.model_validate(raw)
        except ValidationError:
            logfire.warn("Discarding unreadable authorization state")
            return None
