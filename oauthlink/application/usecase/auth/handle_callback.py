"""Handle OAuth callback use case."""

import logfire
from pydantic import BaseModel

from oauthlink.application.usecase.base import BaseUseCase
from oauthlink.domain.service import Authenticator, OAuthService
from oauthlink.domain.value import LoginBranch, UserId


class HandleCallbackRequest(BaseModel):
    """Parameters of a provider callback.

    These come from the provider in the callback URL, except
    current_user_id which the host reads from its own session.
    """

    alias: str
    state: str
    code: str
    current_user_id: UserId | None = None


class HandleCallbackResponse(BaseModel):
    """The user to mark as authenticated."""

    user_id: UserId
    branch: LoginBranch


class HandleCallbackUseCase(
    BaseUseCase[HandleCallbackRequest, HandleCallbackResponse]
):
    """Use case for completing an OAuth login.

    Steps:
    1. Verify and consume the session state, exchange the code, fetch the identity
    2. Reconcile the identity with linked accounts and local users
    3. Return the resolved user; the caller marks it as logged in
    """

    def __init__(
        self, oauth_service: OAuthService, authenticator: Authenticator
    ) -> None:
        """Initialize handle callback use case.

        Args:
            oauth_service: OAuth flow domain service bound to the caller's session
            authenticator: Identity reconciliation domain service
        """
        self.oauth_service = oauth_service
        self.authenticator = authenticator

    async def execute(self, request: HandleCallbackRequest) -> HandleCallbackResponse:
        """Complete the flow and resolve the local user.

        Raises:
            StateMismatch: If the state is missing, reused or wrong
            ProviderNotRegistered: If the alias is unknown
            TokenExchangeFailed: If the provider rejects the code
            ProfileFetchFailed: If the profile cannot be read
        """
        identity = await self.oauth_service.complete(
            request.alias, request.state, request.code
        )

        result = await self.authenticator.login(identity, request.current_user_id)

        logfire.info(
            "OAuth login resolved",
            provider=request.alias,
            user_id=str(result.user_id),
            branch=result.branch.value,
        )
        return HandleCallbackResponse(user_id=result.user_id, branch=result.branch)
