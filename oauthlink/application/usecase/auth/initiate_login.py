"""Initiate login use case."""

from pydantic import BaseModel

from oauthlink.application.usecase.base import BaseUseCase
from oauthlink.domain.service import OAuthService


class InitiateLoginRequest(BaseModel):
    """Request to start an OAuth login."""

    alias: str  # Provider alias, e.g. 'github'


class InitiateLoginResponse(BaseModel):
    """Where to send the user agent."""

    authorization_url: str


class InitiateLoginUseCase(BaseUseCase[InitiateLoginRequest, InitiateLoginResponse]):
    """Use case for redirecting a user to an OAuth provider."""

    def __init__(self, oauth_service: OAuthService) -> None:
        """Initialize initiate login use case.

        Args:
            oauth_service: OAuth flow domain service bound to the caller's session
        """
        self.oauth_service = oauth_service

    async def execute(self, request: InitiateLoginRequest) -> InitiateLoginResponse:
        """Generate and store a state, and build the authorization URL.

        Raises:
            ProviderNotRegistered: If the alias is unknown
        """
        url = await self.oauth_service.initiate(request.alias)
        return InitiateLoginResponse(authorization_url=url)
