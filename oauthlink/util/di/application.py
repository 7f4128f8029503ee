"""Application layer DI providers."""

from dishka import Scope, provide

from oauthlink.application.usecase.auth import (
    HandleCallbackUseCase,
    InitiateLoginUseCase,
    ListLinksUseCase,
)
from oauthlink.domain.repository import OAuthLinkRepository
from oauthlink.domain.service import Authenticator, OAuthService
from oauthlink.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_initiate_login_use_case(
        self, oauth_service: OAuthService
    ) -> InitiateLoginUseCase:
        """Provide initiate login use case."""
        return InitiateLoginUseCase(oauth_service=oauth_service)

    @provide(scope=Scope.REQUEST)
    def get_handle_callback_use_case(
        self, oauth_service: OAuthService, authenticator: Authenticator
    ) -> HandleCallbackUseCase:
        """Provide handle callback use case."""
        return HandleCallbackUseCase(
            oauth_service=oauth_service, authenticator=authenticator
        )

    @provide(scope=Scope.REQUEST)
    def get_list_links_use_case(
        self, oauth_link_repository: OAuthLinkRepository
    ) -> ListLinksUseCase:
        """Provide list links use case."""
        return ListLinksUseCase(oauth_link_repository=oauth_link_repository)
