"""Domain layer DI providers."""

from dishka import Scope, provide

from oauthlink.config import AuthSettings
from oauthlink.domain.repository import OAuthLinkRepository, UserRepository
from oauthlink.domain.service import (
    Authenticator,
    JWTService,
    OAuthService,
    ProviderRegistry,
    Session,
    StateGenerator,
)
from oauthlink.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repository and
    session lifecycle.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_state_generator(self) -> StateGenerator:
        """Provide state token generator."""
        return StateGenerator()

    @provide
    def get_oauth_service(
        self,
        registry: ProviderRegistry,
        session: Session,
        state_generator: StateGenerator,
    ) -> OAuthService:
        """Provide OAuth flow service bound to the request's session."""
        return OAuthService(
            registry=registry, session=session, state_generator=state_generator
        )

    @provide
    def get_authenticator(
        self,
        user_repository: UserRepository,
        oauth_link_repository: OAuthLinkRepository,
    ) -> Authenticator:
        """Provide identity reconciliation service."""
        return Authenticator(
            user_repository=user_repository,
            oauth_link_repository=oauth_link_repository,
        )

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)
