"""OAuth provider registry infrastructure providers."""

from collections.abc import AsyncIterator

import httpx
from dishka import Scope, provide

from oauthlink.adapter.provider import build_registry
from oauthlink.config import OAuthSettings
from oauthlink.domain.service import ProviderRegistry
from oauthlink.util.di.base import ProviderBase


class OAuthRegistryProvider(ProviderBase):
    """OAuth registry component base."""

    __mock_component__ = "oauth"


class ProdOAuthRegistryProvider(OAuthRegistryProvider):
    """Production registry built from configured providers."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_http_client(
        self, oauth_settings: OAuthSettings
    ) -> AsyncIterator[httpx.AsyncClient]:
        """Provide the HTTP client shared by all providers.

        Closed when the container shuts down.
        """
        async with httpx.AsyncClient(timeout=oauth_settings.http_timeout) as client:
            yield client

    @provide(scope=Scope.APP)
    def get_provider_registry(
        self, oauth_settings: OAuthSettings, http_client: httpx.AsyncClient
    ) -> ProviderRegistry:
        """Provide the provider registry.

        Raises:
            ProviderMisconfigured: If any configured provider is invalid
        """
        return build_registry(oauth_settings, http_client)
