"""Provider registry."""

import logfire

from oauthlink.domain.error import ProviderNotRegistered

from .provider import OAuthProvider


class ProviderRegistry:
    """Maps provider aliases to configured provider instances.

    Built once at startup and shared by reference; never mutated while
    serving requests.
    """

    def __init__(self) -> None:
        self._providers: dict[str, OAuthProvider] = {}

    def register(self, alias: str, provider: OAuthProvider) -> None:
        """Register a provider under alias.

        A second registration under the same alias replaces the first.
        """
        if alias in self._providers:
            logfire.warn(
                "OAuth provider alias re-registered, previous provider replaced",
                provider=alias,
                previous=type(self._providers[alias]).__name__,
                replacement=type(provider).__name__,
            )
        self._providers[alias] = provider

    def get(self, alias: str) -> OAuthProvider:
        """Look up the provider for alias.

        Raises:
            ProviderNotRegistered: If alias is unknown
        """
        try:
            return self._providers[alias]
        except KeyError:
            raise ProviderNotRegistered(alias) from None

    def aliases(self) -> list[str]:
        """Registered aliases in registration order."""
        return list(self._providers)

    def __contains__(self, alias: object) -> bool:
        return alias in self._providers
