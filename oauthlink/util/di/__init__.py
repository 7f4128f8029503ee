"""Dependency injection wiring."""

from oauthlink.util.di.application import ProdApplicationProvider
from oauthlink.util.di.base import Component, ProviderBase
from oauthlink.util.di.core import ProdConfigProvider
from oauthlink.util.di.domain import ProdDomainProvider
from oauthlink.util.di.infrastructure import (
    OAuthRegistryProvider,
    PersistenceProvider,
    ProdOAuthRegistryProvider,
    ProdPersistenceProvider,
    ProdSessionProvider,
    SessionProvider,
)
from oauthlink.util.error import DependencyInjectionError

# Order is irrelevant to dishka; mockable bases resolve via get_provider
PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    OAuthRegistryProvider,
    SessionProvider,
    PersistenceProvider,
]


def get_provider(
    base: type[ProviderBase], use_mock: bool = False
) -> type[ProviderBase]:
    """Pick the implementation of a provider base.

    A base without subclasses is its own implementation. Otherwise the
    subclass whose __is_mock__ equals use_mock is returned.

    Raises:
        DependencyInjectionError: If no subclass matches
    """
    candidates = base.__subclasses__()
    if not candidates:
        return base

    for candidate in candidates:
        if candidate.__is_mock__ is use_mock:
            return candidate

    component = base.__mock_component__ or base.__name__
    kind = "mock" if use_mock else "production"
    raise DependencyInjectionError(f"{component} has no {kind} provider")


__all__ = [
    "PROVIDERS",
    "Component",
    "OAuthRegistryProvider",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdOAuthRegistryProvider",
    "ProdPersistenceProvider",
    "ProdSessionProvider",
    "ProviderBase",
    "SessionProvider",
    "get_provider",
]
