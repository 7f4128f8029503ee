"""Builds the provider registry from configuration."""

import importlib

import httpx
import logfire

from oauthlink.config import CustomProviderSettings, OAuthSettings, ProviderSettings
from oauthlink.domain.error import ProviderMisconfigured
from oauthlink.domain.service.provider import OAuthProvider
from oauthlink.domain.service.registry import ProviderRegistry

from .facebook import FacebookProvider
from .github import GitHubProvider
from .google import GoogleProvider
from .instagram import InstagramProvider
from .linkedin import LinkedInProvider
from .soundcloud import SoundCloudProvider

BUILTIN_PROVIDERS: dict[str, type[OAuthProvider]] = {
    "facebook": FacebookProvider,
    "github": GitHubProvider,
    "google": GoogleProvider,
    "linkedin": LinkedInProvider,
    "instagram": InstagramProvider,
    "soundcloud": SoundCloudProvider,
}


def build_registry(
    settings: OAuthSettings, http_client: httpx.AsyncClient
) -> ProviderRegistry:
    """Construct and register every configured provider.

    Runs at startup so configuration mistakes stop the application before
    it serves a request.

    Args:
        settings: OAuth configuration
        http_client: Shared client handed to every provider

    Returns:
        Registry holding built-in and custom providers

    Raises:
        ProviderMisconfigured: If a built-in alias is unknown, a custom
            provider class cannot be resolved, or a custom alias shadows a
            configured built-in
    """
    registry = ProviderRegistry()

    with logfire.span("build_provider_registry"):
        for alias, config in settings.providers.items():
            provider_class = BUILTIN_PROVIDERS.get(alias)
            if provider_class is None:
                raise ProviderMisconfigured(
                    alias,
                    "not a built-in provider "
                    f"(known: {', '.join(sorted(BUILTIN_PROVIDERS))}); "
                    "configure it under custom_providers with a provider_class",
                )
            registry.register(alias, _construct(alias, provider_class, config, http_client))
            logfire.debug("Registered OAuth provider", provider=alias)

        for alias, config in settings.custom_providers.items():
            if alias in settings.providers:
                raise ProviderMisconfigured(
                    alias, "custom provider would shadow a configured built-in provider"
                )
            provider_class = resolve_provider_class(alias, config)
            registry.register(alias, _construct(alias, provider_class, config, http_client))
            logfire.debug(
                "Registered custom OAuth provider",
                provider=alias,
                provider_class=config.provider_class,
            )

    logfire.info("OAuth providers registered", providers=registry.aliases())
    return registry


def resolve_provider_class(
    alias: str, config: CustomProviderSettings
) -> type[OAuthProvider]:
    """Import the class named by a custom provider's provider_class.

    Accepts ``package.module:Class`` and ``package.module.Class``.

    Raises:
        ProviderMisconfigured: If the path is missing, unimportable, or does
            not name an OAuthProvider subclass
    """
    path = config.provider_class
    if not path:
        raise ProviderMisconfigured(alias, "custom provider has no provider_class")

    if ":" in path:
        module_name, _, attr = path.partition(":")
    else:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ProviderMisconfigured(alias, f"invalid provider_class '{path}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ProviderMisconfigured(
            alias, f"could not import module '{module_name}': {e}"
        ) from e

    provider_class = getattr(module, attr, None)
    if provider_class is None:
        raise ProviderMisconfigured(
            alias, f"module '{module_name}' has no attribute '{attr}'"
        )
    if not isinstance(provider_class, type) or not issubclass(
        provider_class, OAuthProvider
    ):
        raise ProviderMisconfigured(alias, f"'{path}' is not an OAuthProvider class")

    return provider_class


def _construct(
    alias: str,
    provider_class: type[OAuthProvider],
    config: ProviderSettings,
    http_client: httpx.AsyncClient,
) -> OAuthProvider:
    try:
        return provider_class(alias, config, http_client)
    except TypeError as e:
        raise ProviderMisconfigured(
            alias, f"could not construct {provider_class.__name__}: {e}"
        ) from e
