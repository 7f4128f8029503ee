"""OAuth provider adapters."""

from .base import OAuth2Provider
from .facebook import FacebookProvider
from .factory import BUILTIN_PROVIDERS, build_registry, resolve_provider_class
from .github import GitHubProvider
from .google import GoogleProvider
from .instagram import InstagramProvider
from .linkedin import LinkedInProvider
from .mock import MockOAuthProvider
from .soundcloud import SoundCloudProvider

__all__ = [
    "BUILTIN_PROVIDERS",
    "FacebookProvider",
    "GitHubProvider",
    "GoogleProvider",
    "InstagramProvider",
    "LinkedInProvider",
    "MockOAuthProvider",
    "OAuth2Provider",
    "SoundCloudProvider",
    "build_registry",
    "resolve_provider_class",
]
