"""Domain services."""

from .authenticator import Authenticator, LoginResult
from .jwt_service import JWTService
from .oauth_service import STATE_SESSION_KEY, OAuthService
from .provider import OAuthProvider
from .registry import ProviderRegistry
from .session import Session
from .state import StateGenerator

__all__ = [
    "Authenticator",
    "JWTService",
    "LoginResult",
    "OAuthProvider",
    "OAuthService",
    "ProviderRegistry",
    "STATE_SESSION_KEY",
    "Session",
    "StateGenerator",
]
