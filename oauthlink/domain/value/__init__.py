"""Domain value objects."""

from oauthlink.domain.value.identifiers import OAuthLinkId, UserId
from oauthlink.domain.value.types import (
    AccessToken,
    AuthorizationState,
    Identity,
    LoginBranch,
)

__all__ = [
    # Identifiers
    "UserId",
    "OAuthLinkId",
    # Types
    "AccessToken",
    "AuthorizationState",
    "Identity",
    "LoginBranch",
]
