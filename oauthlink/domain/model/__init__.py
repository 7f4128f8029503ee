"""Domain model entities."""

from oauthlink.domain.model.oauth_link import OAuthLink
from oauthlink.domain.model.user import User

__all__ = [
    "OAuthLink",
    "User",
]
