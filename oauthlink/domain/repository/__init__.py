"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from oauthlink.domain.repository.oauth_link import OAuthLinkRepository
from oauthlink.domain.repository.user import UserRepository

__all__ = [
    "OAuthLinkRepository",
    "UserRepository",
]
