"""PostgreSQL repository implementations."""

from oauthlink.persistence.repository.oauth_link import PostgresOAuthLinkRepository
from oauthlink.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresOAuthLinkRepository",
    "PostgresUserRepository",
]
