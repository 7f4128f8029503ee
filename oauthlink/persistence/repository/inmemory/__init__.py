"""In-memory repository implementations for testing."""

from oauthlink.persistence.repository.inmemory.oauth_link import (
    InMemoryOAuthLinkRepository,
)
from oauthlink.persistence.repository.inmemory.user import InMemoryUserRepository

__all__ = [
    "InMemoryOAuthLinkRepository",
    "InMemoryUserRepository",
]
