"""Mock providers for testing."""

from .oauth import MockOAuthRegistryProvider
from .persistence import MockPersistenceProvider
from .session import TEST_SESSION_ID, MockSessionProvider
from .container import build_test_container

__all__ = [
    "MockOAuthRegistryProvider",
    "MockPersistenceProvider",
    "MockSessionProvider",
    "TEST_SESSION_ID",
    "build_test_container",
]
