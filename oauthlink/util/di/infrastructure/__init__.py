"""Infrastructure providers."""

# Import bases
from .oauth import OAuthRegistryProvider
from .persistence import PersistenceProvider
from .session import SessionProvider

# Import implementations (needed for __subclasses__())
from .oauth import ProdOAuthRegistryProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .session import ProdSessionProvider  # noqa: F401

__all__ = [
    "OAuthRegistryProvider",
    "PersistenceProvider",
    "ProdOAuthRegistryProvider",
    "ProdPersistenceProvider",
    "ProdSessionProvider",
    "SessionProvider",
]
