"""OAuth provider capability interface."""

from abc import ABC, abstractmethod

from oauthlink.domain.value import AccessToken, Identity


class OAuthProvider(ABC):
    """One external OAuth2 service's authorization, token and profile dialect.

    Implementations are constructed once at startup from configuration and
    shared across requests, so they must not keep per-flow state.
    """

    alias: str

    @abstractmethod
    def authorization_url(self, state: str) -> str:
        """Build the provider's authorization URL.

        Args:
            state: Anti-forgery state to embed

        Returns:
            URL the user agent should be redirected to
        """
        pass

    @abstractmethod
    async def exchange_code(self, code: str) -> AccessToken:
        """Exchange an authorization code for an access token.

        Raises:
            TokenExchangeFailed: On transport error, non-2xx or malformed body
        """
        pass

    @abstractmethod
    async def fetch_identity(self, token: AccessToken) -> Identity:
        """Fetch the authenticated account and normalize it.

        Raises:
            ProfileFetchFailed: On transport error, non-2xx or missing user ID
        """
        pass
