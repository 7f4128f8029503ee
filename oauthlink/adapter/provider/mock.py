"""Mock OAuth provider for testing and local development."""

from oauthlink.domain.service.provider import OAuthProvider
from oauthlink.domain.value import AccessToken, Identity


class MockOAuthProvider(OAuthProvider):
    """Deterministic provider that never leaves the process.

    Records every call so tests can assert whether the provider was reached.
    """

    def __init__(
        self,
        alias: str = "mock",
        provider_user_id: str = "mock123",
        email: str | None = "mock@example.com",
        nickname: str | None = "mockuser",
    ) -> None:
        self.alias = alias
        self.provider_user_id = provider_user_id
        self.email = email
        self.nickname = nickname
        self.exchanged_codes: list[str] = []
        self.fetched_tokens: list[str] = []

    def authorization_url(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://provider.example.com/{self.alias}/authorize?state={state}&mock=true"

    async def exchange_code(self, code: str) -> AccessToken:
        """Return a token derived from the code."""
        self.exchanged_codes.append(code)
        return AccessToken(access_token=f"token-{code}", token_type="bearer")

    async def fetch_identity(self, token: AccessToken) -> Identity:
        """Return the configured mock identity."""
        self.fetched_tokens.append(token.access_token)
        return Identity(
            provider_alias=self.alias,
            provider_user_id=self.provider_user_id,
            nickname=self.nickname,
            email=self.email,
            access_token=token.access_token,
        )
