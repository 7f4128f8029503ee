"""Generic OAuth 2.0 authorization-code provider.

Built-in providers subclass OAuth2Provider and only declare endpoints,
default scopes and how to map the profile payload into an Identity.
"""

from abc import abstractmethod
from typing import Any, ClassVar
from urllib.parse import urlencode

import httpx
import logfire

from oauthlink.config import ProviderSettings
from oauthlink.domain.error import ProfileFetchFailed, TokenExchangeFailed
from oauthlink.domain.service.provider import OAuthProvider
from oauthlink.domain.value import AccessToken, Identity


class OAuth2Provider(OAuthProvider):
    """OAuth 2.0 authorization-code flow over httpx.

    Subclasses set the endpoint class attributes and implement map_identity().
    """

    authorize_endpoint: ClassVar[str]
    token_endpoint: ClassVar[str]
    profile_endpoint: ClassVar[str]

    default_scopes: ClassVar[tuple[str, ...]] = ()
    scope_separator: ClassVar[str] = " "

    def __init__(
        self,
        alias: str,
        settings: ProviderSettings,
        http_client: httpx.AsyncClient,
    ) -> None:
        """Initialize provider.

        Args:
            alias: Alias the provider is registered under
            settings: Client credentials, scopes and redirect URI
            http_client: Shared client used for token and profile requests
        """
        self.alias = alias
        self.client_id = settings.client_id
        self.client_secret = settings.client_secret
        self.redirect_uri = settings.redirect_uri
        self.scopes = list(settings.scopes) or list(self.default_scopes)
        self.http_client = http_client

    def authorization_url(self, state: str) -> str:
        """Build the authorization URL embedding client, scopes and state."""
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "state": state,
        }
        if self.scopes:
            params["scope"] = self.scope_separator.join(self.scopes)
        params.update(self.authorization_params())

        return f"{self.authorize_endpoint}?{urlencode(params)}"

    def authorization_params(self) -> dict[str, str]:
        """Extra query parameters for the authorization URL."""
        return {}

    async def exchange_code(self, code: str) -> AccessToken:
        """Exchange the authorization code at the token endpoint.

        Raises:
            TokenExchangeFailed: On transport error, non-2xx or malformed body
        """
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
        }

        try:
            response = await self.http_client.post(
                self.token_endpoint,
                data=data,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            logfire.error(
                "Token exchange HTTP error", provider=self.alias, error=str(e)
            )
            raise TokenExchangeFailed(self.alias, f"HTTP error during token exchange: {e}")

        if not response.is_success:
            logfire.error(
                "Token exchange failed",
                provider=self.alias,
                status_code=response.status_code,
                error=response.text,
            )
            raise TokenExchangeFailed(
                self.alias, f"Token exchange failed: {response.status_code}"
            )

        payload = self._json(response, TokenExchangeFailed)
        return self.parse_token(payload)

    def parse_token(self, payload: dict[str, Any]) -> AccessToken:
        """Turn a token endpoint response into an AccessToken.

        Optional fields that are malformed are dropped rather than failing
        the login.

        Raises:
            TokenExchangeFailed: If no access token is present
        """
        access_token = payload.get("access_token")
        if not access_token or not isinstance(access_token, str):
            # Some providers answer 200 with an error body
            error = payload.get("error_description") or payload.get("error")
            raise TokenExchangeFailed(
                self.alias, f"No access token in response: {error or 'unknown error'}"
            )

        try:
            return AccessToken(
                access_token=access_token,
                refresh_token=_optional_str(payload.get("refresh_token")),
                token_type=_optional_str(payload.get("token_type")),
                expires_in=_optional_int(payload.get("expires_in")),
                scope=_scope(payload.get("scope")),
                raw=payload,
            )
        except ValueError as e:
            raise TokenExchangeFailed(
                self.alias, f"Malformed token response: {e}"
            ) from e

    async def fetch_identity(self, token: AccessToken) -> Identity:
        """Fetch the profile and map it to an Identity.

        Raises:
            ProfileFetchFailed: On transport error, non-2xx, malformed body or
                a missing provider user ID
        """
        try:
            response = await self.http_client.get(
                self.profile_endpoint,
                params=self.profile_params(token),
                headers=self.profile_headers(token),
            )
        except httpx.HTTPError as e:
            logfire.error("Profile fetch HTTP error", provider=self.alias, error=str(e))
            raise ProfileFetchFailed(self.alias, f"HTTP error fetching profile: {e}")

        if not response.is_success:
            logfire.error(
                "Profile fetch failed",
                provider=self.alias,
                status_code=response.status_code,
                error=response.text,
            )
            raise ProfileFetchFailed(
                self.alias, f"Profile request failed: {response.status_code}"
            )

        profile = self._json(response, ProfileFetchFailed)

        try:
            return self.map_identity(profile, token)
        except (KeyError, TypeError, ValueError) as e:
            logfire.error(
                "Profile missing required fields", provider=self.alias, error=str(e)
            )
            raise ProfileFetchFailed(self.alias, f"Unusable profile: {e}")

    def profile_headers(self, token: AccessToken) -> dict[str, str]:
        """Headers for the profile request."""
        return {
            "Authorization": f"Bearer {token.access_token}",
            "Accept": "application/json",
        }

    def profile_params(self, token: AccessToken) -> dict[str, str]:
        """Query parameters for the profile request."""
        return {}

    @abstractmethod
    def map_identity(self, profile: dict[str, Any], token: AccessToken) -> Identity:
        """Map the provider's profile payload to an Identity.

        Raise KeyError/TypeError/ValueError for missing required fields.
        """
        pass

    def identity(
        self, token: AccessToken, provider_user_id: Any, profile: dict[str, Any], **fields
    ) -> Identity:
        """Build an Identity carrying this provider's alias and token."""
        if provider_user_id is None or provider_user_id == "":
            raise ValueError("provider user ID missing from profile")

        return Identity(
            provider_alias=self.alias,
            provider_user_id=str(provider_user_id),
            access_token=token.access_token,
            refresh_token=token.refresh_token,
            raw=profile,
            **fields,
        )

    def _json(self, response: httpx.Response, error: type) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            raise error(self.alias, "Response body is not JSON")
        if not isinstance(payload, dict):
            raise error(self.alias, "Response body is not a JSON object")
        return payload


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _optional_int(value: Any) -> int | None:
    # expires_in arrives as a number or a numeric string depending on provider
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _scope(value: Any) -> str | None:
    if isinstance(value, str):
        return value or None
    if isinstance(value, list) and all(isinstance(s, str) for s in value):
        return " ".join(value) or None
    return None
