"""Unit tests for the generic OAuth2Provider over a mocked HTTP transport."""

import json
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from oauthlink.adapter.provider import GitHubProvider
from oauthlink.config import ProviderSettings
from oauthlink.domain.error import ProfileFetchFailed, TokenExchangeFailed
from oauthlink.domain.value import AccessToken

SETTINGS = ProviderSettings(
    client_id="client-123",
    client_secret="secret-456",
    redirect_uri="https://accounts.example.com/auth/github/callback",
)

GITHUB_PROFILE = {
    "id": 583231,
    "login": "octocat",
    "name": "The Octocat",
    "email": "octocat@github.com",
    "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
}


def make_provider(handler, settings: ProviderSettings = SETTINGS) -> GitHubProvider:
    """GitHub provider whose HTTP calls are answered by handler."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GitHubProvider("github", settings, client)


def github_api(token_response=None, profile_response=None, seen=None):
    """Handler answering GitHub's token and user endpoints."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.url.path == "/login/oauth/access_token":
            if token_response is not None:
                return token_response
            return httpx.Response(
                200,
                json={"access_token": "gho_abc", "token_type": "bearer", "scope": "user:email"},
            )
        if request.url.path == "/user":
            if profile_response is not None:
                return profile_response
            return httpx.Response(200, json=GITHUB_PROFILE)
        return httpx.Response(404)

    return handler


class TestAuthorizationUrl:
    """Tests for authorization_url()."""

    def test_embeds_client_redirect_scopes_and_state(self):
        """Should carry everything the provider needs to call back."""
        provider = make_provider(github_api())

        url = provider.authorization_url("state-xyz")

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == (
            "https://github.com/login/oauth/authorize"
        )
        assert params["client_id"] == ["client-123"]
        assert params["redirect_uri"] == [SETTINGS.redirect_uri]
        assert params["state"] == ["state-xyz"]
        assert params["response_type"] == ["code"]
        assert params["scope"] == ["user:email"]

    def test_configured_scopes_replace_defaults(self):
        """Configured scopes should be joined with the provider's separator."""
        settings = SETTINGS.model_copy(update={"scopes": ["read:user", "user:email"]})
        provider = make_provider(github_api(), settings)

        params = parse_qs(urlparse(provider.authorization_url("s")).query)

        assert params["scope"] == ["read:user,user:email"]


class TestExchangeCode:
    """Tests for exchange_code()."""

    @pytest.mark.asyncio
    async def test_posts_code_and_credentials(self):
        """Should send the code with client credentials and parse the token."""
        seen: list[httpx.Request] = []
        provider = make_provider(github_api(seen=seen))

        token = await provider.exchange_code("code-1")

        assert token.access_token == "gho_abc"
        assert token.scope == "user:email"
        request = seen[0]
        assert request.method == "POST"
        form = parse_qs(request.content.decode())
        assert form["code"] == ["code-1"]
        assert form["client_id"] == ["client-123"]
        assert form["client_secret"] == ["secret-456"]
        assert form["grant_type"] == ["authorization_code"]

    @pytest.mark.asyncio
    async def test_rejected_code_raises(self):
        """Should raise TokenExchangeFailed on an error status."""
        provider = make_provider(
            github_api(token_response=httpx.Response(401, json={"error": "unauthorized"}))
        )

        with pytest.raises(TokenExchangeFailed):
            await provider.exchange_code("code-1")

    @pytest.mark.asyncio
    async def test_error_body_with_ok_status_raises(self):
        """GitHub answers 200 with an error body for bad codes."""
        provider = make_provider(
            github_api(
                token_response=httpx.Response(
                    200,
                    json={
                        "error": "bad_verification_code",
                        "error_description": "The code passed is incorrect or expired.",
                    },
                )
            )
        )

        with pytest.raises(TokenExchangeFailed, match="incorrect or expired"):
            await provider.exchange_code("code-1")

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self):
        """Should raise TokenExchangeFailed when the body is not JSON."""
        provider = make_provider(
            github_api(token_response=httpx.Response(200, text="access_token=abc"))
        )

        with pytest.raises(TokenExchangeFailed):
            await provider.exchange_code("code-1")

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        """Should raise TokenExchangeFailed when the provider is unreachable."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = make_provider(handler)

        with pytest.raises(TokenExchangeFailed):
            await provider.exchange_code("code-1")

    @pytest.mark.asyncio
    async def test_non_numeric_expiry_is_dropped(self):
        """A garbled expires_in should not fail the exchange."""
        provider = make_provider(
            github_api(
                token_response=httpx.Response(
                    200, json={"access_token": "t", "expires_in": "soon"}
                )
            )
        )

        token = await provider.exchange_code("code-1")

        assert token.access_token == "t"
        assert token.expires_in is None

    @pytest.mark.asyncio
    async def test_numeric_string_expiry_is_parsed(self):
        """Some providers send expires_in as a string."""
        provider = make_provider(
            github_api(
                token_response=httpx.Response(
                    200, json={"access_token": "t", "expires_in": "3600"}
                )
            )
        )

        token = await provider.exchange_code("code-1")

        assert token.expires_in == 3600

    @pytest.mark.asyncio
    async def test_list_scope_is_joined(self):
        """A scope list should be normalized to a space-separated string."""
        provider = make_provider(
            github_api(
                token_response=httpx.Response(
                    200, json={"access_token": "t", "scope": ["a", "b"]}
                )
            )
        )

        token = await provider.exchange_code("code-1")

        assert token.scope == "a b"

    @pytest.mark.asyncio
    async def test_unusable_optional_fields_are_dropped(self):
        """Non-string refresh token, token type or scope are ignored."""
        provider = make_provider(
            github_api(
                token_response=httpx.Response(
                    200,
                    json={
                        "access_token": "t",
                        "refresh_token": 42,
                        "token_type": ["bearer"],
                        "scope": {"read": True},
                    },
                )
            )
        )

        token = await provider.exchange_code("code-1")

        assert token.refresh_token is None
        assert token.token_type is None
        assert token.scope is None
        assert token.raw["refresh_token"] == 42

    @pytest.mark.asyncio
    async def test_non_string_access_token_raises(self):
        """Should raise TokenExchangeFailed when access_token is not a string."""
        provider = make_provider(
            github_api(
                token_response=httpx.Response(200, json={"access_token": ["t"]})
            )
        )

        with pytest.raises(TokenExchangeFailed):
            await provider.exchange_code("code-1")


class TestFetchIdentity:
    """Tests for fetch_identity()."""

    @pytest.mark.asyncio
    async def test_maps_profile_to_identity(self):
        """Should map the GitHub profile and keep the token on the identity."""
        seen: list[httpx.Request] = []
        provider = make_provider(github_api(seen=seen))
        token = AccessToken(access_token="gho_abc", refresh_token="ghr_def")

        identity = await provider.fetch_identity(token)

        assert identity.provider_alias == "github"
        assert identity.provider_user_id == "583231"
        assert identity.nickname == "octocat"
        assert identity.full_name == "The Octocat"
        assert identity.email == "octocat@github.com"
        assert identity.avatar == GITHUB_PROFILE["avatar_url"]
        assert identity.access_token == "gho_abc"
        assert identity.refresh_token == "ghr_def"
        assert seen[0].headers["Authorization"] == "Bearer gho_abc"

    @pytest.mark.asyncio
    async def test_private_email_is_absent(self):
        """A null email should leave the identity without one."""
        profile = {**GITHUB_PROFILE, "email": None}
        provider = make_provider(
            github_api(profile_response=httpx.Response(200, json=profile))
        )

        identity = await provider.fetch_identity(AccessToken(access_token="t"))

        assert identity.email is None

    @pytest.mark.asyncio
    async def test_missing_user_id_raises(self):
        """A profile without an ID is unusable."""
        profile = {key: value for key, value in GITHUB_PROFILE.items() if key != "id"}
        provider = make_provider(
            github_api(profile_response=httpx.Response(200, json=profile))
        )

        with pytest.raises(ProfileFetchFailed):
            await provider.fetch_identity(AccessToken(access_token="t"))

    @pytest.mark.asyncio
    async def test_null_user_id_raises(self):
        """A null ID is as unusable as a missing one."""
        profile = {**GITHUB_PROFILE, "id": None}
        provider = make_provider(
            github_api(profile_response=httpx.Response(200, json=profile))
        )

        with pytest.raises(ProfileFetchFailed):
            await provider.fetch_identity(AccessToken(access_token="t"))

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        """Should raise ProfileFetchFailed when the API rejects the token."""
        provider = make_provider(
            github_api(profile_response=httpx.Response(401, json={"message": "Bad credentials"}))
        )

        with pytest.raises(ProfileFetchFailed):
            await provider.fetch_identity(AccessToken(access_token="t"))

    @pytest.mark.asyncio
    async def test_non_object_body_raises(self):
        """A JSON list is not a profile."""
        provider = make_provider(
            github_api(profile_response=httpx.Response(200, content=json.dumps([1, 2])))
        )

        with pytest.raises(ProfileFetchFailed):
            await provider.fetch_identity(AccessToken(access_token="t"))
