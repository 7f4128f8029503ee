"""Unit tests for the authentication routes."""

from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from oauthlink.interface.api.app import create_app
from tests.di import build_test_container

FRONTEND_URL = "http://localhost:3000"


@pytest.fixture
def client():
    """App over mocked providers and persistence, with real cookie sessions."""
    container = build_test_container(unmock={"session"}, with_fastapi=True)
    with TestClient(create_app(container)) as test_client:
        yield test_client


def login(client: TestClient, alias: str) -> str:
    """Start a login and return the state the provider would echo back."""
    response = client.get(f"/auth/{alias}/login", follow_redirects=False)
    assert response.status_code == 302
    return parse_qs(urlparse(response.headers["location"]).query)["state"][0]


def callback(client: TestClient, alias: str, **params):
    return client.get(f"/auth/{alias}/callback", params=params, follow_redirects=False)


def error_code(response) -> str:
    location = urlparse(response.headers["location"])
    assert f"{location.scheme}://{location.netloc}{location.path}" == (
        f"{FRONTEND_URL}/auth/error"
    )
    return parse_qs(location.query)["error"][0]


class TestLogin:
    """Tests for GET /auth/{alias}/login."""

    def test_redirects_to_provider_and_sets_session_cookie(self, client):
        """Should redirect to the provider and bind the state to a session cookie."""
        response = client.get("/auth/github/login", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"].startswith(
            "https://provider.example.com/github/authorize?state="
        )
        assert "oauth_session" in response.cookies
        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "samesite=lax" in set_cookie

    def test_unknown_provider_is_404(self, client):
        """Should answer 404 for an alias nobody registered."""
        response = client.get("/auth/myspace/login", follow_redirects=False)

        assert response.status_code == 404


class TestCallback:
    """Tests for GET /auth/{alias}/callback."""

    def test_successful_login_sets_auth_cookie(self, client):
        """Should mark the user as authenticated and return to the frontend."""
        state = login(client, "github")

        response = callback(client, "github", code="code-1", state=state)

        assert response.status_code == 302
        assert response.headers["location"] == FRONTEND_URL
        assert "auth_token" in response.cookies

        me = client.get("/auth/me").json()
        assert me["authenticated"] is True
        assert me["user_id"]

    def test_replayed_state_is_rejected(self, client):
        """The same callback URL works once."""
        state = login(client, "github")
        callback(client, "github", code="code-1", state=state)
        client.cookies.delete("auth_token")

        response = callback(client, "github", code="code-1", state=state)

        assert error_code(response) == "invalid_state"
        assert "auth_token" not in response.cookies

    def test_forged_state_is_rejected(self, client):
        """A state the session never issued is rejected."""
        login(client, "github")

        response = callback(client, "github", code="code-1", state="forged")

        assert error_code(response) == "invalid_state"
        assert "auth_token" not in response.cookies
        assert client.get("/auth/me").json()["authenticated"] is False

    def test_state_without_session_cookie_is_rejected(self, client):
        """A valid state presented from another browser is rejected."""
        state = login(client, "github")
        client.cookies.clear()

        response = callback(client, "github", code="code-1", state=state)

        assert error_code(response) == "invalid_state"

    def test_state_for_other_provider_is_rejected(self, client):
        """A state issued for github cannot complete a google login."""
        state = login(client, "github")

        response = callback(client, "google", code="code-1", state=state)

        assert error_code(response) == "invalid_state"

    def test_provider_error_redirects(self, client):
        """A user declining on the provider's page lands on the error page."""
        login(client, "github")

        response = callback(client, "github", error="access_denied")

        assert error_code(response) == "access_denied"

    def test_missing_parameters_redirect(self, client):
        """A callback without code or state is an invalid request."""
        state = login(client, "github")

        response = callback(client, "github", state=state)

        assert error_code(response) == "invalid_request"

    def test_logged_in_user_links_second_provider(self, client):
        """Logging in with another provider while authenticated adds a link."""
        state = login(client, "github")
        callback(client, "github", code="code-1", state=state)
        user_id = client.get("/auth/me").json()["user_id"]

        state = login(client, "mock")
        callback(client, "mock", code="code-2", state=state)

        assert client.get("/auth/me").json()["user_id"] == user_id
        links = client.get("/auth/identities").json()["links"]
        assert [link["provider"] for link in links] == ["github", "mock"]


class TestSessionRoutes:
    """Tests for /auth/me, /auth/identities and /auth/logout."""

    def test_me_without_cookie(self, client):
        """Anonymous callers are reported as unauthenticated."""
        response = client.get("/auth/me")

        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "user_id": None}

    def test_me_with_garbage_token(self, client):
        """An unverifiable token counts as no token."""
        client.cookies.set("auth_token", "not-a-jwt")

        assert client.get("/auth/me").json()["authenticated"] is False

    def test_identities_requires_authentication(self, client):
        """Should answer 401 without an auth cookie."""
        response = client.get("/auth/identities")

        assert response.status_code == 401

    def test_identities_hides_tokens(self, client):
        """Linked identities are listed without their access tokens."""
        state = login(client, "github")
        callback(client, "github", code="code-1", state=state)

        response = client.get("/auth/identities")

        assert response.status_code == 200
        links = response.json()["links"]
        assert links[0]["provider"] == "github"
        assert links[0]["provider_user_id"] == "gh-1001"
        assert "token-code-1" not in response.text

    def test_logout_clears_auth_cookie(self, client):
        """Should expire the auth cookie."""
        state = login(client, "github")
        callback(client, "github", code="code-1", state=state)

        response = client.post("/auth/logout")

        assert response.status_code == 200
        assert response.json()["success"] is True
        set_cookie = response.headers["set-cookie"].lower()
        assert set_cookie.startswith("auth_token=")
        assert "max-age=0" in set_cookie
        assert client.get("/auth/me").json()["authenticated"] is False
