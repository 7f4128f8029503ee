"""Instagram OAuth provider."""

from typing import Any

from oauthlink.domain.value import AccessToken, Identity

from .base import OAuth2Provider


class InstagramProvider(OAuth2Provider):
    """Instagram Basic Display login.

    The Graph endpoint takes the token as a query parameter and never
    exposes an email address.
    """

    authorize_endpoint = "https://api.instagram.com/oauth/authorize"
    token_endpoint = "https://api.instagram.com/oauth/access_token"
    profile_endpoint = "https://graph.instagram.com/me"

    default_scopes = ("user_profile",)
    scope_separator = ","

    def profile_headers(self, token: AccessToken) -> dict[str, str]:
        return {"Accept": "application/json"}

    def profile_params(self, token: AccessToken) -> dict[str, str]:
        return {"fields": "id,username", "access_token": token.access_token}

    def map_identity(self, profile: dict[str, Any], token: AccessToken) -> Identity:
        return self.identity(
            token,
            profile["id"],
            profile,
            nickname=profile.get("username"),
        )
