"""SoundCloud OAuth provider."""

from typing import Any

from oauthlink.domain.value import AccessToken, Identity

from .base import OAuth2Provider


class SoundCloudProvider(OAuth2Provider):
    """SoundCloud login."""

    authorize_endpoint = "https://secure.soundcloud.com/authorize"
    token_endpoint = "https://secure.soundcloud.com/oauth/token"
    profile_endpoint = "https://api.soundcloud.com/me"

    def profile_headers(self, token: AccessToken) -> dict[str, str]:
        return {
            "Authorization": f"OAuth {token.access_token}",
            "Accept": "application/json; charset=utf-8",
        }

    def map_identity(self, profile: dict[str, Any], token: AccessToken) -> Identity:
        return self.identity(
            token,
            profile["id"],
            profile,
            nickname=profile.get("username"),
            full_name=profile.get("full_name"),
            avatar=profile.get("avatar_url"),
        )
