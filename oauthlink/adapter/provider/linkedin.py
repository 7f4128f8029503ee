"""LinkedIn OAuth provider."""

from typing import Any

from oauthlink.domain.value import AccessToken, Identity

from .base import OAuth2Provider


class LinkedInProvider(OAuth2Provider):
    """Sign In with LinkedIn using OpenID Connect."""

    authorize_endpoint = "https://www.linkedin.com/oauth/v2/authorization"
    token_endpoint = "https://www.linkedin.com/oauth/v2/accessToken"
    profile_endpoint = "https://api.linkedin.com/v2/userinfo"

    default_scopes = ("openid", "profile", "email")

    def map_identity(self, profile: dict[str, Any], token: AccessToken) -> Identity:
        return self.identity(
            token,
            profile["sub"],
            profile,
            nickname=profile.get("given_name"),
            full_name=profile.get("name"),
            email=profile.get("email"),
            avatar=profile.get("picture"),
        )
