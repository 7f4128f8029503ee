"""Google OAuth provider."""

from typing import Any

from oauthlink.domain.value import AccessToken, Identity

from .base import OAuth2Provider


class GoogleProvider(OAuth2Provider):
    """Google sign-in through the OpenID Connect userinfo endpoint."""

    authorize_endpoint = "https://accounts.google.com/o/oauth2/v2/auth"
    token_endpoint = "https://oauth2.googleapis.com/token"
    profile_endpoint = "https://openidconnect.googleapis.com/v1/userinfo"

    default_scopes = ("openid", "email", "profile")

    def map_identity(self, profile: dict[str, Any], token: AccessToken) -> Identity:
        # Unverified addresses must not be used to match existing accounts
        email = profile.get("email") if profile.get("email_verified") else None
        return self.identity(
            token,
            profile["sub"],
            profile,
            nickname=profile.get("given_name") or profile.get("name"),
            full_name=profile.get("name"),
            email=email,
            avatar=profile.get("picture"),
        )
