"""Facebook OAuth provider."""

from typing import Any

from oauthlink.domain.value import AccessToken, Identity

from .base import OAuth2Provider

GRAPH_VERSION = "v19.0"


class FacebookProvider(OAuth2Provider):
    """Facebook Login via the Graph API."""

    authorize_endpoint = f"https://www.facebook.com/{GRAPH_VERSION}/dialog/oauth"
    token_endpoint = f"https://graph.facebook.com/{GRAPH_VERSION}/oauth/access_token"
    profile_endpoint = f"https://graph.facebook.com/{GRAPH_VERSION}/me"

    default_scopes = ("email",)
    scope_separator = ","

    def profile_params(self, token: AccessToken) -> dict[str, str]:
        return {"fields": "id,name,email,picture.type(large)"}

    def map_identity(self, profile: dict[str, Any], token: AccessToken) -> Identity:
        picture = (profile.get("picture") or {}).get("data") or {}
        return self.identity(
            token,
            profile["id"],
            profile,
            nickname=profile.get("name"),
            full_name=profile.get("name"),
            email=profile.get("email"),
            avatar=picture.get("url"),
        )
