"""GitHub OAuth provider."""

from typing import Any

from oauthlink.domain.value import AccessToken, Identity

from .base import OAuth2Provider


class GitHubProvider(OAuth2Provider):
    """GitHub OAuth App / GitHub App user authorization.

    The numeric account ID is used as provider user ID; logins can be renamed.
    """

    authorize_endpoint = "https://github.com/login/oauth/authorize"
    token_endpoint = "https://github.com/login/oauth/access_token"
    profile_endpoint = "https://api.github.com/user"

    default_scopes = ("user:email",)
    scope_separator = ","

    def profile_headers(self, token: AccessToken) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {token.access_token}",
            "Accept": "application/vnd.github+json",
        }

    def map_identity(self, profile: dict[str, Any], token: AccessToken) -> Identity:
        # email is null unless the user made one public
        return self.identity(
            token,
            profile["id"],
            profile,
            nickname=profile.get("login"),
            full_name=profile.get("name"),
            email=profile.get("email"),
            avatar=profile.get("avatar_url"),
        )
