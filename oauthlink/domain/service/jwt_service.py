"""Auth token service."""

import logfire

from oauthlink.config import AuthSettings
from oauthlink.util.jwt import JWTError, TokenPayload, create_token, verify_token


class JWTService:
    """Issues and reads the token marking a user as authenticated."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: str) -> str:
        with logfire.span("jwt_service.create_token", user_id=user_id):
            return create_token(user_id, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a token.

        Raises:
            JWTError: If the token is invalid or expired
        """
        return verify_token(token, self.auth_settings)

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Subject of a valid token, or None when absent, expired or forged."""
        if not token:
            return None

        try:
            return self.verify_token(token).sub
        except JWTError as e:
            logfire.debug("Ignoring unusable auth token", error=str(e))
            return None
