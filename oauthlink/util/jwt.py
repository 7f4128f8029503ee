"""Signed auth tokens (HS256 by default) carrying the logged-in user."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from oauthlink.config import AuthSettings


class TokenPayload(BaseModel):
    """Registered claims we issue: subject, issued-at and expiry."""

    sub: str
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """Token could not be verified."""


def create_token(user_id: str, settings: AuthSettings) -> str:
    """Sign a token whose subject is user_id, valid for jwt_expiry_days."""
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature and expiry, returning the claims.

    Raises:
        JWTError: If the token is expired, tampered with or malformed
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e
    return TokenPayload(**claims)
