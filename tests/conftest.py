"""Test configuration and fixtures."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from oauthlink.domain.model import User
from oauthlink.domain.value import Identity, UserId

# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)


def make_identity(
    provider_alias: str = "github",
    provider_user_id: str = "gh-1001",
    email: str | None = "ada@example.com",
    nickname: str | None = "ada",
    access_token: str = "token-abc",
) -> Identity:
    """Helper to build an Identity as a provider would return it."""
    return Identity(
        provider_alias=provider_alias,
        provider_user_id=provider_user_id,
        email=email,
        nickname=nickname,
        access_token=access_token,
    )


def make_user(email: str | None = None, nickname: str | None = None) -> User:
    """Helper to build a host user."""
    now = datetime.now(timezone.utc)
    return User(
        id=UserId(uuid4()),
        nickname=nickname,
        email=email,
        created_at=now,
        updated_at=now,
    )

