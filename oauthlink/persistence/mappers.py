"""Mappers between database rows and domain models."""

from typing import Any, Dict
from uuid import UUID

from oauthlink.domain.model.oauth_link import OAuthLink
from oauthlink.domain.model.user import User
from oauthlink.domain.value import OAuthLinkId, UserId


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        nickname=row.get("nickname"),
        email=row.get("email"),
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_oauth_link(row: Dict[str, Any]) -> OAuthLink:
    """Convert database row to OAuthLink domain model.

    Args:
        row: Database row as dict

    Returns:
        OAuthLink domain model
    """
    return OAuthLink(
        id=OAuthLinkId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        provider=row["provider"],
        provider_user_id=row["provider_user_id"],
        access_token=row["access_token"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def oauth_link_to_dict(link: OAuthLink) -> Dict[str, Any]:
    """Convert OAuthLink domain model to database dict."""
    return link.model_dump()
