"""Domain value objects for OAuth linking.

Value objects are immutable and defined by their values, not identity.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ValueObject(BaseModel):
    """Immutable value compared by its fields."""

    model_config = ConfigDict(frozen=True)


class AccessToken(ValueObject):
    """Token set returned by a provider's token endpoint."""

    access_token: str
    refresh_token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None
    scope: str | None = None
    raw: dict[str, Any] = {}

    @field_validator("access_token")
    @classmethod
    def validate_access_token(cls, v: str) -> str:
        """Reject empty tokens."""
        if not v:
            raise ValueError("Access token must not be empty")
        return v


class Identity(ValueObject):
    """Provider-agnostic view of an authenticated external account.

    Only provider_user_id is guaranteed; display attributes are best-effort
    and depend on what the provider and the granted scopes expose.
    """

    provider_alias: str
    provider_user_id: str  # Permanent, opaque per-provider ID
    nickname: str | None = None
    full_name: str | None = None
    email: str | None = None
    avatar: str | None = None
    access_token: str
    refresh_token: str | None = None
    raw: dict[str, Any] = {}

    @field_validator("provider_user_id")
    @classmethod
    def validate_provider_user_id(cls, v: str) -> str:
        """Provider user ID is mandatory."""
        if not v:
            raise ValueError("Provider user ID must not be empty")
        return v


class AuthorizationState(ValueObject):
    """Anti-forgery state issued for one redirect to a provider.

    Lives in the session between redirect-out and callback-in and is
    consumed by the first callback, whatever its outcome.
    """

    alias: str
    state: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class LoginBranch(str, Enum):
    """How a completed identity was reconciled with local users."""

    EXISTING_LINK = "existing_link"
    LINKED_TO_CURRENT_USER = "linked_to_current_user"
    LINKED_BY_EMAIL = "linked_by_email"
    CREATED_USER = "created_user"
