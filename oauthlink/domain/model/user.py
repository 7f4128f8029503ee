"""User entity.

Users are owned by the host application; the linking engine only creates
them from a provider identity and looks them up.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from oauthlink.domain.model.common import DomainModel
from oauthlink.domain.value import UserId


class User(DomainModel):
    """Local user account."""

    id: UserId
    nickname: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
