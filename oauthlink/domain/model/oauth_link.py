"""OAuth link entity.

Links an external provider identity to a local user account.
"""

from datetime import datetime, timezone

from pydantic import Field

from oauthlink.domain.model.common import DomainModel
from oauthlink.domain.value import OAuthLinkId, UserId


class OAuthLink(DomainModel):
    """Persisted association between a local user and a provider identity.

    (provider, provider_user_id) is unique: an external account belongs to
    at most one local user. A user may hold links to several providers.
    """

    id: OAuthLinkId
    user_id: UserId
    provider: str  # Provider alias, e.g. 'github'
    provider_user_id: str
    access_token: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
