"""List linked identities use case."""

from datetime import datetime

from pydantic import BaseModel

from oauthlink.application.usecase.base import BaseUseCase
from oauthlink.domain.repository import OAuthLinkRepository
from oauthlink.domain.value import UserId


class ListLinksRequest(BaseModel):
    """Request for a user's linked identities."""

    user_id: UserId


class LinkedIdentity(BaseModel):
    """Public view of a link; access tokens are never exposed."""

    provider: str
    provider_user_id: str
    linked_at: datetime


class ListLinksResponse(BaseModel):
    """A user's linked identities."""

    links: list[LinkedIdentity]


class ListLinksUseCase(BaseUseCase[ListLinksRequest, ListLinksResponse]):
    """Use case for listing the providers a user can sign in with."""

    def __init__(self, oauth_link_repository: OAuthLinkRepository) -> None:
        self.oauth_link_repository = oauth_link_repository

    async def execute(self, request: ListLinksRequest) -> ListLinksResponse:
        links = await self.oauth_link_repository.find_all_by_user_id(request.user_id)
        return ListLinksResponse(
            links=[
                LinkedIdentity(
                    provider=link.provider,
                    provider_user_id=link.provider_user_id,
                    linked_at=link.created_at,
                )
                for link in links
            ]
        )
