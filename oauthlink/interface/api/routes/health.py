"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from oauthlink.domain.service import ProviderRegistry

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    providers: list[str]


@router.get("/health", response_model=HealthResponse)
async def health_check(registry: FromDishka[ProviderRegistry]) -> HealthResponse:
    """Basic health check endpoint.

    Returns:
        Health status and the provider aliases accepting logins
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        providers=registry.aliases(),
    )
