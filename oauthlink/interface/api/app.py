"""FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from oauthlink.config import AuthSettings, Settings
from oauthlink.domain.service import ProviderRegistry
from oauthlink.interface.api.routes import auth, health
from oauthlink.interface.error import register_error_handlers
from oauthlink.util.di.container import create_container, setup_di
from oauthlink.util.error import ConfigurationError
from oauthlink.util.logging import setup_logging
from oauthlink.util.observability import instrument_fastapi, instrument_httpx

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the provider registry before serving, close the container after.

    A misconfigured provider fails startup instead of the first login.
    """
    container: AsyncContainer = app.state.dishka_container
    registry = await container.get(ProviderRegistry)
    aliases = ", ".join(registry.aliases()) or "none"
    logger.info("OAuth providers registered: %s", aliases)

    yield

    await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire must already be configured; scripts/start_app.py does so.

    Args:
        container: DI container to use; the production container if omitted

    Raises:
        ConfigurationError: If production runs with the default JWT secret
    """
    settings = Settings()
    setup_logging(settings)

    if (
        settings.environment == "production"
        and settings.auth.jwt_secret == AuthSettings().jwt_secret
    ):
        raise ConfigurationError("AUTH__JWT_SECRET must be set in production")

    instrument_httpx()

    app_instance = FastAPI(
        title="OAuth Link API",
        description="Link external OAuth identities to local user accounts",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)

    return app_instance
