"""Interface layer errors and exception handlers."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from oauthlink.domain.error import (
    EntropyUnavailable,
    ProviderFlowError,
    ProviderNotRegistered,
    StateMismatch,
)

logger = logging.getLogger(__name__)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class NotAuthenticatedError(InterfaceError):
    """Request requires an authenticated user."""

    pass


def callback_error_code(exc: Exception) -> str:
    """Short error code passed to the frontend error page."""
    if isinstance(exc, StateMismatch):
        return "invalid_state"
    if isinstance(exc, ProviderFlowError):
        return "provider_failed"
    return "unexpected"


def register_error_handlers(app: FastAPI) -> None:
    """Map domain errors escaping a route to HTTP responses."""

    @app.exception_handler(ProviderNotRegistered)
    async def _provider_not_registered(
        request: Request, exc: ProviderNotRegistered
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(StateMismatch)
    async def _state_mismatch(request: Request, exc: StateMismatch) -> JSONResponse:
        logger.warning(f"Rejected OAuth callback: {exc}")
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": "Invalid OAuth state"},
        )

    @app.exception_handler(ProviderFlowError)
    async def _provider_flow_error(
        request: Request, exc: ProviderFlowError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.exception_handler(NotAuthenticatedError)
    async def _not_authenticated(
        request: Request, exc: NotAuthenticatedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": str(exc)}
        )

    @app.exception_handler(EntropyUnavailable)
    async def _entropy_unavailable(
        request: Request, exc: EntropyUnavailable
    ) -> JSONResponse:
        logger.critical(f"State generation failed: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Service unavailable"},
        )
