"""Logfire setup and instrumentation.

Services emit spans and events directly::

    with logfire.span("oauth_service.complete", provider=alias):
        logfire.info("OAuth link created", provider=alias, user_id=str(user_id))
"""

from importlib.metadata import PackageNotFoundError, version

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from oauthlink.config import Settings

SERVICE_NAME = "oauthlink"

# OAuth values that must never reach an exported span
SCRUBBED_FIELDS = ["access_token", "client_secret"]


def _service_version() -> str:
    try:
        return version(SERVICE_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is built.

    Export happens when send_to_logfire is set, or else when a token exists.
    """
    observability = settings.observability
    send = observability.send_to_logfire
    if send is None:
        send = observability.logfire_token is not None

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=_service_version(),
        environment=settings.environment,
        token=observability.logfire_token,
        send_to_logfire=send,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUBBED_FIELDS),
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        send_to_logfire=send,
    )


def instrument_fastapi(app: FastAPI) -> None:
    # Request headers hold the session and auth cookies
    logfire.instrument_fastapi(app, capture_headers=False)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace token exchange and profile requests."""
    logfire.instrument_httpx()
