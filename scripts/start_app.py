#!/usr/bin/env python3
"""Start the OAuth link API with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from oauthlink.config import Settings
from oauthlink.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting FastAPI application",
            environment=settings.environment,
            port=settings.port,
        )

        # create_app runs in the server process; a misconfigured provider
        # fails here rather than on the first login
        uvicorn.run(
            "oauthlink.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
