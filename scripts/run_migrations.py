#!/usr/bin/env python3
"""Apply the users / oauth_identities schema with Logfire error tracking.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a given revision
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from oauthlink.config import Settings
from oauthlink.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str]) -> int:
    """Run migrations up to the requested revision and log failures."""
    settings = Settings()
    configure_logfire(settings)

    target = argv[0] if argv else "head"

    try:
        logfire.info(
            "Starting database migrations",
            environment=settings.environment,
            target=target,
        )

        alembic_cfg = Config(str(ALEMBIC_INI))
        command.upgrade(alembic_cfg, target)

        logfire.info("Database migrations completed", target=target)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
