#!/usr/bin/env python3
"""Start the comment service.

Exit codes:
    0: server stopped normally
    1: configuration could not be loaded or the database is unreachable
"""

import asyncio
import sys

import logfire
import uvicorn
from pydantic import ValidationError as SettingsValidationError

from commenttree.config import Settings
from commenttree.persistence.database import Database
from commenttree.util.error import ConfigurationError
from commenttree.util.logging import get_logger, setup_logging
from commenttree.util.observability import configure_logfire

logger = get_logger(__name__)


def load_settings() -> Settings:
    """Load settings, wrapping parse failures in ConfigurationError."""
    try:
        return Settings()
    except (SettingsValidationError, OSError, ValueError) as e:
        raise ConfigurationError(f"failed to load configuration: {e}") from e


async def check_database(settings: Settings) -> None:
    """Open the pools once and make sure the primary answers."""
    database = Database.from_settings(settings)
    try:
        await database.ping()
    finally:
        await database.dispose()


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    setup_logging(settings)
    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    try:
        asyncio.run(check_database(settings))
    except Exception as e:
        logfire.error(
            "Database is unreachable",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        return 1

    logfire.info(
        "Starting comment service",
        host=settings.server.host,
        port=settings.server.port,
        mode=settings.runtime.mode,
    )
    # uvicorn installs its own SIGINT/SIGTERM handlers; in-flight requests
    # finish before the lifespan shutdown closes the DI container
    uvicorn.run(
        "commenttree.interface.api.app:app",
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.logger.level,
    )

    logfire.info("Comment service stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
