"""Observability configuration using Logfire.

Logfire provides:
- Structured logging with OpenTelemetry
- Distributed tracing
- Integration with FastAPI and SQLAlchemy

Usage:
    import logfire

    # Structured logging
    logfire.info("Comment created", comment_id=str(comment.id))

    # Manual spans for critical operations
    with logfire.span("comment_service.get_comments", parent_id=parent_id):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from commenttree.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Console output honours ``logger.level``. Telemetry is sent to Logfire
    cloud only when a token is configured, unless
    OBSERVABILITY__SEND_TO_LOGFIRE says otherwise.

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "commenttree",
        "service_version": "1.0.0",
        "environment": settings.runtime.mode,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
            min_log_level=settings.logger.level,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        mode=settings.runtime.mode,
        level=settings.logger.level,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Automatically traces every request: duration, status, errors.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(app)
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Automatically traces every SQL query and its duration.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
    logfire.info("SQLAlchemy instrumented")
