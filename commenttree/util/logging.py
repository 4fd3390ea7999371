"""Logging configuration for the application."""

import logging
import sys

from commenttree.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure application logging.

    Sets the root level from ``logger.level`` in the settings.

    Args:
        settings: Application settings
    """
    level = logging.getLevelName(settings.logger.level.upper())

    # Configure root logger
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # SQL echo goes through this logger in debug mode only
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )

    # Our application loggers stay at the configured level
    logging.getLogger("commenttree").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: mode={settings.runtime.mode}, level={logging.getLevelName(level)}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
