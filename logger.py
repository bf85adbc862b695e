"""Logging configuration using loguru."""

import sys
from loguru import logger

from config import settings


def configure_logging() -> None:
    """
    Configure loguru from settings.

    Colorized, human-readable lines on an interactive terminal when
    LOG_FORMAT is "console"; JSON lines on stdout otherwise.
    """
    logger.remove()

    if sys.stderr.isatty() and settings.LOG_FORMAT.lower() == "console":
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[component]}</cyan> | <level>{message}</level>",
            level=settings.LOG_LEVEL,
            colorize=True,
        )
    else:
        logger.add(
            sys.stdout,
            format="{message}",
            level=settings.LOG_LEVEL,
            serialize=True,
            diagnose=False,
        )


def get_logger(component: str):
    """Return a logger bound to ``component``, e.g. ``get_logger("detector")``."""
    return logger.bind(component=component)


# Records logged before configure_logging() still need a component.
logger.configure(extra={"component": "app"})
