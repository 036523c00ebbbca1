"""
Logging setup.

Library modules only create loggers; the embedding application calls
setup_logging once to attach a handler to the package logger. Standard
library records are rendered by structlog, as JSON or as console lines.
"""

import logging
import sys

import structlog

from .config import Settings, get_settings

PACKAGE_LOGGER = "garage_scheduler"


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """Attach a structlog-rendered handler to the package logger and return it."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    pre_chain = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.LOG_FORMAT == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers = [handler]
    logger.setLevel(log_level)
    logger.propagate = False
    return logger
