"""Logging configuration for unibidi.

unibidi is a library, so it never configures the root logger or structlog
globally. Its loggers are structlog wrappers around stdlib loggers under the
``unibidi`` namespace. That namespace gets its level from settings and a
NullHandler, so output only appears once the application adds handlers.
"""

import logging
from typing import Any, List

import structlog
from structlog.stdlib import BoundLogger

from unibidi.config import get_settings

PACKAGE_LOGGER = "unibidi"

_configured = False


def setup_logging() -> None:
    """Apply the configured level to the package logger."""
    global _configured
    settings = get_settings()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, settings.log_level))
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())

    _configured = True


def render_processor() -> Any:
    """Choose renderer based on settings."""
    settings = get_settings()

    if settings.log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        return structlog.dev.ConsoleRenderer(colors=False)


def processors() -> List[Any]:
    """Processor chain for package loggers; filters by stdlib level first."""
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        render_processor(),
    ]


def get_logger(name: str) -> BoundLogger:
    """Get a logger for a package module, setting up logging on first use."""
    if not _configured:
        setup_logging()

    bound_logger: BoundLogger = structlog.wrap_logger(
        logging.getLogger(name),
        processors=processors(),
        wrapper_class=BoundLogger,
        context_class=dict,
    )
    return bound_logger
