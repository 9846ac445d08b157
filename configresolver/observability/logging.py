"""Structured logging configuration using structlog.

Provides JSON logging for production and console logging for development.
The resolver only emits debug events; failures surface as exceptions.

Events are handed to the stdlib "configresolver" logger, which carries a
NullHandler, so nothing is written until the host calls setup_logging or
configures stdlib logging itself.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, cast

import structlog

if TYPE_CHECKING:
    from configresolver.settings import ResolverSettings

LOGGER_NAME = "configresolver"
HANDLER_NAME = "configresolver.stderr"

LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}

logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logging(level: str = "INFO", format: str = "json") -> None:
    """Configure structured logging to stderr.

    Replaces any handler previously installed by this function on the
    "configresolver" logger.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format - "json" for production, "console" for development
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    level_num = LEVELS.get(level.upper(), 20)

    stdlib_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(stdlib_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            stdlib_logger.removeHandler(handler)
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.set_name(HANDLER_NAME)
    stdlib_logger.addHandler(stream_handler)
    stdlib_logger.setLevel(level_num)
    stdlib_logger.propagate = False

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger writing through the stdlib logger of that name
    """
    return cast(structlog.stdlib.BoundLogger, structlog.wrap_logger(logging.getLogger(name)))


def setup_logging_from_settings(settings: "ResolverSettings | None" = None) -> None:
    """Configure logging from CONFIGRESOLVER_LOG_LEVEL / _LOG_FORMAT."""
    from configresolver.settings import ResolverSettings

    settings = settings or ResolverSettings()
    setup_logging(level=settings.log_level, format=settings.log_format)
