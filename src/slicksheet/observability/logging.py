"""Structured logging configuration with template context support.

This module sets up structured logging using structlog with JSON or console
output. Hosts can bind context such as the id of the template being edited,
and every engine log event emitted in that context will carry it.
"""

import logging
import sys
from typing import Any

import structlog


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """Configure structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output logs in JSON format; otherwise use console format

    Example:
        >>> setup_logging(log_level="DEBUG", json_logs=False)
        >>> logger = get_logger(__name__)
        >>> logger.debug("template_rendered", output_length=120)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=shared_processors + renderers,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def bind_template_context(**values: Any) -> None:
    """Attach key/value context to all log events in the current context.

    Args:
        **values: Context entries, e.g. ``template_id="product-sheet"``

    Example:
        >>> bind_template_context(template_id="product-sheet")
        >>> get_logger(__name__).info("template_validated")  # carries template_id
    """
    structlog.contextvars.bind_contextvars(**values)


def get_template_context() -> dict[str, Any]:
    """Return the context currently bound for log events."""
    return structlog.contextvars.get_contextvars()


def clear_template_context() -> None:
    """Remove all context bound with ``bind_template_context``."""
    structlog.contextvars.clear_contextvars()
