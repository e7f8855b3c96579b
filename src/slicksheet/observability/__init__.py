"""Observability helpers: structured logging."""

from slicksheet.observability.logging import (
    bind_template_context,
    clear_template_context,
    get_logger,
    get_template_context,
    setup_logging,
)

__all__ = [
    "bind_template_context",
    "clear_template_context",
    "get_logger",
    "get_template_context",
    "setup_logging",
]
