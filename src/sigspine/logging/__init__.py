"""
sigspine logging - structured, lint-target-aware logging.

Usage:
    from sigspine.logging import configure_logging, get_logger, lint_context

    configure_logging()
    log = get_logger(__name__)

    with lint_context(file="pkg/mod.py"):
        log.debug("file.start")
"""

from sigspine.logging.config import configure_logging, is_configured
from sigspine.logging.context import (
    LogContext,
    add_context_processor,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    lint_context,
)

__all__ = [
    "configure_logging",
    "is_configured",
    "get_logger",
    "get_context",
    "bind_context",
    "clear_context",
    "lint_context",
    "add_context_processor",
    "LogContext",
]
