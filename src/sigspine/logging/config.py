"""
Logging configuration.

Single entry point for configuring structured logging. Settings come from
arguments or from the environment:

- SIGSPINE_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: WARNING)
- SIGSPINE_LOG_FORMAT: json | console (default: console)

Logs go to stderr so that ``sigspine lint --json`` output on stdout stays
machine-readable.

Usage:
    from sigspine.logging import configure_logging
    configure_logging(level="DEBUG", format="json")
"""

import logging
import os
import sys
from typing import Literal

import structlog
from structlog.types import Processor

from sigspine.logging.context import add_context_processor

_configured = False

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def configure_logging(
    level: LogLevel | None = None,
    format: LogFormat | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Should be called once at startup (CLI entry). Subsequent calls are
    no-ops unless force=True.

    Args:
        level: Log level (overrides SIGSPINE_LOG_LEVEL env var)
        format: Output format (overrides SIGSPINE_LOG_FORMAT env var)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = (level or os.environ.get("SIGSPINE_LOG_LEVEL", "WARNING")).upper()
    log_format = (format or os.environ.get("SIGSPINE_LOG_FORMAT", "console")).lower()

    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        log_level = "WARNING"

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_context_processor,
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )
    logging.getLogger("sigspine").setLevel(getattr(logging, log_level))

    _configured = True


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured
