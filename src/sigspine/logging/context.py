"""
Lint-target context for log entries.

Every log line emitted while a file or function is being linted carries the
target (``file``, ``function``, ``rule``) without threading it through every
call. Context lives in a ``ContextVar`` so it is safe across threads and
asyncio tasks.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Any

import structlog


@dataclass(frozen=True)
class LogContext:
    """
    Context attached to all log entries.

    Attributes:
        file: Source file being linted
        function: Qualified name of the function being linted
        rule: Rule currently running
        run_id: Identifier of the lint run (set by the CLI)
    """

    file: str | None = None
    function: str | None = None
    rule: str | None = None
    run_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs: Any) -> LogContext:
        """Create new context with merged values."""
        current = asdict(self)
        current.update({k: v for k, v in kwargs.items() if v is not None})
        return LogContext(**current)


_log_context: ContextVar[LogContext] = ContextVar("sigspine_log_context")  # noqa: B039


def get_context() -> LogContext:
    """Get the current log context."""
    return _log_context.get(LogContext())


def bind_context(**kwargs: Any) -> LogContext:
    """Merge values into the current context and return it."""
    updated = get_context().merge(**kwargs)
    _log_context.set(updated)
    return updated


def clear_context() -> None:
    """Clear the current context (reset to empty)."""
    _log_context.set(LogContext())


@contextmanager
def lint_context(**kwargs: Any) -> Iterator[LogContext]:
    """
    Bind context for the duration of a block, then restore the previous one.

    Usage:
        with lint_context(file="pkg/mod.py", function="sample"):
            log.debug("rule.start")
    """
    token = _log_context.set(get_context().merge(**kwargs))
    try:
        yield _log_context.get()
    finally:
        _log_context.reset(token)


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds lint context to every log entry.

    Keys already present on the event are not overridden.
    """
    for key, value in get_context().to_dict().items():
        event_dict.setdefault(key, value)
    return event_dict


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)
