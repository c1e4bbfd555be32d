"""
CLI utility helpers: consoles, error reporting, config resolution.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from sigspine.config import LinterConfig, get_settings
from sigspine.errors import SigspineError

console = Console()
err_console = Console(stderr=True)


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn ``SigspineError`` into a red message and exit code 2."""
    try:
        yield
    except SigspineError as e:
        where = f" ({e.context.file})" if e.context.file else ""
        detail = escape(f"[{e.category.value}]{where}: {e.message}")
        err_console.print(f"[bold red]Error[/bold red] {detail}")
        raise typer.Exit(code=2) from e


def resolve_config(config_file: Path | None, start: Path | None = None) -> LinterConfig:
    """The ``LinterConfig`` for this invocation.

    Order: ``--config`` flag, then ``SIGSPINE_CONFIG_FILE``, then the
    nearest ``pyproject.toml`` above *start*.
    """
    if config_file is not None:
        return LinterConfig.from_pyproject(config_file)
    return get_settings().load_linter_config(start)
