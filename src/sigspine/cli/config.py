"""
CLI: ``sigspine config``: configuration inspection.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from sigspine.cli.utils import console, handle_errors, resolve_config
from sigspine.config import get_settings

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Config file to use."),
    start: Path = typer.Option(Path("."), "--start", help="Directory to discover pyproject.toml from."),
) -> None:
    """Show the effective configuration."""
    with handle_errors():
        config = resolve_config(config_file, start=start)
    settings = get_settings()

    if json_out:
        data = {
            "linter": config.to_dict(),
            "settings": json.loads(settings.model_dump_json()),
        }
        typer.echo(json.dumps(data, indent=2))
        return

    source = config.source or "defaults"
    console.print(f"[bold]Config Source:[/bold] {escape(str(source))}")

    table = Table()
    table.add_column("Option")
    table.add_column("Value")
    for key, value in config.to_dict().items():
        if key == "source":
            continue
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        table.add_row(key, escape(str(value)))
    console.print(table)

    console.print("\n[bold]Settings:[/bold]")
    for key, value in sorted(settings.model_dump().items()):
        console.print(f"  SIGSPINE_{key.upper()}={escape(str(value))}")
