"""
Root Typer application for the sigspine CLI.

Commands operate on source files only; nothing is imported or executed.
"""

from __future__ import annotations

import uuid
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from sigspine import __version__
from sigspine.cli.config import app as config_app
from sigspine.cli.utils import console, err_console, handle_errors, resolve_config
from sigspine.config import get_settings
from sigspine.logging import configure_logging, get_logger, lint_context

log = get_logger(__name__)

app = typer.Typer(
    name="sigspine",
    help="sigspine: lint function signatures for argument design conventions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"sigspine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """sigspine CLI: lint, classify, and explain function signatures."""
    try:
        settings = get_settings(_force_reload=True)
    except ValueError as e:
        err_console.print(f"[red]Configuration Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2) from e
    configure_logging(level=settings.log_level, format=settings.log_format, force=True)


app.add_typer(config_app, name="config", help="Configuration inspection.")


# ── sigspine lint ────────────────────────────────────────────────────────


@app.command("lint")
def lint_cmd(
    paths: list[Path] = typer.Argument(..., help="Python files or directories to lint."),
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
    fmt: str = typer.Option("text", "--format", "-f", help="Output format: text, table."),
    select: list[str] | None = typer.Option(None, "--select", "-s", help="Only run these codes or prefixes."),
    ignore: list[str] | None = typer.Option(None, "--ignore", "-i", help="Skip these codes or prefixes."),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero on warnings too."),
    no_infos: bool = typer.Option(False, "--no-infos", help="Hide info-level diagnostics."),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Config file to use."),
) -> None:
    """Lint function signatures in files and directories.

    Example:
        sigspine lint src/
        sigspine lint pkg/api.py --select W --ignore W203 --json
    """
    from sigspine.linter import lint_paths
    from sigspine.report import render_json, render_table, render_text

    if fmt not in ("text", "table"):
        err_console.print(f"[red]Unknown format:[/red] {escape(fmt)}. Use: text, table")
        raise typer.Exit(code=2)

    missing = [p for p in paths if not p.exists()]
    if missing:
        for p in missing:
            err_console.print(f"[red]Path not found:[/red] {escape(str(p))}")
        raise typer.Exit(code=2)

    with handle_errors(), lint_context(run_id=uuid.uuid4().hex[:12]):
        config = resolve_config(config_file, start=paths[0]).merged(
            select=select,
            ignore=ignore,
            include_infos=False if no_infos else None,
        )
        log.debug("cli.lint", paths=[str(p) for p in paths], config=config.to_dict())
        result = lint_paths(paths, config=config)

    if json_out:
        typer.echo(render_json(result))
    elif fmt == "table":
        render_table(result, console)
    else:
        typer.echo(render_text(result))

    if not result.passed:
        raise typer.Exit(code=1)
    if strict and result.warnings:
        raise typer.Exit(code=1)


# ── sigspine classify ────────────────────────────────────────────────────


@app.command("classify")
def classify_cmd(
    file: Path = typer.Argument(..., help="Python file to read."),
    function: str | None = typer.Option(
        None,
        "--function",
        "-F",
        help="Only this function (name or qualified name).",
    ),
) -> None:
    """Show the argument role of every parameter.

    Example:
        sigspine classify pkg/api.py --function Client.fetch
    """
    from sigspine.parser import SignatureWalker
    from sigspine.report import render_classification

    if not file.exists():
        err_console.print(f"[red]File not found:[/red] {escape(str(file))}")
        raise typer.Exit(code=2)

    with handle_errors():
        signatures = SignatureWalker().walk_file(file)

    if function is not None:
        signatures = [s for s in signatures if function in (s.name, s.qualname)]
        if not signatures:
            err_console.print(f"[red]No function named[/red] {escape(function)} in {escape(str(file))}")
            raise typer.Exit(code=1)

    if not signatures:
        console.print("[dim]No functions found.[/dim]")
        return

    for signature in signatures:
        render_classification(signature, console)


# ── sigspine rules ───────────────────────────────────────────────────────


@app.command("rules")
def rules_cmd(
    json_out: bool = typer.Option(False, "--json", "-j", help="Output as JSON."),
) -> None:
    """List lint rules and the conventions they check."""
    import json

    from sigspine.linter import describe_rules, list_lint_rules

    built_in = describe_rules()
    built_in_names = {info.name for info in built_in}
    custom = [name for name in list_lint_rules() if name not in built_in_names]

    if json_out:
        data = {
            "rules": [
                {
                    "code": info.code,
                    "name": info.name,
                    "severity": info.severity.value,
                    "convention": info.convention,
                    "summary": info.summary,
                }
                for info in built_in
            ],
            "custom": custom,
        }
        typer.echo(json.dumps(data, indent=2))
        return

    table = Table(title="sigspine rules")
    table.add_column("Code", style="bold")
    table.add_column("Name")
    table.add_column("Severity")
    table.add_column("Convention")
    table.add_column("Summary")
    for info in built_in:
        table.add_row(info.code, info.name, info.severity.value, info.convention or "-", info.summary)
    for name in custom:
        table.add_row("-", escape(name), "-", "-", "custom rule")
    console.print(table)


# ── sigspine explain ─────────────────────────────────────────────────────


@app.command("explain")
def explain_cmd(
    identifier: str = typer.Argument(..., help="Rule code (W302) or convention id (C-EXCL)."),
) -> None:
    """Explain a rule or convention.

    Example:
        sigspine explain W101
        sigspine explain C-EXCL
    """
    from sigspine.conventions import explain
    from sigspine.linter import RULE_INFO

    info = RULE_INFO.get(identifier.strip().upper())
    if info is not None and info.convention is None:
        typer.echo(f"{info.code} ({info.name}): {info.summary}")
        return

    with handle_errors():
        text = explain(identifier)
    typer.echo(text)
