"""
Output formatting for lint results and classifications.

Text and JSON renderers return strings (the CLI echoes them); the rich
renderers print to a ``Console`` so colour is decided by the terminal.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sigspine.classify import expected_order
from sigspine.linter import LintResult, Severity
from sigspine.signature import ArgumentRole, FunctionSignature

_SEVERITY_STYLE = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}

_ROLE_STYLE = {
    ArgumentRole.RECEIVER: "dim",
    ArgumentRole.DATA: "bold green",
    ArgumentRole.DESCRIPTOR: "green",
    ArgumentRole.DOTS: "magenta",
    ArgumentRole.DETAILS: "cyan",
    ArgumentRole.UNKNOWN: "red",
}


def _sorted(result: LintResult) -> list:
    return sorted(
        result.diagnostics,
        key=lambda d: (d.file or "", d.line or 0, d.code),
    )


def render_text(result: LintResult) -> str:
    """One ``path:line: CODE message`` line per diagnostic, then the summary."""
    lines = []
    for d in _sorted(result):
        where = d.location or d.function or "<unknown>"
        lines.append(f"{where}: {d.code} {d.message}")
    lines.append(result.summary())
    return "\n".join(lines)


def result_to_dict(result: LintResult) -> dict[str, Any]:
    return {
        "target": result.target,
        "passed": result.passed,
        "files_checked": result.files_checked,
        "functions_checked": result.functions_checked,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "info_count": len(result.infos),
        "diagnostics": [d.to_dict() for d in _sorted(result)],
    }


def render_json(result: LintResult) -> str:
    return json.dumps(result_to_dict(result), indent=2)


def render_table(result: LintResult, console: Console) -> None:
    """Print diagnostics as a rich table followed by the summary line.

    Rule codes never wrap; long locations fold onto extra lines instead.
    """
    summary = escape(result.summary())
    if not result.diagnostics:
        console.print(f"[green]{summary}[/green]")
        return

    table = Table(title=f"sigspine: {escape(result.target)}", show_lines=False)
    table.add_column("Location", style="dim", overflow="fold")
    table.add_column("Code", no_wrap=True, min_width=4)
    table.add_column("Function")
    table.add_column("Message")
    table.add_column("Suggestion", style="italic")

    for d in _sorted(result):
        style = _SEVERITY_STYLE[d.severity]
        table.add_row(
            escape(d.location or "-"),
            f"[{style}]{d.code}[/{style}]",
            escape(d.function or "-"),
            escape(d.message),
            escape(d.suggestion or ""),
        )

    console.print(table)
    style = "bold red" if not result.passed else "yellow"
    console.print(f"[{style}]{summary}[/{style}]")


def render_classification(signature: FunctionSignature, console: Console) -> None:
    """Print each parameter with its role, and the suggested order if it differs."""
    table = Table(title=escape(f"{signature.qualname}  ({signature.location})"))
    table.add_column("#", justify="right", style="dim")
    table.add_column("Parameter")
    table.add_column("Kind")
    table.add_column("Role")
    table.add_column("Default")

    for index, param in enumerate(signature.parameters):
        style = _ROLE_STYLE[param.role]
        table.add_row(
            str(index),
            escape(param.name),
            param.kind.value,
            f"[{style}]{param.role.value}[/{style}]",
            escape(param.default) if param.has_default and param.default else "",
        )

    console.print(table)

    current = [p.name for p in signature.parameters]
    suggested = expected_order(signature)
    if suggested != current:
        console.print(f"[yellow]Suggested order:[/yellow] {', '.join(suggested)}")
    else:
        console.print("[green]Parameters are in data, descriptor, details order.[/green]")
