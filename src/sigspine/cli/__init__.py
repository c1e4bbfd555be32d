"""sigspine CLI - Typer application."""

from sigspine.cli.app import app

__all__ = ["app"]
