"""Allow ``python -m sigspine``."""

from sigspine.cli import app

app()
