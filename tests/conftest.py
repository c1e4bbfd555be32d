"""
Shared pytest fixtures and configuration for sigspine tests.

This module provides:
- Registry cleanup fixtures for test isolation
- Settings and log-context cleanup
- Helpers for writing source files into tmp_path

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments.

    def test_something(write_source):
        path = write_source("def f(x=[]): ...")
"""

import textwrap
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

from sigspine.config import clear_settings_cache
from sigspine.linter import clear_custom_rules
from sigspine.logging import clear_context


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        # CLI tests run the whole stack end to end
        if test_path.parts[0] == "cli":
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration", "slow"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Registry / State Cleanup Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_lint_rules_fixture() -> Generator[None, None, None]:
    """Remove custom lint rules before and after each test."""
    clear_custom_rules()
    yield
    clear_custom_rules()


@pytest.fixture(autouse=True)
def clean_state_fixture(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate settings and log context from the developer's environment."""
    for var in ("SIGSPINE_LOG_LEVEL", "SIGSPINE_LOG_FORMAT", "SIGSPINE_CONFIG_FILE"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    clear_context()
    yield
    clear_settings_cache()
    clear_context()
    structlog.reset_defaults()


# =============================================================================
# Source File Fixtures
# =============================================================================


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes dedented source into tmp_path."""

    def _write(content: str, filename: str = "mod.py") -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write
