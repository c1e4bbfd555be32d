"""
Tests for the logging module.

Tests verify:
- Log context carries the lint target
- lint_context restores the previous context
- configure_logging honours level and format
"""

import json
import logging

import pytest
import structlog

from sigspine.logging import (
    LogContext,
    add_context_processor,
    bind_context,
    clear_context,
    configure_logging,
    get_context,
    get_logger,
    is_configured,
    lint_context,
)


class TestLogContext:
    """Test LogContext dataclass."""

    def test_to_dict_excludes_none(self):
        ctx = LogContext(file="mod.py", function=None)
        assert ctx.to_dict() == {"file": "mod.py"}

    def test_merge_creates_new_context(self):
        ctx1 = LogContext(file="mod.py")
        ctx2 = ctx1.merge(function="sample")

        assert ctx1.function is None
        assert ctx2.file == "mod.py"
        assert ctx2.function == "sample"

    def test_merge_ignores_none(self):
        ctx = LogContext(file="mod.py").merge(file=None)
        assert ctx.file == "mod.py"


class TestContextManagement:
    """Test context bind/get/clear operations."""

    def test_bind_context_merges(self):
        bind_context(file="mod.py")
        bind_context(function="sample")
        ctx = get_context()

        assert ctx.file == "mod.py"
        assert ctx.function == "sample"

    def test_clear_context_resets(self):
        bind_context(file="mod.py")
        clear_context()

        assert get_context() == LogContext()

    def test_lint_context_restores(self):
        bind_context(run_id="run-1")
        with lint_context(file="a.py") as ctx:
            assert ctx.file == "a.py"
            assert ctx.run_id == "run-1"
            with lint_context(function="f"):
                assert get_context().function == "f"
            assert get_context().function is None
        assert get_context() == LogContext(run_id="run-1")

    def test_lint_context_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with lint_context(file="a.py"):
                raise RuntimeError
        assert get_context().file is None

    def test_processor_adds_context(self):
        with lint_context(file="a.py", rule="W101"):
            event = add_context_processor(None, "info", {"event": "x", "rule": "explicit"})
        assert event["file"] == "a.py"
        assert event["rule"] == "explicit"


class TestConfigureLogging:
    """Test structlog configuration."""

    def teardown_method(self):
        structlog.reset_defaults()
        logging.getLogger("sigspine").setLevel(logging.NOTSET)
        logging.getLogger().handlers.clear()

    def test_marks_configured(self):
        configure_logging(level="INFO", force=True)
        assert is_configured() is True
        assert logging.getLogger("sigspine").level == logging.INFO

    def test_invalid_level_falls_back(self):
        configure_logging(level="LOUD", force=True)
        assert logging.getLogger("sigspine").level == logging.WARNING

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("SIGSPINE_LOG_LEVEL", "debug")
        configure_logging(force=True)
        assert logging.getLogger("sigspine").level == logging.DEBUG

    def test_json_output_includes_context(self, capsys):
        configure_logging(level="INFO", format="json", force=True)
        log = get_logger("sigspine.test")
        with lint_context(file="a.py", function="f"):
            log.info("linter.linted", diagnostics=2)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "linter.linted"
        assert event["file"] == "a.py"
        assert event["function"] == "f"
        assert event["level"] == "info"

    def test_debug_suppressed_at_info(self, capsys):
        configure_logging(level="INFO", format="json", force=True)
        get_logger("sigspine.test").debug("hidden")
        assert "hidden" not in capsys.readouterr().err
