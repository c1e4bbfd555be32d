"""Tests for the 'config' CLI sub-command."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from sigspine.cli import app

runner = CliRunner()


class TestConfigShow:
    def test_json_defaults(self, tmp_path):
        (tmp_path / ".git").mkdir()
        result = runner.invoke(app, ["config", "show", "--json", "--start", str(tmp_path)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["linter"]["max_arguments"] == 7
        assert data["linter"]["source"] is None
        assert data["settings"]["log_level"] == "WARNING"

    def test_json_from_pyproject(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text("[tool.sigspine]\nselect = ['W']\n")
        result = runner.invoke(app, ["config", "show", "--json", "--start", str(tmp_path)])
        data = json.loads(result.stdout)
        assert data["linter"]["select"] == ["W"]
        assert data["linter"]["source"].endswith("pyproject.toml")

    def test_table(self, tmp_path):
        (tmp_path / ".git").mkdir()
        result = runner.invoke(app, ["config", "show", "--start", str(tmp_path)])
        assert result.exit_code == 0
        assert "max_arguments" in result.output
        assert "SIGSPINE_LOG_LEVEL=WARNING" in result.output

    def test_missing_config_file(self, tmp_path):
        result = runner.invoke(app, ["config", "show", "--config", str(tmp_path / "nope.toml")])
        assert result.exit_code == 2
        assert "CONFIG" in result.output

    def test_env_log_level(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        monkeypatch.setenv("SIGSPINE_LOG_LEVEL", "ERROR")
        result = runner.invoke(app, ["config", "show", "--json", "--start", str(tmp_path)])
        assert json.loads(result.stdout)["settings"]["log_level"] == "ERROR"

    def test_invalid_env_exits_2(self, monkeypatch):
        monkeypatch.setenv("SIGSPINE_LOG_FORMAT", "xml")
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 2
        assert "Configuration Error" in result.output
