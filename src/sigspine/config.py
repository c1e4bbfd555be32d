"""
Configuration for sigspine.

Two layers:

* ``LinterConfig``: what to check. Read from ``[tool.sigspine]`` in the
  nearest ``pyproject.toml`` (or an explicit file) and overridable from the
  command line.
* ``SigspineSettings``: how the process runs (log level, log format,
  config file path). Read from ``SIGSPINE_*`` environment variables and
  ``.env`` via pydantic-settings.

Example ``pyproject.toml``::

    [tool.sigspine]
    select = ["E", "W"]
    ignore = ["W203"]
    exclude = ["migrations", "tests/fixtures"]
    max_arguments = 6
    max_positional_details = 1
    include_private = false

Tags:
    sigspine, configuration, pyproject, pydantic, settings
"""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from sigspine.errors import ConfigError, InvalidConfigError
from sigspine.parser.ast_walker import DEFAULT_SKIP_PATTERNS, is_excluded

_CODE_PREFIX_RE = re.compile(r"^[EWIX]\d{0,3}$")


def find_project_root(start: Path | None = None) -> Path:
    """Walk upward from *start* to find the project root.

    Recognised root markers (checked in order): ``pyproject.toml``,
    ``.git``, ``setup.py``. Falls back to *start* (or cwd).
    """
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        if (directory / "pyproject.toml").exists():
            return directory
        if (directory / ".git").exists():
            return directory
        if (directory / "setup.py").exists():
            return directory
    return current


def _code_list(key: str, value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise InvalidConfigError(key, value, f"{key!r} must be a list of rule codes")
    codes = []
    for item in value:
        code = str(item).strip().upper()
        if not _CODE_PREFIX_RE.match(code):
            raise InvalidConfigError(key, item, f"{item!r} in {key!r} is not a rule code or prefix")
        codes.append(code)
    return codes


def _positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidConfigError(key, value, f"{key!r} must be a non-negative integer")
    return value


@dataclass
class LinterConfig:
    """Settings that decide which rules run and their thresholds.

    Attributes:
        select: Rule codes or prefixes to run (empty = all)
        ignore: Rule codes or prefixes to skip (wins over select)
        exclude: Path component globs to skip when walking directories
        max_arguments: Threshold for W404 (too-many-arguments)
        max_positional_details: Threshold for W202 (details-positional)
        max_default_complexity: AST node threshold for W402 (complex-default)
        include_infos: Report info-level diagnostics
        include_private: Lint functions whose name starts with ``_``
        source: File the config was loaded from (if any)
    """

    select: list[str] = field(default_factory=list)
    ignore: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=lambda: list(DEFAULT_SKIP_PATTERNS))
    max_arguments: int = 7
    max_positional_details: int = 2
    max_default_complexity: int = 6
    include_infos: bool = True
    include_private: bool = False
    source: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, source: Path | None = None) -> LinterConfig:
        """Create config from a dictionary, validating every key.

        Keys may use dashes or underscores (``max-arguments``).

        Raises:
            InvalidConfigError: Unknown key or invalid value
        """
        known = {f.name for f in fields(cls)} - {"source"}
        kwargs: dict[str, Any] = {}

        for raw_key, value in data.items():
            key = raw_key.replace("-", "_")
            if key not in known:
                raise InvalidConfigError(raw_key, value, f"Unknown sigspine option {raw_key!r}")

            if key in ("select", "ignore"):
                kwargs[key] = _code_list(key, value)
            elif key == "exclude":
                if isinstance(value, str):
                    value = [value]
                if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
                    raise InvalidConfigError(key, value, "'exclude' must be a list of strings")
                kwargs[key] = list(value)
            elif key in ("include_infos", "include_private"):
                if not isinstance(value, bool):
                    raise InvalidConfigError(key, value, f"{key!r} must be true or false")
                kwargs[key] = value
            else:
                kwargs[key] = _positive_int(key, value)

        return cls(**kwargs, source=source)

    @classmethod
    def from_pyproject(cls, path: Path) -> LinterConfig:
        """Load ``[tool.sigspine]`` from a ``pyproject.toml`` (or any TOML file).

        A plain TOML file without a ``[tool.sigspine]`` table is read as a
        top-level sigspine table. Missing table = defaults.

        Raises:
            ConfigError: File missing or not valid TOML
        """
        path = Path(path)
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {path}", cause=e).with_context(file=str(path)) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}", cause=e).with_context(file=str(path)) from e

        if path.name == "pyproject.toml" or "tool" in data:
            table = data.get("tool", {}).get("sigspine", {})
        else:
            table = data

        try:
            return cls.from_dict(table, source=path)
        except InvalidConfigError as e:
            raise e.with_context(file=str(path))

    @classmethod
    def discover(cls, start: Path | None = None) -> LinterConfig:
        """Load config from the nearest ``pyproject.toml`` above *start*.

        Returns defaults when no ``pyproject.toml`` is found.
        """
        root = find_project_root(start)
        pyproject = root / "pyproject.toml"
        if pyproject.is_file():
            return cls.from_pyproject(pyproject)
        return cls()

    def is_enabled(self, code: str) -> bool:
        """Check a rule code against select/ignore (prefix match)."""
        if any(code.startswith(prefix) for prefix in self.ignore):
            return False
        if not self.select:
            return True
        return any(code.startswith(prefix) for prefix in self.select)

    def should_skip(self, file_path: Path, root: Path | None = None) -> bool:
        """Check if a file below *root* should be skipped during directory walks."""
        return is_excluded(Path(file_path), self.exclude, root=root)

    def merged(self, **overrides: Any) -> LinterConfig:
        """Return a copy with non-None overrides applied (CLI flags)."""
        data = self.to_dict()
        data.pop("source")
        for key, value in overrides.items():
            if value is None:
                continue
            if key in ("select", "ignore") and not value:
                continue
            data[key] = value
        return LinterConfig.from_dict(data, source=self.source)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "select": list(self.select),
            "ignore": list(self.ignore),
            "exclude": list(self.exclude),
            "max_arguments": self.max_arguments,
            "max_positional_details": self.max_positional_details,
            "max_default_complexity": self.max_default_complexity,
            "include_infos": self.include_infos,
            "include_private": self.include_private,
            "source": str(self.source) if self.source else None,
        }


class SigspineSettings(BaseSettings):
    """Process-level settings read from the environment.

    Fields
    ──────
    log_level    : Log level for structlog (stderr)
    log_format   : ``console`` or ``json``
    config_file  : Explicit config file (skips pyproject discovery)
    """

    model_config = SettingsConfigDict(
        env_prefix="SIGSPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["console", "json"] = "console"
    config_file: Path | None = Field(default=None, description="Explicit sigspine config file")

    def load_linter_config(self, start: Path | None = None) -> LinterConfig:
        """Resolve the ``LinterConfig`` these settings point at."""
        if self.config_file is not None:
            return LinterConfig.from_pyproject(self.config_file)
        return LinterConfig.discover(start)


_settings_cache: dict[str, SigspineSettings] = {}


def get_settings(*, _force_reload: bool = False) -> SigspineSettings:
    """Return the cached ``SigspineSettings`` singleton."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = SigspineSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
