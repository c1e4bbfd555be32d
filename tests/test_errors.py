"""Tests for the sigspine error hierarchy."""

from __future__ import annotations

from sigspine.errors import (
    ArgumentError,
    ConfigError,
    ErrorCategory,
    ExclusiveArgumentsError,
    InvalidChoiceError,
    InvalidConfigError,
    MissingArgumentError,
    RuleError,
    SigspineError,
    SourceParseError,
    UnknownConventionError,
)


class TestSigspineError:
    def test_default_category(self):
        assert SigspineError("x").category == ErrorCategory.INTERNAL
        assert ConfigError("x").category == ErrorCategory.CONFIG
        assert SourceParseError("x").category == ErrorCategory.PARSE
        assert ArgumentError("x").category == ErrorCategory.ARGUMENT
        assert RuleError("x").category == ErrorCategory.RULE

    def test_with_context_known_and_extra_keys(self):
        err = SigspineError("bad").with_context(file="mod.py", function="f", lineno=3)
        assert err.context.file == "mod.py"
        assert err.context.function == "f"
        assert err.context.metadata == {"lineno": 3}

    def test_cause_is_chained(self):
        cause = ValueError("inner")
        err = SigspineError("outer", cause=cause)
        assert err.__cause__ is cause

    def test_to_dict(self):
        err = SourceParseError("boom", cause=SyntaxError("x")).with_context(file="a.py")
        data = err.to_dict()
        assert data["error_type"] == "SourceParseError"
        assert data["category"] == "PARSE"
        assert data["context"] == {"file": "a.py"}
        assert data["cause"].startswith("SyntaxError")

    def test_to_dict_without_context(self):
        assert "context" not in SigspineError("x").to_dict()

    def test_repr(self):
        assert repr(ConfigError("x")) == "ConfigError('x', category=CONFIG)"


class TestSubclasses:
    def test_invalid_config(self):
        err = InvalidConfigError("max_arguments", -1)
        assert err.key == "max_arguments"
        assert err.message == "Invalid value for 'max_arguments': -1"
        assert err.context.metadata["config_key"] == "max_arguments"
        assert isinstance(err, ConfigError)

    def test_source_parse_lineno(self):
        assert SourceParseError("x", lineno=4).lineno == 4

    def test_argument_errors_are_builtin_compatible(self):
        assert isinstance(MissingArgumentError(["x"]), TypeError)
        assert isinstance(ExclusiveArgumentsError(["a", "b"], []), TypeError)
        choice = InvalidChoiceError("m", "x", ["a"])
        assert isinstance(choice, TypeError)
        assert isinstance(choice, ValueError)

    def test_missing_sets_parameter(self):
        assert MissingArgumentError(["x"]).context.parameter == "x"
        assert MissingArgumentError(["x", "y"]).context.parameter is None

    def test_unknown_convention_str(self):
        err = UnknownConventionError("C-NOPE")
        assert isinstance(err, KeyError)
        assert str(err) == "Unknown convention or rule code: 'C-NOPE'"
