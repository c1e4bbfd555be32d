"""
Structured error types for sigspine.

Every error raised by the linter, the config layer, or the runtime argument
helpers extends ``SigspineError``. Errors carry a category for routing (a
config problem is reported differently from a bad argument at a call site)
and an ``ErrorContext`` naming the file, function, and parameter involved.

Manifesto:
    - **Typed Error Hierarchy:** Config, parse, argument, and rule errors
      are distinct types
    - **Rich Context:** Errors carry the lint target for logging
    - **Error Chaining:** The original exception is preserved as cause
    - **Call-site compatibility:** Argument errors are also ``TypeError`` /
      ``ValueError`` so existing ``except`` clauses keep working

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                       SigspineError                          │
        │              (category, context, cause)                      │
        ├──────────────────────────────────────────────────────────────┤
        │  ConfigError        SourceParseError     ArgumentError       │
        │  (CONFIG)           (PARSE)              (ARGUMENT)          │
        │     │                                       │                │
        │  InvalidConfigError          MissingArgumentError            │
        │                              ExclusiveArgumentsError         │
        │                              InvalidChoiceError              │
        │                                                              │
        │  RuleError          UnknownConventionError                   │
        │  (RULE)             (RULE)                                   │
        └──────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Raise bare ``Exception`` from a rule or helper
    ✅ DO: Use the matching SigspineError subclass

    ❌ DON'T: Swallow the original exception when wrapping
    ✅ DO: Pass it as cause=

Tags:
    error-handling, exception-hierarchy, error-context, sigspine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and reporting."""

    CONFIG = "CONFIG"
    PARSE = "PARSE"
    ARGUMENT = "ARGUMENT"
    RULE = "RULE"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        file: Source file being linted or loaded
        function: Qualified name of the function involved
        parameter: Parameter name involved
        rule: Lint rule code or name involved
        metadata: Additional key-value pairs
    """

    file: str | None = None
    function: str | None = None
    parameter: str | None = None
    rule: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["file", "function", "parameter", "rule"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class SigspineError(Exception):
    """
    Base exception for all sigspine errors.

    Subclasses set ``default_category`` so callers rarely pass one.

    Examples:
        >>> error = SigspineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>

        >>> error = SigspineError("bad default").with_context(
        ...     file="pkg/mod.py", function="sample"
        ... )
        >>> error.context.function
        'sample'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SigspineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise SourceParseError("Failed").with_context(file="mod.py")
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context = self.context.to_dict()
        if context:
            result["context"] = context
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(SigspineError):
    """Configuration could not be loaded or is invalid."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """A configuration key has an invalid or unknown value."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        msg = message or f"Invalid value for {key!r}: {value!r}"
        super().__init__(msg)
        self.key = key
        self.value = value
        self.context.metadata["config_key"] = key


# =============================================================================
# PARSE ERRORS
# =============================================================================


class SourceParseError(SigspineError):
    """Source file is not Python or does not parse."""

    default_category = ErrorCategory.PARSE

    def __init__(
        self,
        message: str,
        *,
        lineno: int | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.lineno = lineno


# =============================================================================
# ARGUMENT ERRORS (raised at call sites by sigspine.args)
# =============================================================================


class ArgumentError(SigspineError, TypeError):
    """A function was called with an invalid combination of arguments."""

    default_category = ErrorCategory.ARGUMENT


class MissingArgumentError(ArgumentError):
    """One or more required arguments were not supplied."""

    def __init__(self, names: list[str], message: str | None = None):
        self.names = list(names)
        quoted = ", ".join(f"`{n}`" for n in self.names)
        noun = "Argument" if len(self.names) == 1 else "Arguments"
        verb = "is" if len(self.names) == 1 else "are"
        super().__init__(message or f"{noun} {quoted} {verb} absent but must be supplied.")
        if len(self.names) == 1:
            self.context.parameter = self.names[0]


class ExclusiveArgumentsError(ArgumentError):
    """Mutually exclusive arguments were both supplied, or none was."""

    def __init__(
        self,
        names: list[str],
        supplied: list[str],
        message: str | None = None,
    ):
        self.names = list(names)
        self.supplied = list(supplied)
        options = ", ".join(f"`{n}`" for n in self.names)
        if message is None:
            if self.supplied:
                given = ", ".join(f"`{n}`" for n in self.supplied)
                message = f"Exactly one of {options} must be supplied; got {given}."
            else:
                message = f"Exactly one of {options} must be supplied; got none."
        super().__init__(message)


class InvalidChoiceError(ArgumentError, ValueError):
    """A string option is not one of the enumerated choices."""

    def __init__(
        self,
        arg_name: str,
        value: Any,
        choices: list[str],
        suggestion: str | None = None,
    ):
        self.arg_name = arg_name
        self.value = value
        self.choices = list(choices)
        self.suggestion = suggestion
        allowed = ", ".join(repr(c) for c in self.choices)
        msg = f"`{arg_name}` must be one of {allowed}, not {value!r}."
        if suggestion:
            msg += f" Did you mean {suggestion!r}?"
        super().__init__(msg)
        self.context.parameter = arg_name


# =============================================================================
# RULE ERRORS
# =============================================================================


class RuleError(SigspineError):
    """A lint rule is misconfigured or could not be registered."""

    default_category = ErrorCategory.RULE


class UnknownConventionError(RuleError, KeyError):
    """No convention or rule matches the requested identifier."""

    def __init__(self, identifier: str):
        super().__init__(f"Unknown convention or rule code: {identifier!r}")
        self.identifier = identifier

    def __str__(self) -> str:
        return self.message
