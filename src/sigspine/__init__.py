"""
sigspine - lint function signatures for argument design conventions.

Static checks (``sigspine.linter``) find signatures that are hard to call
correctly; runtime helpers (``sigspine.args``) are the fixes the checks
recommend.
"""

__version__ = "0.1.0"

from sigspine.args import (  # noqa: E402
    MISSING,
    arg_match,
    check_exclusive,
    check_flags,
    check_required,
    deprecated_argument,
)
from sigspine.classify import classify  # noqa: E402
from sigspine.config import LinterConfig  # noqa: E402
from sigspine.errors import (  # noqa: E402
    ArgumentError,
    ExclusiveArgumentsError,
    InvalidChoiceError,
    MissingArgumentError,
    SigspineError,
)
from sigspine.linter import (  # noqa: E402
    LintDiagnostic,
    LintResult,
    Severity,
    lint_callable,
    lint_file,
    lint_paths,
    lint_signature,
    lint_source,
    register_lint_rule,
)
from sigspine.signature import ArgumentRole, FunctionSignature, Parameter  # noqa: E402

__all__ = [
    "__version__",
    # args
    "MISSING",
    "arg_match",
    "check_exclusive",
    "check_flags",
    "check_required",
    "deprecated_argument",
    # model
    "ArgumentRole",
    "FunctionSignature",
    "Parameter",
    "classify",
    # linting
    "LinterConfig",
    "LintDiagnostic",
    "LintResult",
    "Severity",
    "lint_callable",
    "lint_file",
    "lint_paths",
    "lint_signature",
    "lint_source",
    "register_lint_rule",
    # errors
    "SigspineError",
    "ArgumentError",
    "MissingArgumentError",
    "ExclusiveArgumentsError",
    "InvalidChoiceError",
]
