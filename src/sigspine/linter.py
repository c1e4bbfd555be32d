"""Signature Linter: static checks for argument design conventions.

Catches signatures that make functions hard to call correctly: required
arguments disguised as optional, magical defaults, unenforced mutually
exclusive pairs, positional boolean flags, and so on. Extensible via a
rule registry so teams can add house conventions.

Architecture::

    lint_paths(paths) / lint_file(path) / lint_source(text) / lint_callable(fn)
    │
    ▼
    SignatureWalker ──► FunctionSignature (classified, with body facts)
    │
    ▼
    lint_signature(signature)
    │
    ├── W101 required-with-default
    ├── W102 magical-default
    ├── W103 hidden-argument
    ├── W201 argument-order
    ├── W202 details-positional
    ├── W203 boolean-positional
    ├── I301 mutually-exclusive
    ├── W302 unenforced-exclusive
    ├── W303 dependent-flags
    ├── E401 mutable-default
    ├── W402 complex-default
    ├── I403 enumerate-options
    ├── W404 too-many-arguments
    └── (custom rules via register_lint_rule)
    │
    ▼
    LintResult
    ├── diagnostics: list[LintDiagnostic]
    ├── passed → bool (no errors)
    ├── errors / warnings / infos
    └── summary() → str

Example::

    from sigspine.linter import lint_source

    result = lint_source('''
    def sample(x, size=None, replace=False):
        if size is None:
            raise ValueError("size is required")
    ''')
    for d in result.warnings:
        print(d)

See Also:
    sigspine.conventions: the conventions each rule checks
    sigspine.args: runtime helpers that fix what the rules report
"""

from __future__ import annotations

import ast
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from sigspine.config import LinterConfig
from sigspine.errors import RuleError, SourceParseError
from sigspine.logging import get_logger, lint_context
from sigspine.parser.ast_walker import SignatureWalker
from sigspine.parser.introspect import signature_from_callable
from sigspine.signature import FunctionSignature, Parameter, ParameterKind

log = get_logger(__name__)

# Dunder methods that are called with user-facing arguments
_LINTED_DUNDERS = ("__init__", "__call__", "__new__")

_MUTABLE_FACTORIES = (
    "list", "dict", "set", "bytearray", "defaultdict", "deque", "OrderedDict", "Counter",
)


# ---------------------------------------------------------------------------
# Diagnostic model
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    """Severity level for a lint diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class LintDiagnostic:
    """A single lint finding.

    Attributes:
        code: Short identifier (e.g. ``"W101"``).
        severity: ``error``, ``warning``, or ``info``.
        message: Human-readable description.
        function: Qualified name of the offending function (if applicable).
        parameter: Name of the offending parameter (if applicable).
        file: Source file (if known).
        line: Line of the ``def`` statement (if known).
        suggestion: Recommended fix (optional).
        convention: Id of the convention the rule checks (e.g. ``"C-REQ"``).
    """

    code: str
    severity: Severity
    message: str
    function: str | None = None
    parameter: str | None = None
    file: str | None = None
    line: int | None = None
    suggestion: str | None = None
    convention: str | None = None

    @property
    def location(self) -> str:
        if self.file is None:
            return ""
        return f"{self.file}:{self.line}" if self.line else self.file

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "message": self.message,
            "function": self.function,
            "parameter": self.parameter,
            "file": self.file,
            "line": self.line,
            "suggestion": self.suggestion,
            "convention": self.convention,
        }

    def __str__(self) -> str:
        prefix = f"[{self.code}] {self.severity.value.upper()}"
        where = f" in '{self.function}'" if self.function else ""
        hint = f" Suggestion: {self.suggestion}" if self.suggestion else ""
        text = f"{prefix}{where}: {self.message}{hint}"
        return f"{self.location}: {text}" if self.location else text


@dataclass
class LintResult:
    """Aggregated result of linting one or more signatures.

    Attributes:
        target: What was linted (function name, file, or path list).
        diagnostics: All findings from all rules.
        functions_checked: Number of signatures the rules ran against.
        files_checked: Number of files read.
    """

    target: str
    diagnostics: list[LintDiagnostic] = field(default_factory=list)
    functions_checked: int = 0
    files_checked: int = 0

    @property
    def passed(self) -> bool:
        """True if there are no error-level diagnostics."""
        return not any(d.severity == Severity.ERROR for d in self.diagnostics)

    @property
    def errors(self) -> list[LintDiagnostic]:
        """Error-level diagnostics only."""
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[LintDiagnostic]:
        """Warning-level diagnostics only."""
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def infos(self) -> list[LintDiagnostic]:
        """Info-level diagnostics only."""
        return [d for d in self.diagnostics if d.severity == Severity.INFO]

    def by_code(self) -> dict[str, list[LintDiagnostic]]:
        """Diagnostics grouped by rule code (codes sorted)."""
        grouped: dict[str, list[LintDiagnostic]] = {}
        for d in sorted(self.diagnostics, key=lambda d: d.code):
            grouped.setdefault(d.code, []).append(d)
        return grouped

    def merge(self, other: LintResult) -> LintResult:
        """Fold *other* into this result (in place) and return self."""
        self.diagnostics.extend(other.diagnostics)
        self.functions_checked += other.functions_checked
        self.files_checked += other.files_checked
        return self

    def summary(self) -> str:
        """One-line summary of the lint result."""
        counts = {
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "infos": len(self.infos),
        }
        status = "PASS" if self.passed else "FAIL"
        parts = [f"{status}: {self.target}"]
        for label, count in counts.items():
            if count:
                parts.append(f"{count} {label}")
        return " | ".join(parts)

    def __str__(self) -> str:
        lines = [self.summary()]
        for d in self.diagnostics:
            lines.append(f"  {d}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Rule registry
# ---------------------------------------------------------------------------

# Type alias for lint rules: takes a signature and the active config
LintRule = Callable[[FunctionSignature, LinterConfig], list[LintDiagnostic]]


@dataclass(frozen=True)
class RuleInfo:
    """Metadata about a built-in rule."""

    code: str
    name: str
    severity: Severity
    convention: str | None
    summary: str


_RULES: list[tuple[str, LintRule]] = []


def register_lint_rule(name: str, rule: LintRule) -> None:
    """Register a custom lint rule.

    Parameters
    ----------
    name
        Human-readable rule name (e.g. ``"check_house_naming"``).
    rule
        Callable taking ``(signature, config)`` and returning a list of
        ``LintDiagnostic`` objects.

    Raises
    ------
    RuleError
        If *rule* is not callable or *name* is already registered.
    """
    if not callable(rule):
        raise RuleError(f"Lint rule {name!r} is not callable").with_context(rule=name)
    if name in list_lint_rules():
        raise RuleError(f"Lint rule {name!r} is already registered").with_context(rule=name)
    _RULES.append((name, rule))
    log.debug("linter.rule_registered", rule=name)


def list_lint_rules() -> list[str]:
    """Return names of all registered lint rules (built-in + custom)."""
    return [name for name, _ in _BUILT_IN_RULES] + [name for name, _ in _RULES]


def clear_custom_rules() -> None:
    """Remove all custom lint rules (built-in rules are preserved)."""
    _RULES.clear()


def describe_rules() -> list[RuleInfo]:
    """Metadata for every built-in rule, in execution order."""
    return list(RULE_INFO.values())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _diag(
    signature: FunctionSignature,
    code: str,
    message: str,
    *,
    parameter: str | None = None,
    suggestion: str | None = None,
) -> LintDiagnostic:
    info = RULE_INFO[code]
    return LintDiagnostic(
        code=code,
        severity=info.severity,
        message=message,
        function=signature.qualname,
        parameter=parameter,
        file=str(signature.file_path) if signature.file_path else None,
        line=signature.line_number or None,
        suggestion=suggestion,
        convention=info.convention,
    )


def _node_size(node: ast.AST) -> int:
    return sum(1 for n in ast.walk(node) if not isinstance(n, ast.expr_context))


def _is_mutable_default(node: ast.expr | None) -> bool:
    if node is None:
        return False
    if isinstance(node, (ast.List, ast.Dict, ast.Set, ast.ListComp, ast.DictComp, ast.SetComp)):
        return True
    if isinstance(node, ast.Call):
        func = node.func
        name = func.id if isinstance(func, ast.Name) else func.attr if isinstance(func, ast.Attribute) else None
        return name in _MUTABLE_FACTORIES
    return False


def _is_bool_param(param: Parameter | None) -> bool:
    if param is None:
        return False
    return param.is_bool_default or (param.annotation or "").replace(" ", "") in ("bool", "bool|None")


def _quote(names: Iterable[str]) -> str:
    return ", ".join(f"'{n}'" for n in names)


# ---------------------------------------------------------------------------
# Built-in rules
# ---------------------------------------------------------------------------

def _check_required_with_default(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """W101: Defaulted argument that the body rejects when left at its default."""
    diagnostics: list[LintDiagnostic] = []
    for param in sig.optional:
        if param.name in sig.facts.raises_when_none and param.default == "None":
            diagnostics.append(
                _diag(
                    sig,
                    "W101",
                    f"Argument '{param.name}' defaults to None but the function raises when it is None.",
                    parameter=param.name,
                    suggestion=f"Remove the default so '{param.name}' is required.",
                )
            )
    return diagnostics


def _check_magical_default(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """W102: Explicitly supplying the default behaves differently from omitting it."""
    diagnostics: list[LintDiagnostic] = []
    for param in sig.optional:
        node = param.default_node
        if (
            isinstance(node, ast.Name)
            and node.id in sig.facts.module_sentinels
            and node.id.startswith("_")
        ):
            diagnostics.append(
                _diag(
                    sig,
                    "W102",
                    f"Argument '{param.name}' defaults to private sentinel '{node.id}'; "
                    "callers cannot write the default out.",
                    parameter=param.name,
                    suggestion="Default to None, or use the public sigspine.args.MISSING sentinel.",
                )
            )

    for name in sorted(sig.facts.presence_checks):
        diagnostics.append(
            _diag(
                sig,
                "W102",
                f"The function checks whether '{name}' was passed; explicit and implicit defaults differ.",
                parameter=name,
                suggestion="Branch on the value (e.g. 'is None'), not on whether it was supplied.",
            )
        )
    return diagnostics


def _check_hidden_arguments(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """W103: Behaviour read from **kwargs keys."""
    kwargs = next((p for p in sig.parameters if p.kind == ParameterKind.VAR_KEYWORD), None)
    if kwargs is None or not sig.facts.kwargs_keys:
        return []
    return [
        _diag(
            sig,
            "W103",
            f"Reads '{key}' from **{kwargs.name}; the option is hidden from the signature.",
            parameter=kwargs.name,
            suggestion=f"Declare '{key}' as a keyword-only parameter.",
        )
        for key in sorted(sig.facts.kwargs_keys)
    ]


def _check_argument_order(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """W201: Required arguments must come before optional details."""
    diagnostics: list[LintDiagnostic] = []

    seen_optional: Parameter | None = None
    for param in sig.keyword_only:
        if param.is_optional and seen_optional is None:
            seen_optional = param
        elif param.is_required and seen_optional is not None:
            diagnostics.append(
                _diag(
                    sig,
                    "W201",
                    f"Required argument '{param.name}' follows optional argument '{seen_optional.name}'.",
                    parameter=param.name,
                    suggestion="Place required arguments (data, descriptors) before optional details.",
                )
            )

    var_positional = next((p for p in sig.parameters if p.kind == ParameterKind.VAR_POSITIONAL), None)
    if var_positional is not None:
        captured = [p.name for p in sig.positional if p.is_optional]
        if captured:
            diagnostics.append(
                _diag(
                    sig,
                    "W201",
                    f"Optional argument(s) {_quote(captured)} precede *{var_positional.name} "
                    "and can be filled positionally by accident.",
                    parameter=captured[0],
                    suggestion=f"Move {_quote(captured)} after *{var_positional.name} so they must be named.",
                )
            )
    return diagnostics


def _check_details_positional(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """W202: Too many optional arguments can be passed positionally."""
    positional_details = [p for p in sig.positional if p.is_optional]
    limit = config.max_positional_details
    if len(positional_details) <= limit:
        return []
    extra = [p.name for p in positional_details[limit:]]
    return [
        _diag(
            sig,
            "W202",
            f"{len(positional_details)} optional arguments can be passed positionally "
            f"(threshold: {limit}).",
            parameter=extra[0],
            suggestion=f"Make {_quote(extra)} keyword-only by adding '*' before them.",
        )
    ]


def _check_boolean_positional(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """W203: Boolean flag that can be passed positionally."""
    return [
        _diag(
            sig,
            "W203",
            f"Boolean flag '{param.name}={param.default}' can be passed positionally.",
            parameter=param.name,
            suggestion=f"Make '{param.name}' keyword-only, or replace it with an enumerated option.",
        )
        for param in sig.positional
        if param.is_bool_default
    ]


def _check_mutually_exclusive(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """I301: Enforced mutually exclusive (or one-of) argument pairs."""
    diagnostics: list[LintDiagnostic] = []
    for a, b in sorted(sig.facts.exclusive_pairs | sig.facts.one_of_pairs):
        diagnostics.append(
            _diag(
                sig,
                "I301",
                f"Arguments '{a}' and '{b}' are mutually exclusive.",
                parameter=a,
                suggestion="Consider separate functions or a single argument that accepts either form.",
            )
        )
    return diagnostics


def _check_unenforced_exclusive(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """W302: if/elif preference chain silently ignores one of two arguments."""
    return [
        _diag(
            sig,
            "W302",
            f"Arguments '{a}' and '{b}' are handled as alternatives but supplying both is not an error.",
            parameter=a,
            suggestion=f"Call check_exclusive({a}={a}, {b}={b}) before branching.",
        )
        for a, b in sorted(sig.facts.unenforced_exclusive)
    ]


def _check_dependent_flags(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """W303: Boolean flags validated against each other."""
    diagnostics: list[LintDiagnostic] = []
    for a, b in sorted(sig.facts.dependent_flags):
        if _is_bool_param(sig.parameter(a)) and _is_bool_param(sig.parameter(b)):
            diagnostics.append(
                _diag(
                    sig,
                    "W303",
                    f"Flags '{a}' and '{b}' depend on each other; some combinations are rejected.",
                    parameter=a,
                    suggestion="Replace the flags with one enumerated option validated by arg_match().",
                )
            )
    return diagnostics


def _check_mutable_default(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """E401: Mutable default value shared between calls."""
    return [
        _diag(
            sig,
            "E401",
            f"Argument '{param.name}' has mutable default {param.default}; it is shared between calls.",
            parameter=param.name,
            suggestion="Default to None and create the value in the body.",
        )
        for param in sig.optional
        if _is_mutable_default(param.default_node)
    ]


def _check_complex_default(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """W402: Default expression is not short and sweet."""
    diagnostics: list[LintDiagnostic] = []
    for param in sig.optional:
        node = param.default_node
        if node is None or _is_mutable_default(node):
            continue
        size = _node_size(node)
        if size > config.max_default_complexity:
            diagnostics.append(
                _diag(
                    sig,
                    "W402",
                    f"Default of '{param.name}' is a complex expression ({size} nodes, "
                    f"threshold: {config.max_default_complexity}).",
                    parameter=param.name,
                    suggestion="Default to None and compute the value in the body.",
                )
            )
    return diagnostics


def _check_enumerate_options(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """I403: String option compared against literals but not enumerated."""
    diagnostics: list[LintDiagnostic] = []
    for param in sig.optional:
        node = param.default_node
        if not (isinstance(node, ast.Constant) and isinstance(node.value, str)):
            continue
        compared = sig.facts.string_comparisons.get(param.name, set())
        if len(compared) < 2 or "Literal" in (param.annotation or ""):
            continue
        options = [node.value] + sorted(compared - {node.value})
        literal = ", ".join(repr(o) for o in options)
        diagnostics.append(
            _diag(
                sig,
                "I403",
                f"Argument '{param.name}' selects between {len(options)} string options.",
                parameter=param.name,
                suggestion=f"Annotate as Literal[{literal}] and validate with arg_match().",
            )
        )
    return diagnostics


def _check_too_many_arguments(sig: FunctionSignature, config: LinterConfig) -> list[LintDiagnostic]:
    """W404: Argument clutter."""
    count = len([p for p in sig.arguments if not p.is_variadic])
    if count <= config.max_arguments:
        return []
    return [
        _diag(
            sig,
            "W404",
            f"Function takes {count} arguments (threshold: {config.max_arguments}).",
            suggestion="Bundle related details into an options object, or split the function.",
        )
    ]


# Ordered list of built-in rules
_BUILT_IN_RULES: list[tuple[str, LintRule]] = [
    ("required-with-default", _check_required_with_default),
    ("magical-default", _check_magical_default),
    ("hidden-argument", _check_hidden_arguments),
    ("argument-order", _check_argument_order),
    ("details-positional", _check_details_positional),
    ("boolean-positional", _check_boolean_positional),
    ("mutually-exclusive", _check_mutually_exclusive),
    ("unenforced-exclusive", _check_unenforced_exclusive),
    ("dependent-flags", _check_dependent_flags),
    ("mutable-default", _check_mutable_default),
    ("complex-default", _check_complex_default),
    ("enumerate-options", _check_enumerate_options),
    ("too-many-arguments", _check_too_many_arguments),
]

RULE_INFO: dict[str, RuleInfo] = {
    info.code: info
    for info in [
        RuleInfo("W101", "required-with-default", Severity.WARNING, "C-REQ",
                 "Defaulted argument rejected by the body when left unset."),
        RuleInfo("W102", "magical-default", Severity.WARNING, "C-MAGIC",
                 "Explicit and implicit defaults behave differently."),
        RuleInfo("W103", "hidden-argument", Severity.WARNING, "C-HIDDEN",
                 "Option read from **kwargs instead of declared."),
        RuleInfo("W201", "argument-order", Severity.WARNING, "C-ORDER",
                 "Required argument after optional ones."),
        RuleInfo("W202", "details-positional", Severity.WARNING, "C-DETAILS",
                 "Too many optional arguments can be passed positionally."),
        RuleInfo("W203", "boolean-positional", Severity.WARNING, "C-BOOL",
                 "Boolean flag can be passed positionally."),
        RuleInfo("I301", "mutually-exclusive", Severity.INFO, "C-EXCL",
                 "Enforced mutually exclusive argument pair."),
        RuleInfo("W302", "unenforced-exclusive", Severity.WARNING, "C-EXCL",
                 "Alternative arguments where supplying both is silently accepted."),
        RuleInfo("W303", "dependent-flags", Severity.WARNING, "C-FLAGS",
                 "Boolean flags validated against each other."),
        RuleInfo("E401", "mutable-default", Severity.ERROR, "C-SHORT",
                 "Mutable default value."),
        RuleInfo("W402", "complex-default", Severity.WARNING, "C-SHORT",
                 "Default expression too complex."),
        RuleInfo("I403", "enumerate-options", Severity.INFO, "C-ENUM",
                 "String option not enumerated with Literal[...]."),
        RuleInfo("W404", "too-many-arguments", Severity.WARNING, "C-CLUTTER",
                 "Too many arguments."),
        RuleInfo("E001", "syntax-error", Severity.ERROR, None,
                 "File could not be parsed."),
        RuleInfo("X001", "rule-crashed", Severity.WARNING, None,
                 "A lint rule raised an exception."),
    ]
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def should_lint(signature: FunctionSignature, config: LinterConfig) -> bool:
    """Whether *signature* is in scope for linting under *config*."""
    if "overload" in signature.decorators:
        return False
    if signature.is_dunder:
        return signature.name in _LINTED_DUNDERS
    if signature.is_private and not config.include_private:
        return False
    return True


def lint_signature(
    signature: FunctionSignature,
    *,
    config: LinterConfig | None = None,
    extra_rules: list[LintRule] | None = None,
) -> LintResult:
    """Run all lint rules against a signature.

    Parameters
    ----------
    signature
        A classified signature (from the walker or ``signature_from_callable``).
    config
        Active configuration; defaults to ``LinterConfig()``.
    extra_rules
        One-shot rules to run in addition to built-in and registered rules.

    Returns
    -------
    LintResult
        Aggregated diagnostics from all rules.
    """
    config = config or LinterConfig()
    result = LintResult(target=signature.qualname)

    if not should_lint(signature, config):
        log.debug("linter.skip_function", function=signature.qualname)
        return result

    all_rules = list(_BUILT_IN_RULES) + list(_RULES)
    if extra_rules:
        for i, rule in enumerate(extra_rules):
            all_rules.append((f"extra_rule_{i}", rule))

    file = str(signature.file_path) if signature.file_path else None
    with lint_context(file=file, function=signature.qualname):
        for rule_name, rule in all_rules:
            try:
                with lint_context(rule=rule_name):
                    diagnostics = rule(signature, config)
            except Exception:
                log.warning("linter.rule_crashed", rule=rule_name, exc_info=True)
                diagnostics = [
                    LintDiagnostic(
                        code="X001",
                        severity=Severity.WARNING,
                        message=f"Lint rule '{rule_name}' raised an exception.",
                        function=signature.qualname,
                        file=file,
                        line=signature.line_number or None,
                    )
                ]
            result.diagnostics.extend(
                d for d in diagnostics
                if config.is_enabled(d.code) and not signature.is_suppressed(d.code)
            )

    if not config.include_infos:
        result.diagnostics = [d for d in result.diagnostics if d.severity != Severity.INFO]

    result.functions_checked = 1
    log.debug("linter.linted", function=signature.qualname, summary=result.summary())
    return result


def lint_signatures(
    signatures: Iterable[FunctionSignature],
    *,
    target: str,
    config: LinterConfig | None = None,
) -> LintResult:
    """Lint many signatures into one result."""
    config = config or LinterConfig()
    result = LintResult(target=target)
    for signature in signatures:
        result.merge(lint_signature(signature, config=config))
    return result


def _syntax_error_result(target: str, error: SourceParseError, config: LinterConfig) -> LintResult:
    result = LintResult(target=target, files_checked=1)
    if config.is_enabled("E001"):
        result.diagnostics.append(
            LintDiagnostic(
                code="E001",
                severity=Severity.ERROR,
                message=error.message,
                file=target,
                line=error.lineno,
                suggestion="Fix the syntax error; no other rule ran on this file.",
            )
        )
    return result


def lint_source(
    source: str,
    *,
    filename: str = "<string>",
    config: LinterConfig | None = None,
) -> LintResult:
    """Lint every function in a source string."""
    config = config or LinterConfig()
    try:
        signatures = SignatureWalker().walk_source(
            source,
            filename=filename,
            file_path=None if filename.startswith("<") else Path(filename),
        )
    except SourceParseError as e:
        return _syntax_error_result(filename, e, config)
    result = lint_signatures(signatures, target=filename, config=config)
    result.files_checked = 1
    return result


def lint_file(path: Path | str, *, config: LinterConfig | None = None) -> LintResult:
    """Lint every function in a Python file.

    A file that does not parse yields an E001 diagnostic.

    Raises:
        FileNotFoundError: If the file doesn't exist
        SourceParseError: If the file is not a ``.py`` file
    """
    config = config or LinterConfig()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if path.suffix != ".py":
        raise SourceParseError(f"Not a Python file: {path}").with_context(file=str(path))

    with lint_context(file=str(path)):
        try:
            signatures = SignatureWalker().walk_file(path)
        except SourceParseError as e:
            log.info("linter.parse_failed", error=e.message)
            return _syntax_error_result(str(path), e, config)
        result = lint_signatures(signatures, target=str(path), config=config)
    result.files_checked = 1
    return result


def iter_python_files(paths: Iterable[Path | str], config: LinterConfig) -> list[Path]:
    """Expand files and directories into the Python files to lint.

    Explicit file arguments are always included; directory contents are
    filtered by ``config.exclude``.
    """
    files: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(
                p for p in sorted(path.rglob("*.py")) if not config.should_skip(p, root=path)
            )
        else:
            files.append(path)
    return files


def lint_paths(paths: Iterable[Path | str], *, config: LinterConfig | None = None) -> LintResult:
    """Lint files and directories into one result.

    Raises:
        FileNotFoundError: If an explicit path doesn't exist
        SourceParseError: If an explicit file is not a ``.py`` file
    """
    config = config or LinterConfig()
    path_list = [Path(p) for p in paths]
    for path in path_list:
        if not path.exists():
            raise FileNotFoundError(f"Path not found: {path}")

    result = LintResult(target=", ".join(str(p) for p in path_list))
    for file in iter_python_files(path_list, config):
        result.merge(lint_file(file, config=config))

    log.info(
        "linter.done",
        files=result.files_checked,
        functions=result.functions_checked,
        diagnostics=len(result.diagnostics),
    )
    return result


def lint_callable(func: Callable[..., Any], *, config: LinterConfig | None = None) -> LintResult:
    """Lint a live function or method (source re-parsed when available)."""
    return lint_signature(signature_from_callable(func), config=config)
