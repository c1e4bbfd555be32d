"""
Signature model.

Plain dataclasses describing a function signature as the linter sees it:
parameters with their kind, default, and role, plus the facts gathered
from the function body that rules need (which parameters are rejected when
``None``, which pairs are enforced as mutually exclusive, and so on).

Signatures are produced either from source (``sigspine.parser.ast_walker``)
or from a live callable (``sigspine.parser.introspect``).

Example:
    >>> from sigspine.parser import SignatureWalker
    >>> sig = SignatureWalker().walk_source("def sample(x, size=None): ...")[0]
    >>> sig.render()
    'sample(x, size=None)'
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ParameterKind(str, Enum):
    """How a parameter binds at the call site (mirrors ``inspect.Parameter``)."""

    POSITIONAL_ONLY = "positional_only"
    POSITIONAL_OR_KEYWORD = "positional_or_keyword"
    VAR_POSITIONAL = "var_positional"
    KEYWORD_ONLY = "keyword_only"
    VAR_KEYWORD = "var_keyword"


class ArgumentRole(str, Enum):
    """What a parameter is for.

    ``DATA`` is the thing being operated on, ``DESCRIPTOR`` configures the
    operation, ``DETAILS`` fine-tunes it and always has a default.
    """

    DATA = "data"
    DESCRIPTOR = "descriptor"
    DETAILS = "details"
    DOTS = "dots"
    RECEIVER = "receiver"
    UNKNOWN = "unknown"


# Order in which roles should appear in a well-designed signature
ROLE_ORDER: dict[ArgumentRole, int] = {
    ArgumentRole.RECEIVER: 0,
    ArgumentRole.DATA: 1,
    ArgumentRole.DESCRIPTOR: 2,
    ArgumentRole.DOTS: 3,
    ArgumentRole.DETAILS: 4,
    ArgumentRole.UNKNOWN: 5,
}


@dataclass
class Parameter:
    """A single function parameter.

    Attributes:
        name: Parameter name
        kind: Binding kind
        annotation: Annotation as source text (if present)
        default: Default value as source text (``None`` when there is no default)
        has_default: Whether the parameter has a default
        default_node: AST node of the default (source-parsed signatures only)
        role: Role assigned by ``sigspine.classify``
    """

    name: str
    kind: ParameterKind
    annotation: str | None = None
    default: str | None = None
    has_default: bool = False
    default_node: ast.expr | None = field(default=None, repr=False, compare=False)
    role: ArgumentRole = ArgumentRole.UNKNOWN

    @property
    def is_variadic(self) -> bool:
        return self.kind in (ParameterKind.VAR_POSITIONAL, ParameterKind.VAR_KEYWORD)

    @property
    def is_required(self) -> bool:
        """Must be supplied by the caller."""
        return not self.has_default and not self.is_variadic

    @property
    def is_optional(self) -> bool:
        return self.has_default

    @property
    def is_keyword_only(self) -> bool:
        return self.kind == ParameterKind.KEYWORD_ONLY

    @property
    def is_positional(self) -> bool:
        """Can be passed positionally."""
        return self.kind in (ParameterKind.POSITIONAL_ONLY, ParameterKind.POSITIONAL_OR_KEYWORD)

    @property
    def is_bool_default(self) -> bool:
        return self.default in ("True", "False")

    def render(self) -> str:
        """Render as it would appear in a ``def`` statement."""
        prefix = ""
        if self.kind == ParameterKind.VAR_POSITIONAL:
            prefix = "*"
        elif self.kind == ParameterKind.VAR_KEYWORD:
            prefix = "**"

        text = f"{prefix}{self.name}"
        if self.annotation:
            text += f": {self.annotation}"
        if self.has_default:
            text += f" = {self.default}" if self.annotation else f"={self.default}"
        return text


@dataclass
class FunctionFacts:
    """Facts about a function body that signature-only data cannot show.

    Attributes:
        raises_when_none: Parameters the body rejects with ``if p is None: raise``
        exclusive_pairs: Pairs rejected when both are supplied
        one_of_pairs: Pairs rejected when neither is supplied
        unenforced_exclusive: Pairs handled by an ``if/elif`` preference chain
            with no exclusivity check
        dependent_flags: Pairs combined in a raising condition
        kwargs_keys: Keys read from ``**kwargs``
        presence_checks: Parameters checked with ``"p" in locals()``
        string_comparisons: String literals each parameter is compared with
        module_sentinels: Module-level names bound to ``object()``
        source_available: False when only the signature could be read
    """

    raises_when_none: set[str] = field(default_factory=set)
    exclusive_pairs: set[tuple[str, str]] = field(default_factory=set)
    one_of_pairs: set[tuple[str, str]] = field(default_factory=set)
    unenforced_exclusive: set[tuple[str, str]] = field(default_factory=set)
    dependent_flags: set[tuple[str, str]] = field(default_factory=set)
    kwargs_keys: set[str] = field(default_factory=set)
    presence_checks: set[str] = field(default_factory=set)
    string_comparisons: dict[str, set[str]] = field(default_factory=dict)
    module_sentinels: set[str] = field(default_factory=set)
    source_available: bool = True


@dataclass
class FunctionSignature:
    """A function or method signature plus body facts.

    Attributes:
        name: Function name
        qualname: Dotted name including enclosing classes/functions
        module: Module name
        file_path: Source file (``None`` for source strings)
        line_number: Line of the ``def`` statement
        parameters: Parameters in declaration order
        return_annotation: Return annotation as source text
        decorators: Decorator names
        is_method: Defined directly inside a class body
        is_async: ``async def``
        suppressed: Rule codes suppressed on the ``def`` line (``"*"`` for all)
        facts: Body facts
    """

    name: str
    qualname: str
    module: str = ""
    file_path: Path | None = None
    line_number: int = 0
    parameters: list[Parameter] = field(default_factory=list)
    return_annotation: str | None = None
    decorators: list[str] = field(default_factory=list)
    is_method: bool = False
    is_async: bool = False
    suppressed: set[str] = field(default_factory=set)
    facts: FunctionFacts = field(default_factory=FunctionFacts)

    @property
    def is_private(self) -> bool:
        return self.name.startswith("_") and not self.is_dunder

    @property
    def is_dunder(self) -> bool:
        return self.name.startswith("__") and self.name.endswith("__")

    @property
    def is_staticmethod(self) -> bool:
        return "staticmethod" in self.decorators

    @property
    def location(self) -> str:
        path = str(self.file_path) if self.file_path else "<string>"
        return f"{path}:{self.line_number}"

    def parameter(self, name: str) -> Parameter | None:
        """Look up a parameter by name."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    @property
    def arguments(self) -> list[Parameter]:
        """Parameters a caller supplies (excludes ``self``/``cls``)."""
        return [p for p in self.parameters if p.role != ArgumentRole.RECEIVER]

    @property
    def required(self) -> list[Parameter]:
        return [p for p in self.arguments if p.is_required]

    @property
    def optional(self) -> list[Parameter]:
        return [p for p in self.arguments if p.is_optional]

    @property
    def keyword_only(self) -> list[Parameter]:
        return [p for p in self.arguments if p.is_keyword_only]

    @property
    def positional(self) -> list[Parameter]:
        return [p for p in self.arguments if p.is_positional]

    def is_suppressed(self, code: str) -> bool:
        return "*" in self.suppressed or code in self.suppressed

    def render(self) -> str:
        """Rebuild the signature text, including ``/`` and ``*`` markers."""
        parts: list[str] = []
        saw_positional_only = False
        saw_star = False

        for param in self.parameters:
            if saw_positional_only and param.kind != ParameterKind.POSITIONAL_ONLY:
                parts.append("/")
                saw_positional_only = False
            if param.kind == ParameterKind.POSITIONAL_ONLY:
                saw_positional_only = True
            if param.kind == ParameterKind.VAR_POSITIONAL:
                saw_star = True
            if param.kind == ParameterKind.KEYWORD_ONLY and not saw_star:
                parts.append("*")
                saw_star = True
            parts.append(param.render())

        if saw_positional_only:
            parts.append("/")

        text = f"{self.name}({', '.join(parts)})"
        if self.return_annotation:
            text += f" -> {self.return_annotation}"
        return text
