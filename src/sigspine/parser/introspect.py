"""
Signatures from live callables.

``signature_from_callable`` builds a ``FunctionSignature`` from an imported
function with ``inspect.signature``. When the callable's source is available
it is re-parsed so body facts (guard clauses, kwargs access) are filled in
too; builtins and C extensions get signature-only data.
"""

from __future__ import annotations

import ast
import inspect
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

from sigspine.classify import classify
from sigspine.logging import get_logger
from sigspine.parser.ast_walker import extract_parameters, parse_suppressions
from sigspine.parser.body_facts import collect_facts, module_sentinels
from sigspine.signature import FunctionFacts, FunctionSignature, Parameter, ParameterKind

log = get_logger(__name__)

_KIND_MAP = {
    inspect.Parameter.POSITIONAL_ONLY: ParameterKind.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD: ParameterKind.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL: ParameterKind.VAR_POSITIONAL,
    inspect.Parameter.KEYWORD_ONLY: ParameterKind.KEYWORD_ONLY,
    inspect.Parameter.VAR_KEYWORD: ParameterKind.VAR_KEYWORD,
}


def _annotation_text(annotation: Any) -> str | None:
    if annotation is inspect.Parameter.empty:
        return None
    if isinstance(annotation, str):
        return annotation
    return inspect.formatannotation(annotation)


def _default_node(text: str) -> ast.expr | None:
    try:
        return ast.parse(text, mode="eval").body
    except SyntaxError:
        return None


def _convert_parameter(param: inspect.Parameter) -> Parameter:
    has_default = param.default is not inspect.Parameter.empty
    default_text = repr(param.default) if has_default else None
    return Parameter(
        name=param.name,
        kind=_KIND_MAP[param.kind],
        annotation=_annotation_text(param.annotation),
        default=default_text,
        has_default=has_default,
        default_node=_default_node(default_text) if default_text is not None else None,
    )


def _source_facts(func: Callable[..., Any], parameters: list[Parameter]) -> tuple[FunctionFacts, set[str]]:
    """Re-parse the callable's source for body facts and suppressions."""
    try:
        source = textwrap.dedent(inspect.getsource(func))
    except (OSError, TypeError):
        return FunctionFacts(source_available=False), set()

    try:
        tree = ast.parse(source)
    except SyntaxError:
        log.debug("introspect.unparseable_source", function=getattr(func, "__qualname__", repr(func)))
        return FunctionFacts(source_available=False), set()

    node = next(
        (n for n in tree.body if isinstance(n, (ast.FunctionDef, ast.AsyncFunctionDef))),
        None,
    )
    if node is None:
        return FunctionFacts(source_available=False), set()

    sentinels: set[str] = set()
    module = inspect.getmodule(func)
    if module is not None:
        try:
            sentinels = module_sentinels(ast.parse(inspect.getsource(module)))
        except (OSError, TypeError, SyntaxError):
            sentinels = set()

    # Prefer default expressions as written (a sentinel name, not its repr)
    written = {p.name: p for p in extract_parameters(node.args)}
    for param in parameters:
        source_param = written.get(param.name)
        if source_param is not None and source_param.has_default and param.has_default:
            param.default = source_param.default
            param.default_node = source_param.default_node

    kwargs_name = next((p.name for p in parameters if p.kind == ParameterKind.VAR_KEYWORD), None)
    facts = collect_facts(node, {p.name for p in parameters}, kwargs_name, sentinels)

    lines = source.splitlines()
    end = node.body[0].lineno - 1 if node.body and node.body[0].lineno > node.lineno else node.lineno
    suppressed = parse_suppressions(lines[node.lineno - 1 : end])
    return facts, suppressed


def signature_from_callable(func: Callable[..., Any]) -> FunctionSignature:
    """Build a classified ``FunctionSignature`` from a live callable.

    Raises:
        TypeError: If *func* is not callable
        ValueError: If no signature can be determined (some builtins)
    """
    if not callable(func):
        raise TypeError(f"Expected a callable, got {type(func).__name__}")

    target = inspect.unwrap(func)
    inspected = inspect.signature(target)
    parameters = [_convert_parameter(p) for p in inspected.parameters.values()]

    qualname = getattr(target, "__qualname__", getattr(target, "__name__", repr(target)))
    name = getattr(target, "__name__", qualname.rsplit(".", 1)[-1])
    is_method = "." in qualname and "<locals>" not in qualname.rsplit(".", 1)[0].rsplit(".", 1)[-1]

    facts, suppressed = _source_facts(target, parameters)

    file_path: Path | None = None
    line_number = 0
    try:
        source_file = inspect.getsourcefile(target)
        if source_file:
            file_path = Path(source_file)
        line_number = inspect.getsourcelines(target)[1]
    except (OSError, TypeError):
        pass

    return_annotation = _annotation_text(inspected.return_annotation)

    decorators: list[str] = []
    if isinstance(inspect.getattr_static(_owner(target), name, None), staticmethod):
        decorators.append("staticmethod")

    signature = FunctionSignature(
        name=name,
        qualname=qualname,
        module=getattr(target, "__module__", "") or "",
        file_path=file_path,
        line_number=line_number,
        parameters=parameters,
        return_annotation=return_annotation,
        decorators=decorators,
        is_method=is_method,
        is_async=inspect.iscoroutinefunction(target),
        suppressed=suppressed,
        facts=facts,
    )
    return classify(signature)


def _owner(func: Callable[..., Any]) -> Any:
    """Best-effort lookup of the class that defines *func*."""
    qualname = getattr(func, "__qualname__", "")
    module = inspect.getmodule(func)
    if module is None or "." not in qualname or "<locals>" in qualname:
        return None
    owner: Any = module
    for part in qualname.split(".")[:-1]:
        owner = getattr(owner, part, None)
        if owner is None:
            return None
    return owner
