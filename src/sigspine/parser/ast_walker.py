"""
AST Walker for function signatures.

Walks the Abstract Syntax Tree of Python files and extracts every function
and method signature, together with the body facts the lint rules need.

Example:
    >>> walker = SignatureWalker()
    >>> for sig in walker.walk_file(Path("src/my_module.py")):
    ...     print(sig.render())
"""

from __future__ import annotations

import ast
import re
import tokenize
from collections.abc import Iterator
from fnmatch import fnmatch
from pathlib import Path

from sigspine.classify import classify
from sigspine.errors import SourceParseError
from sigspine.logging import get_logger
from sigspine.parser.body_facts import collect_facts, module_sentinels
from sigspine.signature import FunctionSignature, Parameter, ParameterKind

log = get_logger(__name__)

_SUPPRESS_RE = re.compile(r"#\s*sigspine:\s*ignore(?:\[(?P<codes>[A-Za-z0-9_,\s]*)\])?")

DEFAULT_SKIP_PATTERNS = ["__pycache__", ".venv", "venv", ".git", "build", "dist", ".tox"]


def parse_suppressions(lines: list[str]) -> set[str]:
    """Collect suppressed rule codes from ``# sigspine: ignore[...]`` comments.

    A bare ``# sigspine: ignore`` suppresses everything and yields ``{"*"}``.
    """
    codes: set[str] = set()
    for line in lines:
        for match in _SUPPRESS_RE.finditer(line):
            listed = match.group("codes")
            if listed is None:
                codes.add("*")
            else:
                codes.update(c.strip().upper() for c in listed.split(",") if c.strip())
    return codes


def is_excluded(path: Path, patterns: list[str], root: Path | None = None) -> bool:
    """Match exclude patterns against whole path components.

    Patterns are ``fnmatch`` globs (``"build"``, ``"*_pb2.py"``) and may span
    several components (``"tests/fixtures"``). Only the part of *path* below
    *root* is matched, so ``"build"`` skips ``pkg/build/x.py`` but neither
    ``pkg/build_index.py`` nor a checkout that lives under ``~/builds/``.
    """
    if root is not None:
        try:
            path = path.relative_to(root)
        except ValueError:
            pass
    parts = path.parts
    for pattern in patterns:
        wanted = pattern.strip("/").split("/")
        for start in range(len(parts) - len(wanted) + 1):
            window = parts[start : start + len(wanted)]
            if all(fnmatch(part, want) for part, want in zip(window, wanted)):
                return True
    return False


class SignatureWalker:
    """Walk Python AST and extract function signatures.

    Manifesto:
        The signature is the contract. Reading it from source (not from
        imported objects) means linting never executes user code.

    Architecture:
        ```
        Python File (.py)
              │
              ▼
        ast.parse() ──► Module
              │
              ├──► module_sentinels()      (names bound to object())
              │
              └──► visit FunctionDef / AsyncFunctionDef (nested too)
                        │
                        ├──► parameters    ──► Parameter
                        ├──► body facts    ──► FunctionFacts
                        └──► classify()    ──► FunctionSignature
        ```

    Guardrails:
        - Do NOT import or execute the linted module
          ✅ Only ast.parse() the source text
        - Do NOT abort a directory walk on one bad file
          ✅ Log and continue

    Tags:
        - parser
        - ast
        - signatures
    """

    def walk_source(
        self,
        source: str,
        *,
        filename: str = "<string>",
        module: str = "",
        file_path: Path | None = None,
    ) -> list[FunctionSignature]:
        """Extract all function signatures from source text.

        Args:
            source: Python source code
            filename: Name used in syntax error messages
            module: Module name recorded on each signature
            file_path: Source path recorded on each signature

        Returns:
            Signatures in source order (nested functions included)

        Raises:
            SourceParseError: If the source is not valid Python
        """
        try:
            tree = ast.parse(source, filename=filename)
        except SyntaxError as e:
            raise SourceParseError(
                f"Failed to parse {filename}: {e.msg}",
                lineno=e.lineno,
                cause=e,
            ).with_context(file=filename) from e

        visitor = _SignatureVisitor(
            lines=source.splitlines(),
            module=module,
            file_path=file_path,
            sentinels=module_sentinels(tree),
        )
        visitor.visit(tree)
        visitor.signatures.sort(key=lambda s: s.line_number)
        return visitor.signatures

    def walk_file(self, file_path: Path) -> list[FunctionSignature]:
        """Extract all function signatures from a Python file.

        Raises:
            FileNotFoundError: If file doesn't exist
            SourceParseError: If file is not a Python file or does not parse
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if file_path.suffix != ".py":
            raise SourceParseError(f"Not a Python file: {file_path}").with_context(file=str(file_path))

        try:
            source = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SourceParseError(f"Failed to decode {file_path}: {e}", cause=e).with_context(
                file=str(file_path)
            ) from e

        return self.walk_source(
            source,
            filename=str(file_path),
            module=derive_module_name(file_path),
            file_path=file_path,
        )

    def walk_directory(
        self,
        dir_path: Path,
        skip_patterns: list[str] | None = None,
    ) -> Iterator[FunctionSignature]:
        """Walk a directory and extract signatures from all Python files.

        Args:
            dir_path: Directory to walk
            skip_patterns: Path component globs to skip (see ``is_excluded``)

        Yields:
            FunctionSignature for each function found
        """
        patterns = DEFAULT_SKIP_PATTERNS if skip_patterns is None else skip_patterns
        dir_path = Path(dir_path)

        for py_file in sorted(dir_path.rglob("*.py")):
            if is_excluded(py_file, patterns, root=dir_path):
                continue
            try:
                yield from self.walk_file(py_file)
            except SourceParseError as e:
                log.warning("walker.skip_file", file=str(py_file), error=e.message)


class _SignatureVisitor(ast.NodeVisitor):
    """Collects signatures while tracking the enclosing scope."""

    def __init__(
        self,
        lines: list[str],
        module: str,
        file_path: Path | None,
        sentinels: set[str],
    ):
        self.lines = lines
        self.module = module
        self.file_path = file_path
        self.sentinels = sentinels
        self.signatures: list[FunctionSignature] = []
        self._scope: list[tuple[str, bool]] = []

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        self._scope.append((node.name, True))
        self.generic_visit(node)
        self._scope.pop()

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._visit_function(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._visit_function(node)

    def _visit_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        is_method = bool(self._scope) and self._scope[-1][1]
        qualname = ".".join([name for name, _ in self._scope] + [node.name])

        parameters = extract_parameters(node.args)
        kwargs_name = next(
            (p.name for p in parameters if p.kind == ParameterKind.VAR_KEYWORD),
            None,
        )
        facts = collect_facts(
            node,
            params={p.name for p in parameters},
            kwargs_name=kwargs_name,
            sentinels=self.sentinels,
        )

        signature = FunctionSignature(
            name=node.name,
            qualname=qualname,
            module=self.module,
            file_path=self.file_path,
            line_number=node.lineno,
            parameters=parameters,
            return_annotation=ast.unparse(node.returns) if node.returns else None,
            decorators=[_decorator_name(d) for d in node.decorator_list],
            is_method=is_method,
            is_async=isinstance(node, ast.AsyncFunctionDef),
            suppressed=parse_suppressions(self._header_lines(node)),
            facts=facts,
        )
        self.signatures.append(classify(signature))

        self._scope.append((node.name, False))
        self.generic_visit(node)
        self._scope.pop()

    def _header_lines(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> list[str]:
        """Source lines from ``def`` through the colon that ends the header.

        Decorators and comments between the colon and the first body
        statement are not part of the header.
        """
        start = node.lineno
        last = node.body[0].lineno if node.body else start
        end = _header_end(self.lines[start - 1 : last], start)
        return self.lines[start - 1 : end]


def _header_end(lines: list[str], start: int) -> int:
    """Line number of the colon closing a ``def`` header that begins *lines*."""
    readline = iter(line + "\n" for line in lines).__next__
    depth = 0
    for tok in tokenize.generate_tokens(readline):
        if tok.type != tokenize.OP:
            continue
        if tok.string in ("(", "[", "{"):
            depth += 1
        elif tok.string in (")", "]", "}"):
            depth -= 1
        elif tok.string == ":" and depth == 0:
            return start + tok.start[0] - 1
    return start


def extract_parameters(args: ast.arguments) -> list[Parameter]:
    """Build ``Parameter`` objects from an ``ast.arguments`` node."""
    parameters: list[Parameter] = []

    positional = [(a, ParameterKind.POSITIONAL_ONLY) for a in args.posonlyargs]
    positional += [(a, ParameterKind.POSITIONAL_OR_KEYWORD) for a in args.args]
    first_default = len(positional) - len(args.defaults)

    for index, (arg, kind) in enumerate(positional):
        default = args.defaults[index - first_default] if index >= first_default else None
        parameters.append(_make_parameter(arg, kind, default))

    if args.vararg:
        parameters.append(_make_parameter(args.vararg, ParameterKind.VAR_POSITIONAL, None))

    for arg, default in zip(args.kwonlyargs, args.kw_defaults):
        parameters.append(_make_parameter(arg, ParameterKind.KEYWORD_ONLY, default))

    if args.kwarg:
        parameters.append(_make_parameter(args.kwarg, ParameterKind.VAR_KEYWORD, None))

    return parameters


def _make_parameter(arg: ast.arg, kind: ParameterKind, default: ast.expr | None) -> Parameter:
    return Parameter(
        name=arg.arg,
        kind=kind,
        annotation=ast.unparse(arg.annotation) if arg.annotation else None,
        default=ast.unparse(default) if default is not None else None,
        has_default=default is not None,
        default_node=default,
    )


def _decorator_name(node: ast.expr) -> str:
    if isinstance(node, ast.Call):
        node = node.func
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        # functools.wraps -> "wraps"; property setters -> "setter"
        return node.attr
    return ast.unparse(node)


def derive_module_name(file_path: Path) -> str:
    """Derive module name from file path.

    Returns:
        Module name like 'package.subpackage.module'
    """
    parts = list(Path(file_path).with_suffix("").parts)

    try:
        src_idx = parts.index("src")
        parts = parts[src_idx + 1 :]
    except ValueError:
        parts = [parts[-1]]

    if parts and parts[-1] == "__init__":
        parts = parts[:-1] or ["__init__"]

    return ".".join(parts)
