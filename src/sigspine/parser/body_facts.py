"""
Body fact collection.

Signature-only data cannot tell whether a defaulted argument is really
required, or whether two arguments are mutually exclusive. Those decisions
live in the function body as guard clauses::

    if size is None:
        raise ValueError("size is required")          # required-with-default

    if x is not None and y is not None:
        raise TypeError("supply x or y, not both")    # exclusive pair

    if x is not None:                                 # silent preference
        ...
    elif y is not None:
        ...

Calls to the ``sigspine.args`` helpers count as the same guards:
``check_required(size=size)`` marks ``size`` as required and
``check_exclusive(x=x, y=y)`` enforces the pair.

``BodyFactCollector`` recognises these shapes and records them on a
``FunctionFacts``. It only looks at the function's own body; nested
functions, lambdas, and classes are analysed separately.
"""

from __future__ import annotations

import ast
from collections.abc import Iterator
from itertools import combinations

from sigspine.signature import FunctionFacts

_KWARGS_ACCESSORS = ("get", "pop", "setdefault")

_NESTED_SCOPES = (ast.FunctionDef, ast.AsyncFunctionDef, ast.Lambda, ast.ClassDef)


def _pair(a: str, b: str) -> tuple[str, str]:
    return (a, b) if a <= b else (b, a)


def _pairs(names: list[str]) -> set[tuple[str, str]]:
    return {_pair(a, b) for a, b in combinations(sorted(set(names)), 2)}


def iter_own_nodes(func: ast.FunctionDef | ast.AsyncFunctionDef) -> Iterator[ast.AST]:
    """Walk the body of *func* without descending into nested scopes."""
    stack: list[ast.AST] = list(reversed(func.body))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, _NESTED_SCOPES):
            continue
        stack.extend(reversed(list(ast.iter_child_nodes(node))))


def module_sentinels(tree: ast.Module) -> set[str]:
    """Module-level names bound to a bare ``object()`` instance."""
    names: set[str] = set()
    for node in tree.body:
        value: ast.expr | None = None
        targets: list[ast.expr] = []
        if isinstance(node, ast.Assign):
            value, targets = node.value, node.targets
        elif isinstance(node, ast.AnnAssign) and node.value is not None:
            value, targets = node.value, [node.target]

        if (
            isinstance(value, ast.Call)
            and isinstance(value.func, ast.Name)
            and value.func.id == "object"
            and not value.args
            and not value.keywords
        ):
            names.update(t.id for t in targets if isinstance(t, ast.Name))
    return names


def _compare_parts(node: ast.expr) -> tuple[ast.expr, ast.cmpop, ast.expr] | None:
    if isinstance(node, ast.Compare) and len(node.ops) == 1:
        return node.left, node.ops[0], node.comparators[0]
    return None


def _is_none(node: ast.expr) -> bool:
    return isinstance(node, ast.Constant) and node.value is None


def _none_test(node: ast.expr, params: set[str]) -> tuple[str, bool] | None:
    """Match ``p is None`` / ``p is not None``.

    Returns ``(name, is_not)`` or ``None`` when *node* is not such a test.
    """
    parts = _compare_parts(node)
    if parts is None:
        return None
    left, op, right = parts
    if _is_none(left):
        left, right = right, left
    if not (isinstance(left, ast.Name) and left.id in params and _is_none(right)):
        return None
    if isinstance(op, ast.Is):
        return left.id, False
    if isinstance(op, ast.IsNot):
        return left.id, True
    return None


def _operands(test: ast.expr, op_type: type[ast.boolop]) -> list[ast.expr]:
    if isinstance(test, ast.BoolOp) and isinstance(test.op, op_type):
        return list(test.values)
    return [test]


def _body_raises(body: list[ast.stmt]) -> bool:
    return any(isinstance(stmt, ast.Raise) for stmt in body)


def _flag_name(node: ast.expr, params: set[str]) -> str | None:
    """Match ``p`` or ``not p`` and return ``p``."""
    if isinstance(node, ast.UnaryOp) and isinstance(node.op, ast.Not):
        node = node.operand
    if isinstance(node, ast.Name) and node.id in params:
        return node.id
    return None


def _call_name(func: ast.expr) -> str | None:
    """``check_exclusive`` for both ``check_exclusive(...)`` and ``args.check_exclusive(...)``."""
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


def _string_literals(node: ast.expr) -> list[str] | None:
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return [node.value]
    if isinstance(node, (ast.Tuple, ast.List, ast.Set)):
        values = []
        for elt in node.elts:
            if not (isinstance(elt, ast.Constant) and isinstance(elt.value, str)):
                return None
            values.append(elt.value)
        return values
    return None


class BodyFactCollector:
    """Collect guard-clause facts from one function body.

    Args:
        func: The function node
        params: Names of the function's parameters
        kwargs_name: Name of the ``**kwargs`` parameter, if any
        sentinels: Module-level sentinel names (from ``module_sentinels``)
    """

    def __init__(
        self,
        func: ast.FunctionDef | ast.AsyncFunctionDef,
        params: set[str],
        kwargs_name: str | None = None,
        sentinels: set[str] | None = None,
    ):
        self.func = func
        self.params = params
        self.kwargs_name = kwargs_name
        self.facts = FunctionFacts(module_sentinels=set(sentinels or ()))
        self._chained: set[int] = set()

    def collect(self) -> FunctionFacts:
        for node in iter_own_nodes(self.func):
            if isinstance(node, ast.If):
                self._visit_if(node)
            elif isinstance(node, ast.Compare):
                self._visit_compare(node)
            elif isinstance(node, ast.Subscript):
                self._visit_subscript(node)
            elif isinstance(node, ast.Call):
                self._visit_call(node)

        self.facts.unenforced_exclusive -= self.facts.exclusive_pairs
        return self.facts

    # ------------------------------------------------------------------
    # Guard clauses
    # ------------------------------------------------------------------

    def _visit_if(self, node: ast.If) -> None:
        if _body_raises(node.body):
            self._guard(node.test)

        if id(node) not in self._chained:
            chain = self._preference_chain(node)
            if len(chain) >= 2:
                self.facts.unenforced_exclusive |= _pairs(chain)

    def _guard(self, test: ast.expr) -> None:
        """Record what a raising ``if`` condition enforces."""
        or_tests = [_none_test(v, self.params) for v in _operands(test, ast.Or)]
        if all(t is not None and not t[1] for t in or_tests):
            # if a is None or b is None: raise
            self.facts.raises_when_none.update(t[0] for t in or_tests if t)
            return

        and_operands = _operands(test, ast.And)
        and_tests = [_none_test(v, self.params) for v in and_operands]
        if len(and_tests) >= 2 and all(t is not None for t in and_tests):
            names = [t[0] for t in and_tests if t]
            if all(t[1] for t in and_tests if t):
                self.facts.exclusive_pairs |= _pairs(names)
            elif not any(t[1] for t in and_tests if t):
                self.facts.one_of_pairs |= _pairs(names)
            return

        flags = [_flag_name(v, self.params) for v in and_operands]
        if len(flags) >= 2 and all(flags):
            self.facts.dependent_flags |= _pairs([f for f in flags if f])

    def _preference_chain(self, node: ast.If) -> list[str]:
        """Names tested by an ``if a is not None: ... elif b is not None:`` chain."""
        names: list[str] = []
        current: ast.If | None = node
        while current is not None:
            test = _none_test(current.test, self.params)
            if test is None or not test[1] or _body_raises(current.body):
                break
            names.append(test[0])
            self._chained.add(id(current))
            orelse = current.orelse
            current = orelse[0] if len(orelse) == 1 and isinstance(orelse[0], ast.If) else None
        return names

    # ------------------------------------------------------------------
    # Comparisons, kwargs access, presence checks
    # ------------------------------------------------------------------

    def _visit_compare(self, node: ast.Compare) -> None:
        parts = _compare_parts(node)
        if parts is None:
            return
        left, op, right = parts

        if isinstance(op, (ast.In, ast.NotIn)):
            key = left.value if isinstance(left, ast.Constant) and isinstance(left.value, str) else None
            if key is not None:
                if isinstance(right, ast.Name) and right.id == self.kwargs_name:
                    self.facts.kwargs_keys.add(key)
                    return
                if (
                    isinstance(right, ast.Call)
                    and isinstance(right.func, ast.Name)
                    and right.func.id in ("locals", "vars")
                    and not right.args
                    and key in self.params
                ):
                    self.facts.presence_checks.add(key)
                    return

            if isinstance(left, ast.Name) and left.id in self.params:
                literals = _string_literals(right)
                if literals and not isinstance(right, ast.Constant):
                    self._record_strings(left.id, literals)
            return

        if isinstance(op, (ast.Eq, ast.NotEq)):
            if isinstance(right, ast.Name) and not isinstance(left, ast.Name):
                left, right = right, left
            if isinstance(left, ast.Name) and left.id in self.params:
                literals = _string_literals(right)
                if literals and isinstance(right, ast.Constant):
                    self._record_strings(left.id, literals)

    def _record_strings(self, name: str, literals: list[str]) -> None:
        self.facts.string_comparisons.setdefault(name, set()).update(literals)

    def _visit_subscript(self, node: ast.Subscript) -> None:
        if not self.kwargs_name:
            return
        if (
            isinstance(node.value, ast.Name)
            and node.value.id == self.kwargs_name
            and isinstance(node.slice, ast.Constant)
            and isinstance(node.slice.value, str)
        ):
            self.facts.kwargs_keys.add(node.slice.value)

    def _visit_call(self, node: ast.Call) -> None:
        name = _call_name(node.func)
        if name == "check_exclusive":
            self._check_exclusive_call(node)
        elif name == "check_required":
            self.facts.raises_when_none.update(self._checked_params(node))
        elif self.kwargs_name:
            self._kwargs_access(node)

    def _checked_params(self, node: ast.Call) -> list[str]:
        """Parameters passed through as ``name=name`` keywords."""
        return [
            kw.value.id
            for kw in node.keywords
            if kw.arg is not None
            and kw.arg != "required"
            and isinstance(kw.value, ast.Name)
            and kw.value.id in self.params
        ]

    def _check_exclusive_call(self, node: ast.Call) -> None:
        names = self._checked_params(node)
        if len(names) < 2:
            return
        pairs = _pairs(names)
        self.facts.exclusive_pairs |= pairs
        optional = any(
            kw.arg == "required" and isinstance(kw.value, ast.Constant) and kw.value.value is False
            for kw in node.keywords
        )
        if not optional:
            self.facts.one_of_pairs |= pairs

    def _kwargs_access(self, node: ast.Call) -> None:
        func = node.func
        if (
            isinstance(func, ast.Attribute)
            and func.attr in _KWARGS_ACCESSORS
            and isinstance(func.value, ast.Name)
            and func.value.id == self.kwargs_name
            and node.args
            and isinstance(node.args[0], ast.Constant)
            and isinstance(node.args[0].value, str)
        ):
            self.facts.kwargs_keys.add(node.args[0].value)


def collect_facts(
    func: ast.FunctionDef | ast.AsyncFunctionDef,
    params: set[str],
    kwargs_name: str | None = None,
    sentinels: set[str] | None = None,
) -> FunctionFacts:
    """Convenience wrapper around ``BodyFactCollector``."""
    return BodyFactCollector(func, params, kwargs_name, sentinels).collect()
