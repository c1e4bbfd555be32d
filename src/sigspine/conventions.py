"""sigspine: argument design conventions.

Documentation carrier module. Each convention below is parsed by
``load_conventions()`` and surfaced through ``sigspine explain``; lint
rules point at conventions by id.

Manifesto:
    ### C-ORDER: Data, then descriptors, then details

    **What:** Order arguments by importance. The data argument comes first,
    followed by the required descriptors that configure the operation,
    followed by optional details.

    **Why:** Callers supply the first few arguments positionally and name the
    rest. Putting data first makes functions chain naturally, and keeping
    required arguments ahead of optional ones means the call reads the same
    way the function is explained.

    **Fix:** Move required parameters before optional ones. For keyword-only
    parameters the interpreter allows any order, so the convention has to be
    enforced by review (or by sigspine).

    **Rules:** W201

    ---

    ### C-DETAILS: Details are named, not positional

    **What:** Optional arguments that fine-tune behaviour should be passed by
    name. Place them after a bare ``*`` so they are keyword-only.

    **Why:** ``resample(frame, "1h", None, True, 3)`` is unreadable at the
    call site, and once details are positional their order is frozen: a new
    option can never be inserted in the middle without breaking callers.

    **Fix:** Insert ``*`` after the required arguments. Existing positional
    callers can be migrated with a deprecation period.

    **Rules:** W202

    ---

    ### C-REQ: Required arguments have no defaults

    **What:** If a function cannot work without an argument, the argument
    should not have a default.

    **Why:** ``def fit(data, formula=None)`` that raises when ``formula`` is
    missing advertises an optional argument that is not optional. Help text,
    IDEs, and signature inspection all lie to the caller, and the error
    arrives later than the interpreter's own "missing argument" error would.

    **Fix:** Remove the default. When two arguments are alternatives, see
    C-EXCL.

    **Rules:** W101

    ---

    ### C-MAGIC: No magical defaults

    **What:** A default is magical when supplying it explicitly behaves
    differently from leaving it out. Typical shapes are a private sentinel
    the caller cannot name, or a body that inspects whether an argument was
    passed at all.

    **Why:** The caller can no longer reproduce the default call. Wrappers
    that forward arguments (``def wrapper(x, size=None): return f(x, size)``)
    silently change behaviour.

    **Fix:** Use ``None`` as the default and compute the real value in the
    body, or expose a public sentinel (``sigspine.args.MISSING``) so the
    default can be written out.

    **Rules:** W102

    ---

    ### C-HIDDEN: No hidden arguments

    **What:** Behaviour that depends on keys fished out of ``**kwargs`` is an
    argument the signature does not show.

    **Why:** Misspelled keys are silently ignored, documentation tools cannot
    list the option, and type checkers cannot check it.

    **Fix:** Promote each key to a keyword-only parameter. Keep ``**kwargs``
    only for arguments passed through untouched.

    **Rules:** W103

    ---

    ### C-BOOL: Avoid positional boolean flags

    **What:** ``render(doc, True, False)`` says nothing about what is true.

    **Why:** Boolean positional arguments are the most common source of
    swapped-argument bugs, and a flag often turns out to need a third state.

    **Fix:** Make the flag keyword-only. If more states are likely, replace it
    with an enumerated string option (C-ENUM).

    **Rules:** W203

    ---

    ### C-EXCL: Mutually exclusive arguments must be enforced

    **What:** Sometimes exactly one of two arguments may be supplied
    (``n`` or ``prop``, ``path`` or ``buffer``). Prefer separate functions or a
    single argument that accepts either form. When a pair is unavoidable, the
    function must fail loudly if both or neither are supplied.

    **Why:** An ``if a is not None: ... elif b is not None: ...`` chain
    silently prefers ``a``. The caller who passes both never learns that
    ``b`` was ignored.

    **Fix:** Call ``sigspine.args.check_exclusive(a=a, b=b)`` at the top of
    the function, or split the function in two.

    **Rules:** I301, W302

    ---

    ### C-FLAGS: No mutually dependent flags

    **What:** Two boolean flags where some combinations are invalid
    (``strict=True, lenient=True``) encode one option with three or four
    states.

    **Why:** Callers must learn the invalid combinations, and every new flag
    multiplies them.

    **Fix:** Replace the flags with a single enumerated option
    (``mode="strict" | "lenient" | "default"``) validated with
    ``sigspine.args.arg_match``.

    **Rules:** W303

    ---

    ### C-ENUM: Enumerate string options

    **What:** When a string argument selects between a fixed set of
    behaviours, the set belongs in the signature: annotate it with
    ``Literal[...]`` (or an ``Enum``) and validate it on entry.

    **Why:** A typo like ``method="pearsen"`` should fail immediately with a
    list of valid choices instead of falling through to the last ``else``.

    **Fix:** ``method: Literal["pearson", "spearman"] = "pearson"`` plus
    ``arg_match(method, ["pearson", "spearman"], arg_name="method")``.

    **Rules:** I403

    ---

    ### C-SHORT: Keep defaults short and sweet

    **What:** Defaults should be constants, ``None``, or a short expression.
    Mutable defaults are shared between calls; long defaults hide logic in
    the signature.

    **Why:** A list default is created once and mutated forever after. A
    default such as ``sep=os.environ.get("SEP", ",").strip() or ","`` is
    evaluated at import time and cannot be documented in one line.

    **Fix:** Default to ``None`` and compute the value in the body; give it a
    named helper when the computation deserves documentation.

    **Rules:** E401, W402

    ---

    ### C-CLUTTER: Avoid argument clutter

    **What:** Functions with many parameters are hard to call and harder to
    change.

    **Why:** Long signatures usually mix the core operation with rarely-used
    tuning knobs. Every caller pays for the knobs they never touch.

    **Fix:** Bundle related details into a compound options object (a
    dataclass), or split the function.

    **Rules:** W404

    ---

    ### C-DEPRECATE: Change signatures through a deprecation path

    **What:** Renaming, removing, or reordering a parameter breaks callers.

    **Why:** Fixing a bad signature should not punish the people already
    using it.

    **Fix:** Keep accepting the old spelling for a release while warning:
    ``@deprecated_argument("old", "new", since="1.4")``. Then remove it.

    **Rules:** (runtime helper, no lint rule)

Tags:
    conventions, documentation, carrier, argument-design

Doc-Types:
    - CONVENTIONS (section: "Argument design", priority: 10)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache

from sigspine.errors import UnknownConventionError

_HEADING_RE = re.compile(r"^###\s+(?P<id>C-[A-Z]+):\s+(?P<title>.+)$")
_FIELD_RE = re.compile(r"^\*\*(?P<label>What|Why|Fix|Rules):\*\*\s*(?P<text>.*)$")
_RULE_CODE_RE = re.compile(r"\b[EWIX]\d{3}\b")


@dataclass(frozen=True)
class Convention:
    """One argument design convention.

    Attributes:
        id: Identifier such as ``C-EXCL``
        title: One-line title
        what: What the convention asks for
        why: The problem it prevents
        fix: How to comply
        rules: Lint rule codes that check it
    """

    id: str
    title: str
    what: str
    why: str
    fix: str
    rules: tuple[str, ...] = field(default_factory=tuple)

    def render(self) -> str:
        """Full plain-text explanation."""
        lines = [f"{self.id}: {self.title}", ""]
        lines += [f"What: {self.what}", "", f"Why: {self.why}", "", f"Fix: {self.fix}"]
        if self.rules:
            lines += ["", f"Checked by: {', '.join(self.rules)}"]
        return "\n".join(lines)


def _parse(text: str) -> dict[str, Convention]:
    conventions: dict[str, Convention] = {}
    current: dict[str, str] | None = None
    label: str | None = None

    def flush() -> None:
        if current is None:
            return
        rules = tuple(_RULE_CODE_RE.findall(current.get("Rules", "")))
        conventions[current["id"]] = Convention(
            id=current["id"],
            title=current["title"],
            what=current.get("What", ""),
            why=current.get("Why", ""),
            fix=current.get("Fix", ""),
            rules=rules,
        )

    for raw in text.splitlines():
        line = raw.strip()
        heading = _HEADING_RE.match(line)
        if heading:
            flush()
            current = {"id": heading.group("id"), "title": heading.group("title").strip()}
            label = None
            continue
        if current is None:
            continue
        if line in ("Tags:", "Doc-Types:"):
            flush()
            current = None
            continue
        if not line or line == "---":
            label = None
            continue
        match = _FIELD_RE.match(line)
        if match:
            label = match.group("label")
            current[label] = match.group("text").strip()
        elif label is not None:
            current[label] = f"{current[label]} {line}".strip()

    flush()
    return conventions


@lru_cache(maxsize=1)
def load_conventions() -> dict[str, Convention]:
    """Parse the convention catalog from this module's docstring."""
    return _parse(__doc__ or "")


def get_convention(convention_id: str) -> Convention:
    """Look up a convention by id (case-insensitive).

    Raises:
        UnknownConventionError: No convention with that id
    """
    conventions = load_conventions()
    key = convention_id.strip().upper()
    if not key.startswith("C-"):
        key = f"C-{key}"
    try:
        return conventions[key]
    except KeyError:
        raise UnknownConventionError(convention_id) from None


def convention_for_rule(code: str) -> Convention | None:
    """The convention a rule code checks, if any."""
    code = code.strip().upper()
    for convention in load_conventions().values():
        if code in convention.rules:
            return convention
    return None


def explain(identifier: str) -> str:
    """Explain a rule code (``W302``) or convention id (``C-EXCL``).

    Raises:
        UnknownConventionError: Nothing matches *identifier*
    """
    if _RULE_CODE_RE.fullmatch(identifier.strip().upper()):
        convention = convention_for_rule(identifier)
        if convention is None:
            raise UnknownConventionError(identifier)
        return convention.render()
    return get_convention(identifier).render()
