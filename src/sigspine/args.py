"""
Runtime argument helpers.

The remedies the conventions prescribe, as small functions to call at the
top of a function body::

    from sigspine.args import arg_match, check_exclusive

    def sample(population, *, n=None, prop=None, method="random"):
        check_exclusive(n=n, prop=prop)
        method = arg_match(method, ["random", "systematic"], arg_name="method")
        ...

All helpers raise ``sigspine.errors.ArgumentError`` subclasses, which are
also ``TypeError`` (and ``ValueError`` for bad choices) so callers that
already catch the builtin exceptions keep working.
"""

from __future__ import annotations

import functools
import warnings
from collections.abc import Callable, Sequence
from difflib import get_close_matches
from typing import Any, TypeVar

from sigspine.errors import (
    ExclusiveArgumentsError,
    InvalidChoiceError,
    MissingArgumentError,
)

F = TypeVar("F", bound=Callable[..., Any])


class _Missing:
    """Public sentinel type. ``repr`` is stable so it reads well in help()."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()
"""Default for arguments where ``None`` is a meaningful value.

Unlike a private ``object()`` sentinel, ``MISSING`` is importable, so
``f(x, size=MISSING)`` behaves exactly like ``f(x)``.
"""


def _is_absent(value: Any) -> bool:
    return value is None or value is MISSING


def check_required(**kwargs: Any) -> None:
    """Fail when any of the given arguments is absent (``None``/``MISSING``).

    Example:
        >>> check_required(formula="y ~ x", data=None)
        Traceback (most recent call last):
        ...
        sigspine.errors.MissingArgumentError: Argument `data` is absent but must be supplied.
    """
    missing = [name for name, value in kwargs.items() if _is_absent(value)]
    if missing:
        raise MissingArgumentError(missing)


def check_exclusive(*, required: bool = True, **kwargs: Any) -> str | None:
    """Check that exactly one of the given arguments is supplied.

    Args:
        required: If False, supplying none of them is allowed
        **kwargs: The mutually exclusive arguments, by name

    Returns:
        The name of the supplied argument (``None`` when optional and absent)

    Raises:
        ExclusiveArgumentsError: Several supplied, or none supplied when required
    """
    if len(kwargs) < 2:
        raise TypeError("check_exclusive() needs at least two arguments to compare")

    names = list(kwargs)
    supplied = [name for name, value in kwargs.items() if not _is_absent(value)]

    if len(supplied) > 1:
        raise ExclusiveArgumentsError(names, supplied)
    if not supplied:
        if required:
            raise ExclusiveArgumentsError(names, [])
        return None
    return supplied[0]


def check_flags(**flags: bool) -> str | None:
    """Reject mutually dependent boolean flags when more than one is set.

    Returns:
        The name of the flag that is set, or ``None`` when none is

    Raises:
        ExclusiveArgumentsError: More than one flag is true
    """
    enabled = [name for name, value in flags.items() if value]
    if len(enabled) > 1:
        options = ", ".join(f"`{n}`" for n in flags)
        given = ", ".join(f"`{n}`" for n in enabled)
        raise ExclusiveArgumentsError(
            list(flags),
            enabled,
            message=f"At most one of {options} may be true; got {given}. "
            "Consider a single enumerated option instead.",
        )
    return enabled[0] if enabled else None


def arg_match(
    value: str | None,
    choices: Sequence[str],
    *,
    arg_name: str = "value",
) -> str:
    """Validate a string option against its enumerated choices.

    ``None`` selects the first choice, so the signature can default to
    ``None`` while the documented default stays first in the list.

    Raises:
        InvalidChoiceError: *value* is not one of *choices*
        ValueError: *choices* is empty
    """
    if not choices:
        raise ValueError("arg_match() requires at least one choice")

    if value is None:
        return choices[0]

    if isinstance(value, str) and value in choices:
        return value

    suggestion = None
    if isinstance(value, str):
        close = get_close_matches(value, list(choices), n=1, cutoff=0.6)
        suggestion = close[0] if close else None
    raise InvalidChoiceError(arg_name, value, list(choices), suggestion)


def deprecated_argument(
    old: str,
    new: str | None = None,
    *,
    since: str | None = None,
) -> Callable[[F], F]:
    """Keep accepting a renamed or removed keyword argument, with a warning.

    Args:
        old: The deprecated keyword
        new: The keyword it was renamed to (``None`` = removed, value dropped)
        since: Version the deprecation started in (shown in the warning)

    Example:
        >>> @deprecated_argument("n_samples", "size", since="1.4")
        ... def sample(population, *, size=None): ...
        >>> sample([1, 2], n_samples=1)  # warns, forwards to size=1
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if old in kwargs:
                value = kwargs.pop(old)
                when = f" since {since}" if since else ""
                if new is None:
                    message = f"`{old}` is deprecated{when} and ignored."
                else:
                    if new in kwargs:
                        raise ExclusiveArgumentsError(
                            [old, new],
                            [old, new],
                            message=f"`{old}` is a deprecated alias of `{new}`; supply only `{new}`.",
                        )
                    kwargs[new] = value
                    message = f"`{old}` is deprecated{when}; use `{new}` instead."
                warnings.warn(
                    f"{func.__qualname__}(): {message}",
                    DeprecationWarning,
                    stacklevel=2,
                )
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
