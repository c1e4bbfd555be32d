"""
Argument role classification.

Sorts parameters into the roles used throughout sigspine:

* ``receiver``:   ``self`` / ``cls`` of a method
* ``dots``:       ``*args`` / ``**kwargs``
* ``data``:       the first required argument
* ``descriptor``: every other required argument
* ``details``:    every argument with a default

The classification is purely structural. A required argument is treated as
data or descriptor because a well-designed signature makes the caller
supply exactly the arguments that define the operation.
"""

from __future__ import annotations

from collections import Counter

from sigspine.signature import ROLE_ORDER, ArgumentRole, FunctionSignature, Parameter

RECEIVER_NAMES = ("self", "cls")


def _assign_role(param: Parameter, *, seen_data: bool) -> ArgumentRole:
    if param.is_variadic:
        return ArgumentRole.DOTS
    if param.has_default:
        return ArgumentRole.DETAILS
    return ArgumentRole.DESCRIPTOR if seen_data else ArgumentRole.DATA


def classify(signature: FunctionSignature) -> FunctionSignature:
    """Assign a role to every parameter of *signature* (in place).

    Returns the same signature for chaining.
    """
    seen_data = False
    for index, param in enumerate(signature.parameters):
        if (
            index == 0
            and signature.is_method
            and not signature.is_staticmethod
            and param.name in RECEIVER_NAMES
            and not param.is_variadic
        ):
            param.role = ArgumentRole.RECEIVER
            continue

        param.role = _assign_role(param, seen_data=seen_data)
        if param.role == ArgumentRole.DATA:
            seen_data = True

    return signature


def role_counts(signature: FunctionSignature) -> dict[ArgumentRole, int]:
    """Count parameters per role (roles with zero parameters included)."""
    counts = Counter(p.role for p in signature.parameters)
    return {role: counts.get(role, 0) for role in ArgumentRole}


def expected_order(signature: FunctionSignature) -> list[str]:
    """Parameter names in data, descriptor, details order.

    Source order is kept within a role (the sort is stable).
    """
    ordered = sorted(signature.parameters, key=lambda p: ROLE_ORDER[p.role])
    return [p.name for p in ordered]
