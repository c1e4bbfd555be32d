"""Parsers that turn source code or callables into ``FunctionSignature`` objects."""

from sigspine.parser.ast_walker import (
    SignatureWalker,
    derive_module_name,
    is_excluded,
    parse_suppressions,
)
from sigspine.parser.body_facts import BodyFactCollector, collect_facts, module_sentinels
from sigspine.parser.introspect import signature_from_callable

__all__ = [
    "SignatureWalker",
    "BodyFactCollector",
    "collect_facts",
    "derive_module_name",
    "is_excluded",
    "module_sentinels",
    "parse_suppressions",
    "signature_from_callable",
]
