"""Human-readable phrases for condition operators.

``describe("gte", 43)`` gives ``"greater than or equal to 43"``; list
references become an "or" list: ``describe("eq", ["bla", 42])`` gives
``'"bla" or 42'``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final

from vouch.conditions.operators import alternatives
from vouch.values import Pattern, format_value

__all__ = ["describe", "describe_condition", "join_alternatives"]

# "{}" is replaced with the formatted reference alternatives
_PHRASES: Final[dict[str, str]] = {
    "type": "type {}",
    "eq": "{}",
    "neq": "not {}",
    "lt": "less than {}",
    "lte": "less than or equal to {}",
    "gt": "greater than {}",
    "gte": "greater than or equal to {}",
    "divides": "exact divider of {}",
    "multiple": "exact multiple of {}",
    "contains": "string containing {}",
    "begins": "string beginning with {}",
    "ends": "string ending with {}",
    "matches": "string matching {}",
    "containsNot": "string not containing {}",
    "beginsNot": "string not beginning with {}",
    "endsNot": "string not ending with {}",
    "matchesNot": "string not matching {}",
}

_PATTERN_OPERATORS: Final = frozenset({"matches", "matchesNot"})


def join_alternatives(phrases: Sequence[str]) -> str:
    """Join phrases as ``a, b or c``."""
    if len(phrases) <= 1:
        return "".join(phrases)
    return ", ".join(phrases[:-1]) + " or " + phrases[-1]


def _format_reference(operator: str, reference: Any) -> str:
    if operator in _PATTERN_OPERATORS:
        texts = [str(Pattern.coerce(alt)) for alt in alternatives(reference)]
    else:
        texts = [format_value(alt) for alt in alternatives(reference)]
    return join_alternatives(texts)


def describe(operator: str, reference: Any) -> str:
    """Describe what ``operator`` with ``reference`` expects.

    Args:
        operator: Operator key (must be a known operator).
        reference: The operator's reference; for ``length`` and ``each`` a
            nested condition.

    Returns:
        The phrase, e.g. ``'string containing "abc"'``.
    """
    if operator == "integer":
        return "integer number" if reference else "non-integer number"
    if operator == "length":
        return "length " + describe_condition(reference)
    if operator == "each":
        return "array with every element " + describe_condition(reference)
    return _PHRASES[operator].format(_format_reference(operator, reference))


def describe_condition(condition: Any) -> str:
    """Describe a whole condition (literal, operator mapping or compound list)."""
    if isinstance(condition, (list, tuple)):
        return join_alternatives([describe_condition(item) for item in condition])
    if isinstance(condition, Mapping):
        return " and ".join(describe(key, ref) for key, ref in condition.items())
    return describe("eq", condition)
