"""Condition evaluator.

A condition is one of:

- a literal (``42``, ``"abc"``): shorthand for ``{"eq": literal}``
- an operator mapping (``{"gte": 0, "integer": True}``): every key must
  pass, checked in insertion order, stopping at the first failure
- a compound list (``[{"eq": 12}, {"lte": 6}]``): passes if any element
  passes

Evaluation never raises for a value that fails; it returns an
``EvaluationResult`` explaining the failure. Only malformed conditions
(unknown operator keys, broken regular expressions) raise, and they do so
before any value is examined.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from vouch.conditions.describer import describe, describe_condition, join_alternatives
from vouch.conditions.operators import (
    KNOWN_OPERATORS,
    OPERATOR_REGISTRY,
    alternatives,
)
from vouch.conditions.result import EvaluationResult
from vouch.exceptions import UnknownOperatorError
from vouch.logging import get_logger
from vouch.values import Pattern, length_of, type_tag

__all__ = ["evaluate", "validate_condition"]

logger = get_logger(__name__)


def evaluate(value: Any, condition: Any) -> EvaluationResult:
    """Evaluate ``value`` against ``condition``.

    Args:
        value: Any value; use ``UNDEFINED`` for an absent one.
        condition: Literal, operator mapping, or compound list.

    Returns:
        ``EvaluationResult`` with ``result`` True, or the diagnostic fields
        of the first failure.

    Raises:
        UnknownOperatorError: If the condition uses an unknown operator key.
        InvalidPatternError: If a ``matches``/``matchesNot`` reference is
            not a valid regular expression.

    Examples:
        >>> evaluate(42, {"gte": 43}).details
        'greater than or equal to 43'
        >>> bool(evaluate("abcdef", {"contains": ["xyz", "bcd"]}))
        True
    """
    validate_condition(condition)
    result = _evaluate(value, condition)
    if not result:
        logger.debug(
            "condition_failed",
            what=result.what,
            details=result.details,
            index=result.index,
        )
    return result


def validate_condition(condition: Any) -> None:
    """Check every operator key and pattern in ``condition``, recursively.

    Raises:
        UnknownOperatorError: For an unknown operator key.
        InvalidPatternError: For a pattern that does not compile.
    """
    if isinstance(condition, (list, tuple)):
        for element in condition:
            validate_condition(element)
        return
    if not isinstance(condition, Mapping):
        return
    for key, reference in condition.items():
        if key not in KNOWN_OPERATORS:
            raise UnknownOperatorError(str(key))
        if key in ("length", "each"):
            validate_condition(reference)
        elif key in ("matches", "matchesNot"):
            for alt in alternatives(reference):
                Pattern.coerce(alt).regex()


def _evaluate(value: Any, condition: Any) -> EvaluationResult:
    if isinstance(condition, (list, tuple)):
        return _evaluate_compound(value, condition)
    if isinstance(condition, Mapping):
        return _evaluate_single(value, condition)
    return _evaluate_single(value, {"eq": condition})


def _evaluate_single(value: Any, condition: Mapping[str, Any]) -> EvaluationResult:
    for key, reference in condition.items():
        if key == "length":
            result = _evaluate_length(value, reference)
        elif key == "each":
            result = _evaluate_each(value, reference)
        elif OPERATOR_REGISTRY[key].check(value, reference):
            continue
        else:
            actual = type_tag(value) if key == "type" else value
            result = EvaluationResult.failure(
                what=key,
                reference=reference,
                actual=actual,
                details=describe(key, reference),
            )
        if not result:
            return result
    return EvaluationResult.passed()


def _evaluate_length(value: Any, condition: Any) -> EvaluationResult:
    nested = _evaluate(length_of(value), condition)
    if nested:
        return nested
    return EvaluationResult.failure(
        what=f"length/{nested.what}",
        reference=nested.reference,
        actual=nested.actual,
        details=f"length {nested.details}",
    )


def _evaluate_each(value: Any, condition: Any) -> EvaluationResult:
    if not isinstance(value, (list, tuple)):
        return EvaluationResult.failure(
            what="each",
            reference=condition,
            actual=value,
            details=describe("each", condition),
        )
    for index, element in enumerate(value):
        nested = _evaluate(element, condition)
        if not nested:
            return EvaluationResult.failure(
                what=f"each/{nested.what}",
                reference=nested.reference,
                actual=nested.actual,
                details=nested.details or "",
                index=index,
            )
    return EvaluationResult.passed()


def _evaluate_compound(value: Any, condition: list[Any] | tuple[Any, ...]) -> EvaluationResult:
    for element in condition:
        if _evaluate(value, element):
            return EvaluationResult.passed()
    return EvaluationResult.failure(
        what="compound",
        reference=_merge_references(condition),
        actual=value,
        details=join_alternatives([describe_condition(element) for element in condition]),
    )


def _merge_references(condition: list[Any] | tuple[Any, ...]) -> dict[str, Any]:
    """Merge same-named operator references across compound elements.

    ``[{"eq": 12}, {"eq": 24}, 36]`` merges to ``{"eq": [12, 24, 36]}``.
    """
    merged: dict[str, Any] = {}
    for element in condition:
        if isinstance(element, (list, tuple)):
            pairs = _merge_references(element).items()
        elif isinstance(element, Mapping):
            pairs = element.items()
        else:
            pairs = (("eq", element),)
        for key, reference in pairs:
            if key not in merged:
                merged[key] = reference
            else:
                merged[key] = [*alternatives(merged[key]), *alternatives(reference)]
    return merged
