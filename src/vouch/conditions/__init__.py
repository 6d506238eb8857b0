"""Declarative value conditions.

A condition is a literal, an operator mapping (AND), or a list of conditions
(OR). ``evaluate`` checks a value against it and explains any failure:

    >>> result = evaluate([12, 1, 7], {"each": [{"eq": [12, 24]}, {"lte": 6}]})
    >>> result.what, result.index, result.details
    ('each/compound', 2, '12 or 24 or less than or equal to 6')

Operators
---------
- ``type``: type tag (``"number"``, ``"string"``, ``"array"``, ...)
- ``eq`` / ``neq``: strict structural (in)equality
- ``lt``, ``lte``, ``gt``, ``gte``: numeric or lexicographic ordering
- ``integer``: number with (True) or without (False) a fractional part
- ``divides`` / ``multiple``: exact divider / multiple
- ``contains``, ``begins``, ``ends``, ``matches`` and their ``...Not`` forms
- ``length``: nested condition on the string/array length
- ``each``: nested condition on every array element

Module Structure
----------------
- operators.py: Operator registry
- describer.py: Operator phrases for failure details
- evaluator.py: ``evaluate`` and condition validation
- result.py: ``EvaluationResult``
"""

from __future__ import annotations

from vouch.conditions.describer import describe, describe_condition
from vouch.conditions.evaluator import evaluate, validate_condition
from vouch.conditions.operators import KNOWN_OPERATORS, OPERATOR_REGISTRY, OperatorSpec
from vouch.conditions.result import EvaluationResult

__all__: list[str] = [
    "evaluate",
    "validate_condition",
    "describe",
    "describe_condition",
    "EvaluationResult",
    "OperatorSpec",
    "OPERATOR_REGISTRY",
    "KNOWN_OPERATORS",
]
