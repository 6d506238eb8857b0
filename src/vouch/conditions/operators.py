"""Operator registry - single source of truth for condition operator semantics.

Used by:
- Condition validation (reject unknown operator keys before evaluating)
- Runtime evaluation dispatch

Every leaf operator tests the value against ONE reference alternative. A list
reference is expanded by ``OperatorSpec.check``: positive operators pass when
any alternative passes, negated operators pass when no alternative matches.

``length`` and ``each`` take a nested condition instead of a reference and
are dispatched by the evaluator itself; they are listed in
``NESTED_OPERATORS``.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Final

from vouch.values import (
    Pattern,
    is_integral,
    is_number,
    ordered,
    strict_equal,
    type_tag,
)

__all__ = [
    "OperatorSpec",
    "OPERATOR_REGISTRY",
    "NESTED_OPERATORS",
    "KNOWN_OPERATORS",
    "alternatives",
]

# Tolerance for the floating remainder of divides/multiple (42.42 / 7.07)
_WHOLE_TOLERANCE: Final = 1e-9


def alternatives(reference: Any) -> Sequence[Any]:
    """Expand a reference into its OR alternatives."""
    if isinstance(reference, (list, tuple)):
        return reference
    return (reference,)


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_whole(quotient: float) -> bool:
    return math.isfinite(quotient) and math.isclose(
        quotient, round(quotient), rel_tol=_WHOLE_TOLERANCE, abs_tol=_WHOLE_TOLERANCE
    )


def _is_whole_ratio(numerator: Any, denominator: Any) -> bool:
    try:
        return _is_whole(numerator / denominator)
    except OverflowError:
        # An int too large for a float quotient: compare exactly instead
        if not all(math.isfinite(x) for x in (numerator, denominator) if isinstance(x, float)):
            return False
        return (Fraction(numerator) / Fraction(denominator)).denominator == 1


def _divides(value: Any, reference: Any) -> bool:
    if not (is_number(value) and is_number(reference)) or value == 0:
        return False
    if isinstance(value, numbers.Integral) and isinstance(reference, numbers.Integral):
        return reference % value == 0
    return _is_whole_ratio(reference, value)


def _multiple(value: Any, reference: Any) -> bool:
    if not (is_number(value) and is_number(reference)):
        return False
    if reference == 0:
        return value == 0
    if isinstance(value, numbers.Integral) and isinstance(reference, numbers.Integral):
        return value % reference == 0
    return _is_whole_ratio(value, reference)


def _matches(value: Any, reference: Any) -> bool:
    # Compile first so a broken pattern raises whatever the value is
    regex = Pattern.coerce(reference).regex()
    return isinstance(value, str) and regex.search(value) is not None


def _integer(value: Any, reference: Any) -> bool:
    return is_number(value) and is_integral(value) == bool(reference)


@dataclass(frozen=True, slots=True)
class OperatorSpec:
    """Specification for a single leaf operator.

    Attributes:
        name: Operator key as written in conditions (e.g., "gte").
        test: Predicate ``(value, alternative) -> bool``.
        negated: True for operators that pass when no alternative matches.
        accepts: Optional predicate on the value; values it rejects fail the
            operator outright (negated string operators on non-strings).
    """

    name: str
    test: Callable[[Any, Any], bool]
    negated: bool = False
    accepts: Callable[[Any], bool] | None = None

    def check(self, value: Any, reference: Any) -> bool:
        """Return True if ``value`` satisfies this operator for ``reference``."""
        if self.accepts is not None and not self.accepts(value):
            return False
        hit = any(self.test(value, alt) for alt in alternatives(reference))
        return not hit if self.negated else hit


# =============================================================================
# OPERATOR REGISTRY
# =============================================================================

OPERATOR_REGISTRY: Final[dict[str, OperatorSpec]] = {
    spec.name: spec
    for spec in (
        OperatorSpec("type", lambda v, r: type_tag(v) == r),
        OperatorSpec("eq", strict_equal),
        OperatorSpec("neq", strict_equal, negated=True),
        OperatorSpec("lt", lambda v, r: ordered(v, r) and v < r),
        OperatorSpec("lte", lambda v, r: ordered(v, r) and v <= r),
        OperatorSpec("gt", lambda v, r: ordered(v, r) and v > r),
        OperatorSpec("gte", lambda v, r: ordered(v, r) and v >= r),
        OperatorSpec("integer", _integer),
        OperatorSpec("divides", _divides),
        OperatorSpec("multiple", _multiple),
        OperatorSpec("contains", lambda v, r: _is_string(v) and str(r) in v),
        OperatorSpec("begins", lambda v, r: _is_string(v) and v.startswith(str(r))),
        OperatorSpec("ends", lambda v, r: _is_string(v) and v.endswith(str(r))),
        OperatorSpec("matches", _matches),
        OperatorSpec(
            "containsNot",
            lambda v, r: str(r) in v,
            negated=True,
            accepts=_is_string,
        ),
        OperatorSpec(
            "beginsNot",
            lambda v, r: v.startswith(str(r)),
            negated=True,
            accepts=_is_string,
        ),
        OperatorSpec(
            "endsNot",
            lambda v, r: v.endswith(str(r)),
            negated=True,
            accepts=_is_string,
        ),
        OperatorSpec("matchesNot", _matches, negated=True, accepts=_is_string),
    )
}

NESTED_OPERATORS: Final = frozenset({"length", "each"})

KNOWN_OPERATORS: Final = frozenset(OPERATOR_REGISTRY) | NESTED_OPERATORS
