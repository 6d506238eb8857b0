"""Evaluation result returned by the condition evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["EvaluationResult"]


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Outcome of evaluating a value against a condition.

    A failed condition is a normal return value, never an exception. The
    diagnostic fields are only meaningful when ``result`` is False.

    Attributes:
        result: True if the value satisfies the condition.
        what: Failing operator: ``"gte"``, ``"compound"``, or a namespaced
            form such as ``"length/eq"`` or ``"each/compound"``.
        reference: Reference of the failing operator (for compound
            conditions, the references merged per operator key).
        actual: The examined value. For ``type`` it is the value's type tag,
            for ``length`` the measured length, for ``each`` the failing
            element. May be ``UNDEFINED``.
        details: Human-readable description of what was expected.
        index: Index of the first failing element, only set for ``each``.

    Example:
        ```python
        result = evaluate(42, {"gte": 43})
        if not result:
            print(result.details)  # greater than or equal to 43
        ```
    """

    result: bool
    what: str | None = None
    reference: Any = None
    actual: Any = None
    details: str | None = None
    index: int | None = None

    def __bool__(self) -> bool:
        return self.result

    @classmethod
    def passed(cls) -> EvaluationResult:
        return _PASSED

    @classmethod
    def failure(
        cls,
        what: str,
        reference: Any,
        actual: Any,
        details: str,
        index: int | None = None,
    ) -> EvaluationResult:
        return cls(
            result=False,
            what=what,
            reference=reference,
            actual=actual,
            details=details,
            index=index,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict, omitting fields that do not apply.

        Returns:
            ``{"result": True}`` on success; otherwise the diagnostic fields,
            with ``index`` only present for ``each`` failures.
        """
        if self.result:
            return {"result": True}
        data: dict[str, Any] = {
            "result": False,
            "what": self.what,
            "reference": self.reference,
            "actual": self.actual,
            "details": self.details,
        }
        if self.index is not None:
            data["index"] = self.index
        return data


_PASSED = EvaluationResult(result=True)
