from __future__ import annotations

from typing import Any

from vouch.exceptions.base import VouchError


class ConditionError(VouchError):
    """Base exception for malformed conditions.

    Raised when a condition cannot be evaluated because the caller built it
    wrongly. It is distinct from a value failing a well-formed condition,
    which is reported through ``EvaluationResult``.
    """


class UnknownOperatorError(ConditionError):
    """Raised when a condition mapping uses an operator key vouch does not know.

    Attributes:
        operator: The unrecognized operator key.
    """

    def __init__(self, operator: str) -> None:
        self.operator = operator
        super().__init__(f"Unknown condition operator '{operator}'")


class InvalidPatternError(ConditionError):
    """Raised when a ``matches``/``matchesNot`` reference is not a valid regex.

    Attributes:
        pattern: The pattern (text or object) that failed to compile.
    """

    def __init__(self, pattern: Any, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid regular expression {pattern!r}: {reason}")
