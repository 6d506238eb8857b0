from __future__ import annotations


class VouchError(Exception):
    """Base exception class for all vouch-specific errors.

    This is the root of the vouch exception hierarchy. A failed constraint is
    never reported through it: the engines return a structured result for
    that. Subclasses describe misuse (unknown operators, broken patterns,
    malformed templates, invalid configuration).

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            evaluate(value, {"greater": 3})
        except VouchError as e:
            logger.error(f"vouch error: {e.message}")
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the VouchError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
