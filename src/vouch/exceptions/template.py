from __future__ import annotations

from vouch.exceptions.base import VouchError


class TemplateError(VouchError):
    """Base exception for all template-related errors.

    Attributes:
        message: Human-readable error message.
        expression: The block expression that caused the error (if known).
    """

    def __init__(
        self,
        message: str,
        expression: str | None = None,
    ) -> None:
        """Initialize the TemplateError.

        Args:
            message: Human-readable error message.
            expression: The expression that caused the error.
        """
        self.expression = expression
        super().__init__(message)


class TemplateSyntaxError(TemplateError):
    """Exception raised for syntax errors in block condition expressions.

    Raised by ``parse_expression`` when the text is neither a bare name nor
    ``name <op> literal``. The renderer itself never raises it: block headers
    that do not parse are left in the output as literal text.

    Attributes:
        message: Human-readable error message.
        expression: The expression that failed to parse.
        position: Character position in the expression where the error occurred.
    """

    def __init__(
        self,
        message: str,
        expression: str,
        position: int = 0,
    ) -> None:
        """Initialize the TemplateSyntaxError.

        Args:
            message: Human-readable error message.
            expression: The expression that failed to parse.
            position: Character position where the error occurred.
        """
        self.position = position
        if position > 0 and expression:
            error_line = f"{expression}\n{' ' * position}^"
            full_message = f"{message} at position {position}:\n{error_line}"
        else:
            full_message = f"{message}: {expression}"
        super().__init__(full_message, expression=expression)
