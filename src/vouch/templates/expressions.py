"""Block condition expressions.

The condition at the head of a ``(?expr text?)`` block is either a bare
context name (tested for truthiness) or a single binary comparison:

- ``funName`` - truthiness of ``context["funName"]``
- ``value >= 42`` - numeric or lexicographic ordering
- ``var1 === false`` / ``var1 !== 'x'`` - strict equality (type and value)
- ``var1 == 42`` / ``var1 != 'x'`` - equality with numeric coercion

Literals are single-quoted strings, ``true``/``false`` and signed decimal
numbers. There is no and/or, no arithmetic and no nesting of expressions.

Implementation:
The grammar is parsed with Lark (LALR). Comparison operators are a single
terminal whose alternatives list the longer operators first, so ``===`` is
never read as ``==`` followed by ``=``.
"""

from __future__ import annotations

import operator as _operator
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Final, Literal, cast

from lark import Lark, Token, Transformer, UnexpectedInput

from vouch.exceptions import TemplateSyntaxError
from vouch.values import (
    UNDEFINED,
    bare_text,
    is_nan,
    is_number,
    ordered,
    strict_equal,
)

__all__ = [
    "ConditionExpr",
    "Comparator",
    "NAME_PATTERN",
    "LITERAL_PATTERN",
    "COMPARATOR_PATTERN",
    "parse_expression",
    "evaluate_expression",
    "is_truthy",
]

Comparator = Literal["boolean", "==", "===", "!=", "!==", ">", ">=", "<", "<="]

# Shared with the block extractor, which has to find where an expression ends
NAME_PATTERN: Final = r"[A-Za-z_]\w*"
COMPARATOR_PATTERN: Final = r"===|!==|==|!=|>=|<=|>|<"
LITERAL_PATTERN: Final = (
    r"'[^']*'"
    r"|(?:true|false)(?![\w.])"
    r"|[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?(?![\w.])"
)

_GRAMMAR: Final = rf"""
start: NAME                         -> boolean
     | NAME COMPARATOR literal      -> comparison

literal: STRING                     -> string
       | "true"                     -> true
       | "false"                    -> false
       | NUMBER                     -> number

COMPARATOR: /{COMPARATOR_PATTERN}/
STRING: /'[^']*'/
NUMBER: /[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?/
NAME: /{NAME_PATTERN}/

%import common.WS
%ignore WS
"""

_parser = Lark(_GRAMMAR, parser="lalr", start="start", propagate_positions=True)

_INTEGER_LITERAL = re.compile(r"[+-]?\d+")

_ORDERINGS: Final[dict[str, Callable[[Any, Any], bool]]] = {
    ">": _operator.gt,
    ">=": _operator.ge,
    "<": _operator.lt,
    "<=": _operator.le,
}


@dataclass(frozen=True, slots=True)
class ConditionExpr:
    """Parsed block condition.

    Attributes:
        operator: ``"boolean"`` for a bare name, else the comparison operator.
        lho: Context name on the left-hand side.
        rho: Literal on the right-hand side (``UNDEFINED`` for ``"boolean"``).

    Examples:
        >>> parse_expression("value >= 42")
        ConditionExpr(operator='>=', lho='value', rho=42)
    """

    operator: Comparator
    lho: str
    rho: Any = UNDEFINED

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"operator": self.operator, "lho": self.lho}
        if self.operator != "boolean":
            data["rho"] = self.rho
        return data


class _ConditionTransformer(Transformer[Token, object]):
    """Transform the parse tree into a ConditionExpr."""

    def boolean(self, items: list[Token]) -> ConditionExpr:
        return ConditionExpr(operator="boolean", lho=str(items[0]))

    def comparison(self, items: list[Any]) -> ConditionExpr:
        name, comparator, literal = items
        return ConditionExpr(operator=str(comparator), lho=str(name), rho=literal)

    def string(self, items: list[Token]) -> str:
        return str(items[0])[1:-1]

    def true(self, items: list[Token]) -> bool:
        return True

    def false(self, items: list[Token]) -> bool:
        return False

    def number(self, items: list[Token]) -> int | float:
        text = str(items[0])
        if _INTEGER_LITERAL.fullmatch(text):
            return int(text)
        return float(text)


def parse_expression(text: str) -> ConditionExpr:
    """Parse a block condition expression.

    Args:
        text: Expression text, surrounding whitespace allowed.

    Returns:
        The parsed ConditionExpr.

    Raises:
        TemplateSyntaxError: If the text is not ``name`` or
            ``name <op> literal``.

    Examples:
        >>> parse_expression("  value  ")
        ConditionExpr(operator='boolean', lho='value', rho=UNDEFINED)
        >>> parse_expression("value !== 'a b c'").rho
        'a b c'
    """
    if not text or text.isspace():
        raise TemplateSyntaxError("Empty condition expression", expression=text)
    try:
        tree = _parser.parse(text)
    except UnexpectedInput as e:
        pos = e.column - 1 if isinstance(e.column, int) and e.column > 0 else 0
        raise TemplateSyntaxError(
            "Invalid condition expression, expected 'name' or 'name <op> literal'",
            expression=text,
            position=pos,
        ) from e
    return cast(ConditionExpr, _ConditionTransformer().transform(tree))


def is_truthy(value: Any) -> bool:
    """Absent, False, zero, empty string and None are falsy; all else is truthy.

    Empty lists and mappings are truthy.
    """
    if value is UNDEFINED or value is None or value is False:
        return False
    if is_number(value):
        return not (value == 0 or is_nan(value))
    if isinstance(value, str):
        return value != ""
    return True


def _as_number(value: Any) -> Any:
    # Numbers stay as they are so huge ints compare exactly
    if is_number(value):
        return value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _loose_equal(left: Any, right: Any) -> bool:
    if left is UNDEFINED or right is UNDEFINED:
        return False
    if is_number(left) or is_number(right):
        a, b = _as_number(left), _as_number(right)
        return a is not None and b is not None and a == b
    return bare_text(left) == bare_text(right)


def evaluate_expression(expr: ConditionExpr, context: Mapping[str, Any]) -> bool:
    """Evaluate a block condition against a token context.

    Args:
        expr: Parsed condition.
        context: Token context; names missing from it are absent values.

    Returns:
        True if the block should be kept.
    """
    value = context.get(expr.lho, UNDEFINED)
    op = expr.operator
    if op == "boolean":
        return is_truthy(value)
    if op == "===":
        return strict_equal(value, expr.rho)
    if op == "!==":
        return not strict_equal(value, expr.rho)
    if op == "==":
        return _loose_equal(value, expr.rho)
    if op == "!=":
        return not _loose_equal(value, expr.rho)
    return ordered(value, expr.rho) and _ORDERINGS[op](value, expr.rho)
