"""Value model shared by the condition evaluator and the template renderer.

Python objects are classified into a closed set of type tags:

- ``"number"``: ``int``/``float`` and other real numbers (never ``bool``)
- ``"string"``: ``str``
- ``"boolean"``: ``bool``
- ``"null"``: ``None``
- ``"array"``: ``list`` and ``tuple``
- ``"object"``: mappings and anything unclassified
- ``"function"``: callables
- ``"undefined"``: the ``UNDEFINED`` sentinel (an absent value)

The same module owns the text forms used in diagnostics and messages, so the
describer, the macros and placeholder substitution all print values the same
way.
"""

from __future__ import annotations

import functools
import json
import math
import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from vouch.exceptions import InvalidPatternError

__all__ = [
    "UNDEFINED",
    "Pattern",
    "type_tag",
    "is_number",
    "is_integral",
    "is_nan",
    "length_of",
    "strict_equal",
    "ordered",
    "format_value",
    "bare_text",
]


class _Undefined(Enum):
    """Marker for a value that is absent, as opposed to ``None``."""

    TOKEN = "undefined"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = _Undefined.TOKEN

# Flag letters printed after a compiled pattern, in display order
_FLAG_LETTERS: Final[tuple[tuple[str, re.RegexFlag], ...]] = (
    ("a", re.ASCII),
    ("i", re.IGNORECASE),
    ("m", re.MULTILINE),
    ("s", re.DOTALL),
    ("x", re.VERBOSE),
)


@functools.lru_cache(maxsize=256)
def _compile(text: str, flags: int) -> re.Pattern[str]:
    return re.compile(text, flags)


@dataclass(frozen=True, slots=True)
class Pattern:
    """Regular expression reference for ``matches`` and ``matchesNot``.

    A pattern is either a literal (plain pattern text, rendered quoted) or a
    compiled pattern carrying flag letters (rendered ``/text/flags``). Plain
    strings and ``re.Pattern`` objects are converted with ``coerce``.

    Attributes:
        text: The regular expression source.
        flags: Flag letters for compiled patterns, None for literal ones.

    Examples:
        >>> str(Pattern.literal("^[a-f]+$"))
        '"^[a-f]+$"'
        >>> str(Pattern.compiled("^[a-f]+$", "i"))
        '/^[a-f]+$/i'
    """

    text: str
    flags: str | None = None

    @classmethod
    def literal(cls, text: str) -> Pattern:
        return cls(text=text)

    @classmethod
    def compiled(cls, text: str, flags: str = "") -> Pattern:
        return cls(text=text, flags=flags)

    @classmethod
    def coerce(cls, reference: Any) -> Pattern:
        """Convert a ``matches`` reference to a Pattern.

        Raises:
            InvalidPatternError: If the reference is neither text nor a
                compiled text pattern.
        """
        if isinstance(reference, Pattern):
            return reference
        if isinstance(reference, str):
            return cls.literal(reference)
        if isinstance(reference, re.Pattern):
            if not isinstance(reference.pattern, str):
                raise InvalidPatternError(reference, "bytes patterns are not supported")
            letters = "".join(
                letter for letter, flag in _FLAG_LETTERS if reference.flags & flag
            )
            return cls.compiled(reference.pattern, letters)
        raise InvalidPatternError(reference, "expected pattern text or a compiled pattern")

    @property
    def is_compiled(self) -> bool:
        return self.flags is not None

    def regex(self) -> re.Pattern[str]:
        """Compile (cached) the pattern.

        Raises:
            InvalidPatternError: If the text or the flag letters are invalid.
        """
        flags = 0
        for letter in self.flags or "":
            for name, flag in _FLAG_LETTERS:
                if letter == name:
                    flags |= flag
                    break
            else:
                raise InvalidPatternError(self.text, f"unknown flag '{letter}'")
        try:
            return _compile(self.text, flags)
        except re.error as e:
            raise InvalidPatternError(self.text, str(e)) from e

    def __str__(self) -> str:
        if self.is_compiled:
            return f"/{self.text}/{self.flags}"
        return f'"{self.text}"'


def is_number(value: Any) -> bool:
    """True for real numbers; booleans are not numbers."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_integral(value: Any) -> bool:
    """True for numbers without a fractional part."""
    if not is_number(value):
        return False
    if isinstance(value, numbers.Integral):
        return True
    return math.isfinite(value) and float(value).is_integer()


def type_tag(value: Any) -> str:
    """Return the type tag of a value."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if callable(value):
        return "function"
    return "object"


def length_of(value: Any) -> Any:
    """Character count of a string, element count of an array, else UNDEFINED."""
    if isinstance(value, (str, list, tuple)):
        return len(value)
    return UNDEFINED


def strict_equal(left: Any, right: Any) -> bool:
    """Structural equality without cross-type coercion.

    ``1 == True`` and ``[1] == (1,)`` hold in Python; here the first is
    false (number vs boolean) and the second is true (both arrays).
    """
    tag = type_tag(left)
    if tag != type_tag(right):
        return False
    if tag == "array":
        return len(left) == len(right) and all(
            strict_equal(a, b) for a, b in zip(left, right)
        )
    if tag == "object" and isinstance(left, Mapping) and isinstance(right, Mapping):
        return left.keys() == right.keys() and all(
            strict_equal(left[key], right[key]) for key in left
        )
    if tag == "undefined":
        return True
    return bool(left == right)


def is_nan(value: Any) -> bool:
    """True for float NaN; other numbers (huge ints included) are never converted."""
    return isinstance(value, float) and math.isnan(value)


def ordered(left: Any, right: Any) -> bool:
    """True when ``left`` and ``right`` have a natural ordering between them."""
    if is_number(left) and is_number(right):
        return not (is_nan(left) or is_nan(right))
    return isinstance(left, str) and isinstance(right, str)


def format_value(value: Any) -> str:
    """Pretty-print a value for diagnostics.

    Strings are double-quoted, numbers and booleans bare, arrays and objects
    in compact bracket form.

    Examples:
        >>> format_value("1234")
        '"1234"'
        >>> format_value([1, 2])
        '[1,2]'
        >>> format_value(False)
        'false'
    """
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return repr(value) if isinstance(value, float) else str(value)
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (Pattern, re.Pattern)):
        return str(Pattern.coerce(value))
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(format_value(item) for item in value) + "]"
    if isinstance(value, Mapping):
        fields = (
            f"{json.dumps(str(key), ensure_ascii=False)}:{format_value(item)}"
            for key, item in value.items()
        )
        return "{" + ",".join(fields) + "}"
    if callable(value):
        name = getattr(value, "__qualname__", type(value).__name__)
        return f"<function {name}>"
    return str(value)


def bare_text(value: Any) -> str:
    """Text form used for placeholders: strings as-is, the rest pretty-printed."""
    if isinstance(value, str):
        return value
    return format_value(value)
