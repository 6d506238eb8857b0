"""Built-in placeholder macros.

Macros are placeholders whose value is derived from the token context
rather than read from it:

- ``%_TYPE_%``: type tag of ``context["value"]``
- ``%_LEN_%``: length of ``context["value"]`` (string or array)
- ``%_ACTUAL_%``: ``context["actual"]`` pretty-printed
- ``%_VALUE_%``: ``context["value"]`` pretty-printed
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Final

from vouch.values import UNDEFINED, format_value, length_of, type_tag

__all__ = ["MACROS", "is_macro", "run_macro"]

MACROS: Final[dict[str, Callable[[Mapping[str, Any]], Any]]] = {
    "_TYPE_": lambda context: type_tag(context.get("value", UNDEFINED)),
    "_LEN_": lambda context: length_of(context.get("value", UNDEFINED)),
    "_ACTUAL_": lambda context: format_value(context.get("actual", UNDEFINED)),
    "_VALUE_": lambda context: format_value(context.get("value", UNDEFINED)),
}


def is_macro(name: str) -> bool:
    return name in MACROS


def run_macro(name: str, context: Mapping[str, Any]) -> Any:
    """Compute a macro against ``context``.

    Args:
        name: Macro name, e.g. ``"_LEN_"``.
        context: Token context.

    Returns:
        The macro value: a string for ``_TYPE_``, ``_ACTUAL_`` and
        ``_VALUE_``; an int (or ``UNDEFINED`` for unsized values) for
        ``_LEN_``.

    Raises:
        KeyError: If ``name`` is not a macro.

    Examples:
        >>> run_macro("_ACTUAL_", {"actual": [1, 2]})
        '[1,2]'
        >>> run_macro("_LEN_", {"value": "1234"})
        4
    """
    return MACROS[name](context)
