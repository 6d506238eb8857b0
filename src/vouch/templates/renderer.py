"""Message template renderer.

Rendering happens in two phases:

1. Blocks: every outermost ``(?expr message?)`` block is replaced by its
   message (when ``expr`` holds against the context) or by nothing; kept
   messages are resolved the same way, recursively.
2. Placeholders: ``%name%`` is replaced by a macro value or by the bare
   text of ``context[name]``. Unknown names are left as they are.

Block conditions therefore see raw context values, and placeholders inside
kept blocks are still substituted. Substituted text is never rescanned.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

from vouch.logging import get_logger
from vouch.templates.blocks import extract_blocks
from vouch.templates.expressions import NAME_PATTERN, evaluate_expression
from vouch.templates.macros import is_macro, run_macro
from vouch.values import bare_text

__all__ = ["render", "resolve_blocks", "substitute_placeholders"]

logger = get_logger(__name__)

_PLACEHOLDER_PATTERN: Final = re.compile(rf"%({NAME_PATTERN})%")


def resolve_blocks(template: str, context: Mapping[str, Any]) -> str:
    """Resolve all conditional blocks, innermost last, left to right."""
    blocks = extract_blocks(template)
    if not blocks:
        return template
    parts: list[str] = []
    cursor = 0
    for block in blocks:
        parts.append(template[cursor : block.start])
        if evaluate_expression(block.condition, context):
            parts.append(resolve_blocks(block.message, context))
        else:
            logger.debug("block_dropped", condition=block.condition.to_dict())
        cursor = block.end
    parts.append(template[cursor:])
    return "".join(parts)


def substitute_placeholders(text: str, context: Mapping[str, Any]) -> str:
    """Replace ``%name%`` placeholders in a single left-to-right pass."""

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if is_macro(name):
            return bare_text(run_macro(name, context))
        if name in context:
            return bare_text(context[name])
        return match.group(0)

    return _PLACEHOLDER_PATTERN.sub(replace, text)


def render(template: str, context: Mapping[str, Any] | None = None) -> str:
    """Render a message template against a token context.

    Args:
        template: Template text with ``%name%`` placeholders and
            ``(?expr message?)`` blocks.
        context: Token context (name -> value). Defaults to empty.

    Returns:
        The rendered text.

    Examples:
        >>> render(
        ...     "Tokens:(?value %value%(?var1 === false %_TYPE_% %_LEN_%"
        ...     "(?var2 > 40 %var2%?)?)?)",
        ...     {"value": "1234", "var1": False, "var2": 42},
        ... )
        'Tokens: 1234 string 4 42'
    """
    if not template:
        return ""
    context = context if context is not None else {}
    return substitute_placeholders(resolve_blocks(template, context), context)
