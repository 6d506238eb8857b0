"""Conditional block extraction.

A block is ``(?expr message?)``: the text between the markers starts with a
condition expression (see ``vouch.templates.expressions``) and the rest is
the message kept when the condition holds. Blocks nest; ``extract_blocks``
returns only the outermost ones and leaves nested blocks untouched inside
``Block.message`` for the renderer's next recursion level.

Markers that never balance, and blocks whose head is not a valid
expression, are not blocks: they stay in the text as literal characters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from vouch.exceptions import TemplateSyntaxError
from vouch.logging import get_logger
from vouch.templates.expressions import (
    COMPARATOR_PATTERN,
    LITERAL_PATTERN,
    NAME_PATTERN,
    ConditionExpr,
    parse_expression,
)

__all__ = ["Block", "OPEN_MARKER", "CLOSE_MARKER", "extract_blocks"]

logger = get_logger(__name__)

OPEN_MARKER: Final = "(?"
CLOSE_MARKER: Final = "?)"

_HEADER_PATTERN: Final = re.compile(
    rf"\s*(?P<expression>{NAME_PATTERN}"
    rf"(?:\s*(?:{COMPARATOR_PATTERN})\s*(?:{LITERAL_PATTERN}))?)"
    r"(?P<message>.*)",
    re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class Block:
    """An outermost conditional block found in a template.

    Attributes:
        raw: The block text, markers included.
        start: Offset of the opening marker in the scanned text.
        end: Offset just past the closing marker.
        condition: Parsed head expression.
        message: Text kept when the condition holds. Whitespace separating
            it from the expression collapses to a single leading space and
            trailing whitespace is dropped.
    """

    raw: str
    start: int
    end: int
    condition: ConditionExpr
    message: str


def _parse_block(text: str, start: int, end: int) -> Block | None:
    raw = text[start:end]
    content = raw[len(OPEN_MARKER) : -len(CLOSE_MARKER)]
    match = _HEADER_PATTERN.match(content)
    if match is None:
        logger.debug("block_header_invalid", block=raw)
        return None
    try:
        condition = parse_expression(match.group("expression"))
    except TemplateSyntaxError:
        logger.debug("block_header_invalid", block=raw)
        return None
    message = match.group("message")
    if message[:1].isspace():
        message = " " + message.lstrip()
    return Block(
        raw=raw,
        start=start,
        end=end,
        condition=condition,
        message=message.rstrip(),
    )


def _scan(text: str, position: int) -> tuple[list[Block], int | None]:
    """Scan from ``position``; return the blocks and any unclosed opener offset."""
    blocks: list[Block] = []
    depth = 0
    start = position
    i = position
    while i < len(text) - 1:
        pair = text[i : i + 2]
        if pair == OPEN_MARKER:
            if depth == 0:
                start = i
            depth += 1
            i += 2
        elif pair == CLOSE_MARKER and depth > 0:
            depth -= 1
            i += 2
            if depth == 0:
                block = _parse_block(text, start, i)
                if block is not None:
                    blocks.append(block)
        else:
            i += 1
    return blocks, (start if depth > 0 else None)


def extract_blocks(text: str) -> list[Block]:
    """Extract the outermost ``(?expr message?)`` blocks of ``text``.

    Args:
        text: Template text.

    Returns:
        Blocks in left-to-right order, exactly one per outermost block.

    Examples:
        >>> [b.raw for b in extract_blocks("There (?are nested (?subs in this?) message?)")]
        ['(?are nested (?subs in this?) message?)']
        >>> extract_blocks("There (?are nested (?subs in this?) message?)")[0].message
        ' nested (?subs in this?) message'
    """
    blocks: list[Block] = []
    position = 0
    while True:
        found, unclosed = _scan(text, position)
        blocks.extend(found)
        if unclosed is None:
            return blocks
        # Treat the unclosed opener as literal text and rescan after it
        logger.debug("block_marker_unbalanced", position=unclosed)
        position = unclosed + len(OPEN_MARKER)
