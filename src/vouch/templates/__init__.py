"""Message templates with placeholders, macros and conditional blocks.

Template Syntax
---------------
- Literal text
- ``%name%``: value of ``context["name"]`` (strings unquoted)
- ``%_TYPE_%``, ``%_LEN_%``, ``%_ACTUAL_%``, ``%_VALUE_%``: macros
- ``(?expr message?)``: ``message`` is kept only when ``expr`` holds;
  ``expr`` is ``name`` or ``name <op> literal`` and blocks nest freely

Examples
--------
    render("Wrong value for '%varName%'(?funName in %funName%?)",
           {"varName": "size", "funName": "resize"})
    # "Wrong value for 'size' in resize"

Module Structure
----------------
- expressions.py: Block condition grammar and evaluation
- blocks.py: Outermost block extraction
- macros.py: Built-in macros
- renderer.py: ``render``

Rendering is stateless and thread-safe.
"""

from __future__ import annotations

from vouch.templates.blocks import Block, extract_blocks
from vouch.templates.expressions import (
    ConditionExpr,
    evaluate_expression,
    is_truthy,
    parse_expression,
)
from vouch.templates.macros import MACROS, is_macro, run_macro
from vouch.templates.renderer import render

__all__: list[str] = [
    "render",
    "Block",
    "extract_blocks",
    "ConditionExpr",
    "parse_expression",
    "evaluate_expression",
    "is_truthy",
    "MACROS",
    "is_macro",
    "run_macro",
]
