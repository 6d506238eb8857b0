"""vouch: declarative value conditions and context-sensitive error messages.

Two engines:

- ``evaluate(value, condition)`` checks a value against a declarative
  condition and explains why it fails.
- ``render(template, context)`` expands a message template with
  ``%name%`` placeholders, macros and nested ``(?expr text?)`` blocks.

``Asserter`` combines them into assertions that raise with readable
messages.
"""

from __future__ import annotations

from vouch.asserter import Asserter, default_asserter
from vouch.conditions import EvaluationResult, describe, evaluate
from vouch.config import MessageTemplates, VouchSettings, load_config
from vouch.exceptions import (
    AssertionFailedError,
    ConditionError,
    ConfigError,
    InvalidPatternError,
    TemplateError,
    TemplateSyntaxError,
    UnknownOperatorError,
    VouchError,
)
from vouch.templates import ConditionExpr, extract_blocks, parse_expression, render
from vouch.values import UNDEFINED, Pattern, type_tag

__version__ = "0.1.0"

__all__ = [
    "evaluate",
    "describe",
    "EvaluationResult",
    "render",
    "parse_expression",
    "extract_blocks",
    "ConditionExpr",
    "Asserter",
    "default_asserter",
    "MessageTemplates",
    "VouchSettings",
    "load_config",
    "UNDEFINED",
    "Pattern",
    "type_tag",
    "VouchError",
    "ConditionError",
    "UnknownOperatorError",
    "InvalidPatternError",
    "TemplateError",
    "TemplateSyntaxError",
    "ConfigError",
    "AssertionFailedError",
]
