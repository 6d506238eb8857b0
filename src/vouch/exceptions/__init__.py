"""vouch exception hierarchy.

All exceptions can be imported from this package:
    from vouch.exceptions import ConditionError, TemplateSyntaxError
"""

from __future__ import annotations

from vouch.exceptions.assertion import AssertionFailedError
from vouch.exceptions.base import VouchError
from vouch.exceptions.condition import (
    ConditionError,
    InvalidPatternError,
    UnknownOperatorError,
)
from vouch.exceptions.config import ConfigError
from vouch.exceptions.template import TemplateError, TemplateSyntaxError

__all__ = [
    "VouchError",
    "ConditionError",
    "UnknownOperatorError",
    "InvalidPatternError",
    "TemplateError",
    "TemplateSyntaxError",
    "ConfigError",
    "AssertionFailedError",
]
