"""vouch constants: default assertion message templates.

Templates use the syntax described in ``vouch.templates``. Every template
can be overridden per ``Asserter`` through ``MessageTemplates``.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Default Message Templates
# =============================================================================

#: Value has the wrong type
MSG_ASSERT_TYPE: Final = (
    "Wrong type for '%varName%', expected %type%, got %_TYPE_%(?funName in %funName%?)"
)

#: Value fails a condition
MSG_ASSERT_VALUE: Final = (
    "Wrong value for '%varName%', expected %expected%, got %_ACTUAL_%"
    "(?funName in %funName%?)"
)

#: Field of a mapping has the wrong type
MSG_ASSERT_FIELD_TYPES: Final = (
    "Wrong type for field '%field%' of '%varName%', expected %type%, got %actual%"
    "(?funName in %funName%?)"
)

#: Field of a mapping fails a condition
MSG_ASSERT_FIELD_VALUES: Final = (
    "Wrong value for field '%field%' of '%varName%', expected %expected%, "
    "got %_ACTUAL_%(?funName in %funName%?)"
)

#: Optional field, when present, has the wrong type
MSG_ASSERT_OPTIONAL_FIELD_TYPES: Final = MSG_ASSERT_FIELD_TYPES

#: Optional field, when present, fails a condition
MSG_ASSERT_OPTIONAL_FIELD_VALUES: Final = MSG_ASSERT_FIELD_VALUES

#: Mapping has a field outside the allowed set
MSG_ASSERT_ALLOWED_FIELDS: Final = (
    "Unexpected field '%field%' in '%varName%'(?funName in %funName%?)"
)

#: Mapping has a forbidden field
MSG_ASSERT_FORBIDDEN_FIELDS: Final = (
    "Field '%field%' not allowed in '%varName%'(?funName in %funName%?)"
)

# =============================================================================
# Token Defaults
# =============================================================================

#: Variable name used when an assertion is not given one
DEFAULT_VAR_NAME: Final = "argument"

#: Display text for a field whose actual value is absent
UNDEFINED_DISPLAY: Final = "<undefined>"
