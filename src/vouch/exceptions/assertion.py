from __future__ import annotations

from vouch.exceptions.base import VouchError


class AssertionFailedError(VouchError, AssertionError):
    """Default error raised by ``Asserter`` when a value fails an assertion.

    It is an ``AssertionError`` as well, so callers that already catch
    assertion errors keep working. ``message`` holds the rendered template.
    """
