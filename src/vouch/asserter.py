"""Assertions with configurable, context-sensitive error messages.

``Asserter`` connects the two engines: it evaluates a value with
``vouch.conditions.evaluate`` and, on failure, renders the matching message
template from ``MessageTemplates`` with ``vouch.templates.render`` before
raising.

Example:
    ```python
    check = Asserter()
    check.assert_value(port, {"integer": True, "gte": 1, "lte": 65535},
                       var_name="port", fun_name="connect")
    # AssertionFailedError: Wrong value for 'port', expected greater than or
    # equal to 1, got 0 in connect
    ```

Each instance owns a deep copy of its settings, so templates can be changed
per instance (``check.messages.value = "..."``) without affecting others.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from functools import lru_cache
from typing import Any

from vouch.conditions import evaluate
from vouch.conditions.operators import alternatives
from vouch.config import MessageTemplates, VouchSettings
from vouch.constants import UNDEFINED_DISPLAY
from vouch.exceptions import AssertionFailedError
from vouch.logging import get_logger
from vouch.templates import render
from vouch.values import UNDEFINED, type_tag

__all__ = ["Asserter", "default_asserter"]

logger = get_logger(__name__)


def _field(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name, UNDEFINED)
    return getattr(value, name, UNDEFINED)


class Asserter:
    """Runs assertions and raises with rendered messages.

    Args:
        settings: Message templates and token defaults. Defaults to
            ``VouchSettings()`` (environment and YAML files included).
        error_class: Exception raised on failure unless an assertion call
            passes its own.

    Every ``assert_*`` method returns True when the assertion holds.
    """

    def __init__(
        self,
        settings: VouchSettings | None = None,
        error_class: type[Exception] = AssertionFailedError,
    ) -> None:
        base = settings if settings is not None else VouchSettings()
        self._settings = base.model_copy(deep=True)
        self.error_class = error_class

    @property
    def messages(self) -> MessageTemplates:
        return self._settings.messages

    @property
    def settings(self) -> VouchSettings:
        return self._settings

    def _report(
        self,
        passed: bool,
        template: str,
        tokens: dict[str, Any],
        var_name: str | None,
        fun_name: str | None,
        error_class: type[Exception] | None,
    ) -> bool:
        if passed:
            return True
        tokens["varName"] = var_name if var_name is not None else self._settings.default_var_name
        if fun_name is not None:
            tokens["funName"] = fun_name
        message = render(template, tokens)
        logger.debug("assertion_failed", message=message)
        raise (error_class or self.error_class)(message)

    # -------------------------------------------------------------------------
    # Type and value assertions
    # -------------------------------------------------------------------------

    def assert_type(
        self,
        value: Any,
        types: str | Collection[str],
        *,
        var_name: str | None = None,
        fun_name: str | None = None,
        error_class: type[Exception] | None = None,
    ) -> bool:
        """Assert that the type tag of ``value`` is one of ``types``."""
        expected = list(alternatives(types))
        return self._report(
            type_tag(value) in expected,
            self.messages.type,
            {"value": value, "type": "/".join(expected)},
            var_name,
            fun_name,
            error_class,
        )

    def assert_value(
        self,
        value: Any,
        condition: Any,
        *,
        var_name: str | None = None,
        fun_name: str | None = None,
        error_class: type[Exception] | None = None,
    ) -> bool:
        """Assert that ``value`` satisfies ``condition``.

        Raises:
            ConditionError: If the condition itself is malformed.
        """
        result = evaluate(value, condition)
        return self._report(
            result.result,
            self.messages.value,
            {"value": value, "expected": result.details, "actual": result.actual},
            var_name,
            fun_name,
            error_class,
        )

    # -------------------------------------------------------------------------
    # Field assertions
    # -------------------------------------------------------------------------

    def _check_field_types(
        self,
        value: Any,
        fields: Mapping[str, str | Collection[str]],
        template: str,
        optional: bool,
        var_name: str | None,
        fun_name: str | None,
        error_class: type[Exception] | None,
    ) -> bool:
        for name, types in fields.items():
            field_value = _field(value, name)
            if optional and field_value is UNDEFINED:
                continue
            expected = list(alternatives(types))
            actual = type_tag(field_value)
            self._report(
                actual in expected,
                template,
                {
                    "value": field_value,
                    "type": "/".join(expected),
                    "actual": UNDEFINED_DISPLAY if field_value is UNDEFINED else actual,
                    "field": name,
                },
                var_name,
                fun_name,
                error_class,
            )
        return True

    def _check_field_values(
        self,
        value: Any,
        fields: Mapping[str, Any],
        template: str,
        optional: bool,
        var_name: str | None,
        fun_name: str | None,
        error_class: type[Exception] | None,
    ) -> bool:
        for name, condition in fields.items():
            field_value = _field(value, name)
            if optional and field_value is UNDEFINED:
                continue
            result = evaluate(field_value, condition)
            self._report(
                result.result,
                template,
                {
                    "value": field_value,
                    "expected": result.details,
                    "actual": result.actual,
                    "field": name,
                },
                var_name,
                fun_name,
                error_class,
            )
        return True

    def assert_field_types(
        self,
        value: Any,
        fields: Mapping[str, str | Collection[str]],
        *,
        var_name: str | None = None,
        fun_name: str | None = None,
        error_class: type[Exception] | None = None,
    ) -> bool:
        """Assert the type of each named field; absent fields are "undefined"."""
        return self._check_field_types(
            value, fields, self.messages.field_types, False, var_name, fun_name, error_class
        )

    def assert_field_values(
        self,
        value: Any,
        fields: Mapping[str, Any],
        *,
        var_name: str | None = None,
        fun_name: str | None = None,
        error_class: type[Exception] | None = None,
    ) -> bool:
        """Assert a condition on each named field."""
        return self._check_field_values(
            value, fields, self.messages.field_values, False, var_name, fun_name, error_class
        )

    def assert_optional_field_types(
        self,
        value: Any,
        fields: Mapping[str, str | Collection[str]],
        *,
        var_name: str | None = None,
        fun_name: str | None = None,
        error_class: type[Exception] | None = None,
    ) -> bool:
        """Like ``assert_field_types``, skipping absent fields."""
        return self._check_field_types(
            value,
            fields,
            self.messages.optional_field_types,
            True,
            var_name,
            fun_name,
            error_class,
        )

    def assert_optional_field_values(
        self,
        value: Any,
        fields: Mapping[str, Any],
        *,
        var_name: str | None = None,
        fun_name: str | None = None,
        error_class: type[Exception] | None = None,
    ) -> bool:
        """Like ``assert_field_values``, skipping absent fields."""
        return self._check_field_values(
            value,
            fields,
            self.messages.optional_field_values,
            True,
            var_name,
            fun_name,
            error_class,
        )

    def assert_allowed_fields(
        self,
        value: Any,
        fields: Collection[str],
        *,
        var_name: str | None = None,
        fun_name: str | None = None,
        error_class: type[Exception] | None = None,
    ) -> bool:
        """Assert that a mapping has no keys outside ``fields``.

        Values that are not mappings pass.
        """
        if not isinstance(value, Mapping):
            return True
        for name in value:
            self._report(
                name in fields,
                self.messages.allowed_fields,
                {"field": name},
                var_name,
                fun_name,
                error_class,
            )
        return True

    def assert_forbidden_fields(
        self,
        value: Any,
        fields: Collection[str],
        *,
        var_name: str | None = None,
        fun_name: str | None = None,
        error_class: type[Exception] | None = None,
    ) -> bool:
        """Assert that a mapping has none of the keys in ``fields``.

        Values that are not mappings pass.
        """
        if not isinstance(value, Mapping):
            return True
        for name in value:
            self._report(
                name not in fields,
                self.messages.forbidden_fields,
                {"field": name},
                var_name,
                fun_name,
                error_class,
            )
        return True

    # -------------------------------------------------------------------------
    # Single-operator shorthands
    # -------------------------------------------------------------------------

    def _assert_operator(self, operator: str, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self.assert_value(value, {operator: reference}, **kwargs)

    def assert_equal(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("eq", value, reference, **kwargs)

    def assert_not_equal(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("neq", value, reference, **kwargs)

    def assert_lt(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("lt", value, reference, **kwargs)

    def assert_lte(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("lte", value, reference, **kwargs)

    def assert_gt(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("gt", value, reference, **kwargs)

    def assert_gte(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("gte", value, reference, **kwargs)

    def assert_integer(self, value: Any, reference: bool = True, **kwargs: Any) -> bool:
        return self._assert_operator("integer", value, reference, **kwargs)

    def assert_divides(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("divides", value, reference, **kwargs)

    def assert_multiple(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("multiple", value, reference, **kwargs)

    def assert_contains(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("contains", value, reference, **kwargs)

    def assert_begins(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("begins", value, reference, **kwargs)

    def assert_ends(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("ends", value, reference, **kwargs)

    def assert_matches(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("matches", value, reference, **kwargs)

    def assert_contains_not(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("containsNot", value, reference, **kwargs)

    def assert_begins_not(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("beginsNot", value, reference, **kwargs)

    def assert_ends_not(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("endsNot", value, reference, **kwargs)

    def assert_matches_not(self, value: Any, reference: Any, **kwargs: Any) -> bool:
        return self._assert_operator("matchesNot", value, reference, **kwargs)

    def assert_length(self, value: Any, condition: Any, **kwargs: Any) -> bool:
        return self._assert_operator("length", value, condition, **kwargs)

    def assert_each(self, value: Any, condition: Any, **kwargs: Any) -> bool:
        return self._assert_operator("each", value, condition, **kwargs)


@lru_cache(maxsize=1)
def default_asserter() -> Asserter:
    """Return the shared ``Asserter`` built from ``VouchSettings()``.

    Built on first call, so environment variables and YAML files are read
    then rather than at import time. Construct an ``Asserter`` directly for
    an instance with its own templates; ``default_asserter.cache_clear()``
    drops the shared one.
    """
    return Asserter()
