"""Unit tests for Asserter."""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from vouch import Asserter, MessageTemplates, VouchSettings, default_asserter
from vouch.constants import MSG_ASSERT_VALUE
from vouch.exceptions import AssertionFailedError, UnknownOperatorError


@pytest.fixture
def check(isolated_config: Path) -> Asserter:
    """Asserter with default settings and no config files."""
    return Asserter()


class TestAssertType:
    """Test assert_type."""

    def test_passes(self, check: Asserter) -> None:
        assert check.assert_type(42, "number") is True
        assert check.assert_type("42", ["number", "string"]) is True

    def test_failure_message(self, check: Asserter) -> None:
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_type("42", "number", var_name="port")
        assert exc_info.value.message == (
            "Wrong type for 'port', expected number, got string"
        )

    def test_function_name_block(self, check: Asserter) -> None:
        with pytest.raises(AssertionFailedError, match=r"got null in connect$"):
            check.assert_type(None, ["number", "string"], var_name="port", fun_name="connect")

    def test_types_joined_with_slash(self, check: Asserter) -> None:
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_type([], ["number", "string"])
        assert str(exc_info.value) == (
            "Wrong type for 'argument', expected number/string, got array"
        )


class TestAssertValue:
    """Test assert_value."""

    def test_passes(self, check: Asserter) -> None:
        assert check.assert_value(8080, {"integer": True, "gte": 1, "lte": 65535}) is True

    def test_failure_message(self, check: Asserter) -> None:
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_value(
                0,
                {"integer": True, "gte": 1, "lte": 65535},
                var_name="port",
                fun_name="connect",
            )
        assert exc_info.value.message == (
            "Wrong value for 'port', expected greater than or equal to 1, got 0 in connect"
        )

    def test_actual_is_pretty_printed(self, check: Asserter) -> None:
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_value("42", {"eq": 42})
        assert exc_info.value.message == (
            "Wrong value for 'argument', expected 42, got \"42\""
        )

    def test_each_reports_failing_element(self, check: Asserter) -> None:
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_value([12, 1, 7], {"each": [{"eq": [12, 24]}, {"lte": 6}]})
        assert exc_info.value.message == (
            "Wrong value for 'argument', expected 12 or 24 or less than or equal to 6, got 7"
        )

    def test_malformed_condition_raises_condition_error(self, check: Asserter) -> None:
        with pytest.raises(UnknownOperatorError):
            check.assert_value(1, {"greater": 0})


class TestFieldAssertions:
    """Test field type and value assertions."""

    def test_field_types_pass(self, check: Asserter) -> None:
        assert check.assert_field_types({"a": 1, "b": "x"}, {"a": "number", "b": "string"})

    def test_field_type_mismatch(self, check: Asserter) -> None:
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_field_types({"a": "1"}, {"a": "number"}, var_name="opts")
        assert exc_info.value.message == (
            "Wrong type for field 'a' of 'opts', expected number, got string"
        )

    def test_absent_field_shows_undefined(self, check: Asserter) -> None:
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_field_types({"a": 1}, {"a": "number", "b": ["string", "null"]})
        assert exc_info.value.message == (
            "Wrong type for field 'b' of 'argument', expected string/null, got <undefined>"
        )

    def test_optional_field_types_skip_absent(self, check: Asserter) -> None:
        assert check.assert_optional_field_types({"a": 1}, {"b": "string"}) is True
        with pytest.raises(AssertionFailedError, match="field 'b'"):
            check.assert_optional_field_types({"b": 2}, {"b": "string"})

    def test_field_values(self, check: Asserter) -> None:
        assert check.assert_field_values({"port": 80}, {"port": {"gte": 1}})
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_field_values({"port": 0}, {"port": {"gte": 1}}, var_name="opts")
        assert exc_info.value.message == (
            "Wrong value for field 'port' of 'opts', expected greater than or equal to 1, got 0"
        )

    def test_absent_field_value_fails(self, check: Asserter) -> None:
        with pytest.raises(AssertionFailedError, match="got undefined$"):
            check.assert_field_values({}, {"port": {"gte": 1}})

    def test_optional_field_values_skip_absent(self, check: Asserter) -> None:
        assert check.assert_optional_field_values({}, {"port": {"gte": 1}}) is True
        with pytest.raises(AssertionFailedError):
            check.assert_optional_field_values({"port": 0}, {"port": {"gte": 1}})

    def test_attributes_are_fields(self, check: Asserter) -> None:
        """Non-mapping values are read by attribute."""
        options = SimpleNamespace(host="localhost", port=0)
        assert check.assert_field_types(options, {"host": "string", "port": "number"})
        with pytest.raises(AssertionFailedError, match="field 'port'"):
            check.assert_field_values(options, {"port": {"gt": 0}})


class TestAllowedAndForbiddenFields:
    """Test key set assertions."""

    def test_allowed_fields(self, check: Asserter) -> None:
        assert check.assert_allowed_fields({"a": 1}, ["a", "b"]) is True
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_allowed_fields({"a": 1, "c": 2}, ["a", "b"], fun_name="setup")
        assert exc_info.value.message == "Unexpected field 'c' in 'argument' in setup"

    def test_forbidden_fields(self, check: Asserter) -> None:
        assert check.assert_forbidden_fields({"a": 1}, ["password"]) is True
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_forbidden_fields({"a": 1, "password": "x"}, ["password"])
        assert exc_info.value.message == "Field 'password' not allowed in 'argument'"

    def test_non_mappings_pass(self, check: Asserter) -> None:
        assert check.assert_allowed_fields([1, 2], ["a"]) is True
        assert check.assert_forbidden_fields("password", ["password"]) is True


class TestShorthands:
    """Test single-operator shorthands."""

    @pytest.mark.parametrize(
        ("method", "value", "reference"),
        [
            ("assert_equal", 1, 1),
            ("assert_not_equal", 1, [2, 3]),
            ("assert_lt", 1, 2),
            ("assert_lte", 2, 2),
            ("assert_gt", 3, 2),
            ("assert_gte", 2, 2),
            ("assert_divides", 7, 42),
            ("assert_multiple", 42, 7),
            ("assert_contains", "abcdef", "bcd"),
            ("assert_begins", "abcdef", "abc"),
            ("assert_ends", "abcdef", "def"),
            ("assert_matches", "abcdef", "^[a-f]+$"),
            ("assert_contains_not", "abcdef", "xyz"),
            ("assert_begins_not", "abcdef", "b"),
            ("assert_ends_not", "abcdef", "e"),
            ("assert_matches_not", "abcdef", r"\d"),
            ("assert_length", "abc", 3),
            ("assert_each", [1, 2], {"type": "number"}),
        ],
    )
    def test_passing(self, check: Asserter, method: str, value: object, reference: object) -> None:
        assert getattr(check, method)(value, reference) is True

    def test_integer_defaults_to_true(self, check: Asserter) -> None:
        assert check.assert_integer(3) is True
        assert check.assert_integer(3.5, False) is True
        with pytest.raises(AssertionFailedError, match="expected integer number, got 1.5"):
            check.assert_integer(1.5)

    def test_failure_messages(self, check: Asserter) -> None:
        with pytest.raises(AssertionFailedError, match="expected 2, got 1$"):
            check.assert_equal(1, 2)
        with pytest.raises(AssertionFailedError, match="expected length less than or equal to 2, got 3$"):
            check.assert_length("abc", {"lte": 2})
        with pytest.raises(AssertionFailedError, match=re.escape('expected type "number", got "string"')):
            check.assert_each([1, "a"], {"type": "number"})
        with pytest.raises(AssertionFailedError, match=re.escape(r"expected string matching /^\d+$/,")):
            check.assert_matches("abc", re.compile(r"^\d+$"))

    def test_keyword_arguments_pass_through(self, check: Asserter) -> None:
        with pytest.raises(ValueError, match="^Wrong value for 'size'.* in resize$"):
            check.assert_gt(0, 0, var_name="size", fun_name="resize", error_class=ValueError)


class TestConfiguration:
    """Test per-instance settings and error classes."""

    def test_custom_error_class(self, isolated_config: Path) -> None:
        check = Asserter(error_class=TypeError)
        with pytest.raises(TypeError):
            check.assert_type(1, "string")

    def test_per_call_error_class_wins(self, isolated_config: Path) -> None:
        check = Asserter(error_class=TypeError)
        with pytest.raises(KeyError):
            check.assert_type(1, "string", error_class=KeyError)

    def test_default_var_name_from_settings(self, isolated_config: Path) -> None:
        check = Asserter(VouchSettings(default_var_name="input"))
        with pytest.raises(AssertionFailedError, match="^Wrong type for 'input'"):
            check.assert_type(1, "string")

    def test_custom_templates(self, isolated_config: Path) -> None:
        settings = VouchSettings(
            messages=MessageTemplates(value="%varName% must be %expected%(?funName (%funName%)?)")
        )
        check = Asserter(settings)
        with pytest.raises(AssertionFailedError) as exc_info:
            check.assert_gte(0, 1, var_name="count", fun_name="run")
        assert exc_info.value.message == "count must be greater than or equal to 1 (run)"

    def test_instances_do_not_share_templates(self, isolated_config: Path) -> None:
        settings = VouchSettings()
        first = Asserter(settings)
        second = Asserter(settings)
        first.messages.value = "Nope: %expected%"
        assert second.messages.value == MSG_ASSERT_VALUE
        assert settings.messages.value == MSG_ASSERT_VALUE
        with pytest.raises(AssertionFailedError, match="^Nope: 2$"):
            first.assert_equal(1, 2)


@pytest.fixture
def fresh_default(isolated_config: Path) -> Iterator[None]:
    """Drop the shared Asserter before and after the test."""
    default_asserter.cache_clear()
    yield
    default_asserter.cache_clear()


class TestDefaultAsserter:
    """Test the shared module-level Asserter."""

    def test_same_instance_every_call(self, fresh_default: None) -> None:
        first = default_asserter()
        assert isinstance(first, Asserter)
        assert default_asserter() is first

    def test_built_lazily_from_settings(
        self, fresh_default: None, isolated_config: Path, sample_config_yaml: str
    ) -> None:
        """Config files written before the first call are picked up."""
        (isolated_config / "vouch.yaml").write_text(sample_config_yaml)
        with pytest.raises(AssertionFailedError) as exc_info:
            default_asserter().assert_equal(1, 2)
        assert exc_info.value.message == "Bad input: wanted 2"

    def test_fresh_instances_are_independent(self, fresh_default: None) -> None:
        default_asserter().messages.value = "Shared: %expected%"
        assert Asserter().messages.value == MSG_ASSERT_VALUE
