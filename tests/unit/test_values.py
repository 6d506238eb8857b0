"""Unit tests for the shared value model."""

from __future__ import annotations

import re
from collections import OrderedDict

import pytest

from vouch.exceptions import InvalidPatternError
from vouch.values import (
    UNDEFINED,
    Pattern,
    bare_text,
    format_value,
    is_integral,
    is_nan,
    is_number,
    length_of,
    ordered,
    strict_equal,
    type_tag,
)


def _helper() -> None:
    pass


class TestUndefined:
    """Test the absent-value marker."""

    def test_falsy_and_distinct_from_none(self) -> None:
        assert not UNDEFINED
        assert UNDEFINED is not None
        assert repr(UNDEFINED) == "UNDEFINED"


class TestTypeTag:
    """Test type classification."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (UNDEFINED, "undefined"),
            (None, "null"),
            (True, "boolean"),
            (0, "number"),
            (4.5, "number"),
            ("", "string"),
            ([], "array"),
            ((1, 2), "array"),
            ({}, "object"),
            (OrderedDict(), "object"),
            (_helper, "function"),
            (object(), "object"),
        ],
    )
    def test_tags(self, value: object, expected: str) -> None:
        assert type_tag(value) == expected


class TestNumbers:
    """Test number helpers."""

    def test_booleans_are_not_numbers(self) -> None:
        assert is_number(1) is True
        assert is_number(True) is False
        assert is_number("1") is False

    def test_is_integral(self) -> None:
        assert is_integral(3) is True
        assert is_integral(3.0) is True
        assert is_integral(3.5) is False
        assert is_integral(float("inf")) is False
        assert is_integral(True) is False


class TestComparisons:
    """Test strict_equal and ordered."""

    def test_strict_equal(self) -> None:
        assert strict_equal(1, 1.0) is True
        assert strict_equal(1, True) is False
        assert strict_equal([1, "a"], (1, "a")) is True
        assert strict_equal({"a": [1]}, {"a": [1]}) is True
        assert strict_equal({"a": 1}, {"a": 1, "b": 2}) is False
        assert strict_equal(None, UNDEFINED) is False
        assert strict_equal(UNDEFINED, UNDEFINED) is True

    def test_ordered(self) -> None:
        assert ordered(1, 2.5) is True
        assert ordered("a", "b") is True
        assert ordered("a", 1) is False
        assert ordered(float("nan"), 1) is False
        assert ordered(True, 1) is False
        assert ordered(10**400, 1.5) is True

    def test_is_nan_only_converts_floats(self) -> None:
        assert is_nan(float("nan")) is True
        assert is_nan(1.5) is False
        assert is_nan(10**400) is False
        assert is_nan("nan") is False

    def test_length_of(self) -> None:
        assert length_of("abc") == 3
        assert length_of([1, 2]) == 2
        assert length_of({"a": 1}) is UNDEFINED
        assert length_of(42) is UNDEFINED


class TestFormatting:
    """Test format_value and bare_text."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (UNDEFINED, "undefined"),
            (None, "null"),
            (False, "false"),
            (42, "42"),
            (42.42, "42.42"),
            ("1234", '"1234"'),
            ('say "hi"', '"say \\"hi\\""'),
            ([1, [2, "x"]], '[1,[2,"x"]]'),
            ({"a": None, "b": True}, '{"a":null,"b":true}'),
            (_helper, "<function _helper>"),
        ],
    )
    def test_format_value(self, value: object, expected: str) -> None:
        assert format_value(value) == expected

    def test_bare_text_leaves_strings_unquoted(self) -> None:
        assert bare_text("abc") == "abc"
        assert bare_text(12) == "12"
        assert bare_text([1]) == "[1]"


class TestPattern:
    """Test the Pattern reference type."""

    def test_literal_pattern(self) -> None:
        pattern = Pattern.coerce("^[a-f]+$")
        assert pattern.is_compiled is False
        assert str(pattern) == '"^[a-f]+$"'
        assert pattern.regex().search("abc")

    def test_compiled_pattern_keeps_flags(self) -> None:
        pattern = Pattern.coerce(re.compile("^abc$", re.IGNORECASE | re.DOTALL))
        assert pattern == Pattern.compiled("^abc$", "is")
        assert str(pattern) == "/^abc$/is"
        assert pattern.regex().search("ABC")

    def test_coerce_is_idempotent(self) -> None:
        pattern = Pattern.literal("a")
        assert Pattern.coerce(pattern) is pattern

    def test_invalid_references(self) -> None:
        with pytest.raises(InvalidPatternError):
            Pattern.coerce(42)
        with pytest.raises(InvalidPatternError):
            Pattern.coerce(re.compile(b"abc"))

    def test_invalid_regex(self) -> None:
        with pytest.raises(InvalidPatternError) as exc_info:
            Pattern.literal("(unclosed").regex()
        assert exc_info.value.pattern == "(unclosed"

    def test_unknown_flag_letter(self) -> None:
        with pytest.raises(InvalidPatternError, match="unknown flag 'q'"):
            Pattern.compiled("abc", "q").regex()

    def test_literal_pattern_text_is_not_escaped(self) -> None:
        """Backslashes and quotes appear as written."""
        assert str(Pattern.literal(r"^\d+$")) == r'"^\d+$"'
        assert str(Pattern.literal('say "hi"')) == '"say "hi""'
