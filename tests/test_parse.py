"""Tests for recursive de-stringification in jtool.core.parse."""

from __future__ import annotations

import json

import pytest

from jtool.core import (
    ParseError,
    normalize,
    normalize_json,
    normalize_value,
    to_compact_json,
    unescape_quotes,
    unquote,
)


class TestUnquote:
    """Tests for stripping surrounding quotes."""

    def test_strips_both_quotes(self):
        """A quoted text loses exactly one quote on each side."""
        assert unquote('"hello"') == "hello"

    def test_strips_single_layer_only(self):
        """Only one quote is removed from each end."""
        assert unquote('""hello""') == '"hello"'

    def test_strips_leading_or_trailing_alone(self):
        """A lone leading or trailing quote is removed on its own."""
        assert unquote('"hello') == "hello"
        assert unquote('hello"') == "hello"

    def test_unquoted_text_unchanged(self):
        """Text without surrounding quotes is returned as-is."""
        assert unquote('{"a": 1}') == '{"a": 1}'

    def test_inner_quotes_untouched(self):
        """Quotes inside the text are not removed."""
        assert unquote('"say "hi" now"') == 'say "hi" now'


class TestUnescapeQuotes:
    """Tests for collapsing one level of escaped quotes."""

    def test_escaped_quote(self):
        """A backslash-quote becomes a bare quote."""
        assert unescape_quotes(r'{\"a\": 1}') == '{"a": 1}'

    def test_even_backslash_run_is_halved(self):
        """Two backslashes before an escaped quote become one."""
        assert unescape_quotes(r'\\\"') == r'\"'

    def test_longer_run_is_halved(self):
        """Four backslashes before an escaped quote become two."""
        assert unescape_quotes(r'\\\\\"') == r'\\"'

    def test_escaped_backslash_before_quote_untouched(self):
        """An escaped backslash followed by a quote is not an escaped quote."""
        assert unescape_quotes(r'\\"') == r'\\"'

    def test_backslashes_without_quote_untouched(self):
        """Backslash escapes that do not precede a quote are left alone."""
        assert unescape_quotes(r'a\\nb\tc') == r'a\\nb\tc'

    def test_plain_text_untouched(self):
        """Text with no escapes is unchanged."""
        assert unescape_quotes('{"a": 1}') == '{"a": 1}'


class TestNormalize:
    """Tests for normalize()."""

    def test_plain_document(self):
        """A clean document parses to its value."""
        assert normalize('{"a": 1, "b": [true, null]}') == {"a": 1, "b": [True, None]}

    def test_depth_first_unwrap(self):
        """A quoted and escaped document decodes all the way to an object."""
        assert normalize(r'"{\"a\":1}"') == {"a": 1}

    def test_plain_string_preserved(self):
        """A quoted plain string comes back without its quotes."""
        assert normalize('"hello"') == "hello"

    def test_bare_word_preserved(self):
        """Text that is not JSON at all is a plain string."""
        assert normalize("hello world") == "hello world"

    def test_empty_text(self):
        """Empty text is the empty string."""
        assert normalize("") == ""

    def test_nested_string_leaves_decoded(self):
        """String members holding JSON are decoded recursively."""
        text = json.dumps(json.dumps({"a": json.dumps({"b": "[1, 2]"})}))
        assert normalize(text) == {"a": {"b": [1, 2]}}

    def test_string_member_without_quotes_decoded(self):
        """A string member holding a quote-free document is decoded."""
        assert normalize('{"a": "[1, 2]", "b": "{}"}') == {"a": [1, 2], "b": {}}

    def test_escaped_quotes_collapsed_at_top_level(self):
        """Raw text loses one escaping level, even inside its strings."""
        with pytest.raises(ParseError):
            normalize(r'["say \"hi\" now"]')

    def test_triple_stringified(self):
        """A document stringified three times unwraps completely."""
        text = json.dumps(json.dumps(json.dumps({"a": 1})))
        assert normalize(text) == {"a": 1}

    def test_array_elements_normalized_in_order(self):
        """Array elements are each normalized and keep their order."""
        assert normalize('["x", "[1, 2]", 3]') == ["x", [1, 2], 3]

    def test_key_order_preserved(self):
        """Object keys keep their input order."""
        result = normalize('{"z": 1, "a": 2, "m": 3}')
        assert list(result) == ["z", "a", "m"]

    def test_primitives_unchanged(self):
        """Numbers, booleans and null decode to themselves."""
        assert normalize("42") == 42
        assert normalize("1.5") == 1.5
        assert normalize("true") is True
        assert normalize("null") is None

    def test_int_and_float_kept_apart(self):
        """Integers stay int and floats stay float."""
        result = normalize('{"i": 1, "f": 1.0}')
        assert type(result["i"]) is int
        assert type(result["f"]) is float

    def test_leading_whitespace_plain_string(self):
        """Whitespace before a plain word does not make it an error."""
        assert normalize("  hello") == "  hello"

    def test_string_member_plain_text_kept(self):
        """A string member that is not JSON stays a string."""
        assert normalize('{"msg": "not json"}') == {"msg": "not json"}


class TestNormalizeErrors:
    """Tests for malformed input."""

    def test_broken_object_is_error(self):
        """A document with a missing value is an error, not a plain string."""
        with pytest.raises(ParseError):
            normalize('{"a": }')

    def test_trailing_comma_is_error(self):
        """Trailing commas are rejected."""
        with pytest.raises(ParseError):
            normalize("[1, 2,]")

    def test_unbalanced_brackets_is_error(self):
        """Unclosed containers are rejected."""
        with pytest.raises(ParseError):
            normalize('{"a": [1, 2}')

    def test_broken_nested_leaf_is_error(self):
        """A malformed document inside a string member is an error."""
        with pytest.raises(ParseError):
            normalize('{"a": "[1, 2"}')

    def test_error_carries_diagnostic(self):
        """The error message names the decoder diagnostic and position."""
        with pytest.raises(ParseError) as exc_info:
            normalize('{"a": }')

        err = exc_info.value
        assert "Expecting value" in str(err)
        assert err.pos == 6
        assert err.lineno == 1
        assert err.colno == 7
        assert isinstance(err.cause, json.JSONDecodeError)

    def test_error_is_value_error(self):
        """ParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            normalize("[1,")

    def test_nan_inside_document_is_error(self):
        """Non-standard constants are not accepted inside documents."""
        with pytest.raises(ParseError, match="NaN"):
            normalize('{"a": NaN}')

    def test_bare_constant_is_plain_string(self):
        """A bare non-standard constant is treated as text."""
        assert normalize("Infinity") == "Infinity"
        assert normalize('{"a": "NaN"}') == {"a": "NaN"}

    @pytest.mark.parametrize("text", [
        '{"a": 1e400}',
        "-1E999",
        '{"a": "[1, -1e400]"}',
    ])
    def test_number_out_of_range(self, text):
        """Numbers that overflow a float are rejected, not read as infinity."""
        with pytest.raises(ParseError, match="out of range"):
            normalize(text)

    def test_out_of_range_position(self):
        """The error points at the offending number."""
        with pytest.raises(ParseError) as exc_info:
            normalize('{"a": 1e400}')
        assert exc_info.value.pos == 6

    def test_deeply_nested_document(self):
        """Nesting beyond the recursion limit is a parse error."""
        text = "[" * 100000 + "]" * 100000
        with pytest.raises(ParseError, match="nested too deeply"):
            normalize(text)


class TestNormalizeProperties:
    """Property-style tests for normalize()."""

    @pytest.mark.parametrize("text", [
        '{"a": 1, "b": {"c": [1, 2, {"d": "plain words"}]}}',
        r'"{\"a\": \"{\\\"b\\\": 2}\"}"',
        "[1, 2.5, false, null]",
    ])
    def test_idempotent(self, text):
        """Normalizing serialized normalized output changes nothing."""
        once = normalize(text)
        assert normalize(to_compact_json(once)) == once

    @pytest.mark.parametrize("text", [
        "[1, 1.0]",
        "-0.0",
        '{"big": 123456789012345678901234567890}',
        '{"max": 1.7976931348623157e308, "tiny": 5e-324}',
        '{"under": 1e-400}',
        '"[2.50, -0]"',
    ])
    def test_numbers_survive_round_trip(self, text):
        """Serializing and normalizing again keeps every number's text."""
        serialized = to_compact_json(normalize(text))
        assert to_compact_json(normalize(serialized)) == serialized

    def test_round_trip(self, nested_document):
        """A value without JSON-looking strings survives a round trip."""
        assert normalize(json.dumps(nested_document)) == nested_document

    def test_normalize_value_does_not_modify_input(self):
        """normalize_value() builds a new value."""
        value = {"a": ['{"b": 1}']}
        result = normalize_value(value)

        assert result == {"a": [{"b": 1}]}
        assert value == {"a": ['{"b": 1}']}


class TestNormalizeJson:
    """Tests for normalize_json()."""

    def test_escaped_quotes_in_members_survive(self):
        """Escaped quotes inside string members are decoded, not collapsed."""
        assert normalize_json(r'["say \"hi\" now"]') == ['say "hi" now']

    def test_stringified_member_decoded(self):
        """A member holding a stringified document is unwrapped."""
        text = json.dumps({"a": json.dumps({"b": [1, 2]})})
        assert normalize_json(text) == {"a": {"b": [1, 2]}}

    def test_quoted_document_unwrapped(self):
        """A document that is itself a JSON string is unwrapped."""
        assert normalize_json(json.dumps(json.dumps({"a": 1}))) == {"a": 1}

    def test_plain_text_is_error(self):
        """Text that is not JSON is an error rather than a plain string."""
        with pytest.raises(ParseError):
            normalize_json("hello")

    def test_nan_is_error(self):
        """Non-standard constants are rejected."""
        with pytest.raises(ParseError, match="NaN"):
            normalize_json("NaN")

    def test_number_out_of_range(self):
        """Overflowing numbers are rejected."""
        with pytest.raises(ParseError, match="out of range"):
            normalize_json("[1e400]")

    def test_deeply_nested_document(self):
        """Nesting beyond the recursion limit is a parse error."""
        with pytest.raises(ParseError, match="nested too deeply"):
            normalize_json("[" * 100000 + "]" * 100000)
