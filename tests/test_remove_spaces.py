"""Tests for compaction helpers in jtool.core.remove_spaces."""

from __future__ import annotations

import pytest

from jtool.core import ParseError, remove_spaces_str, remove_spaces_value


class TestRemoveSpacesStr:
    """Tests for remove_spaces_str()."""

    def test_whitespace_removed(self):
        """Insignificant whitespace and newlines are dropped."""
        text = '{\n  "a" : [1,  2],\n  "b": { "c": null }\n}'
        assert remove_spaces_str(text) == '{"a":[1,2],"b":{"c":null}}'

    def test_whitespace_inside_strings_kept(self):
        """Spaces inside string values are significant."""
        assert remove_spaces_str('{"a": "x  y"}') == '{"a":"x  y"}'

    def test_stringified_input_unwrapped(self):
        """Stringified input is normalized before compaction."""
        assert remove_spaces_str(r'"{\"a\": \"[1, 2]\"}"') == '{"a":[1,2]}'

    def test_malformed_input(self):
        """Malformed input is a parse error."""
        with pytest.raises(ParseError):
            remove_spaces_str("[1, 2")


class TestRemoveSpacesValue:
    """Tests for remove_spaces_value()."""

    def test_structure_unchanged(self):
        """A plain value comes back equal."""
        value = {"a": [1, 2.5, True, None], "b": {"c": "text"}}
        assert remove_spaces_value(value) == value

    def test_stringified_leaves_decoded(self):
        """String leaves holding JSON are decoded."""
        assert remove_spaces_value({"a": "[1, 2]"}) == {"a": [1, 2]}
