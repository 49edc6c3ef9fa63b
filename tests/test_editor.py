"""Tests for the editor actions and tree labels of the TUI."""

from __future__ import annotations

import json

import pytest

from jtool.core import EncodeError, ParseError
from jtool.tui.views.editor_screen import DEFAULT_ACTION, EDITOR_ACTIONS, parse_paths_input, run_editor_action
from jtool.tui.widgets.field_detail_modal import format_detail_value
from jtool.tui.widgets.json_tree_panel import MAX_LABEL_STRING_LENGTH, format_primitive, make_node_label


class TestParsePathsInput:
    """Tests for parse_paths_input()."""

    @pytest.mark.parametrize("text, expected", [
        ("a.b", ["a.b"]),
        ("a.b, c", ["a.b", "c"]),
        ("a.b c\nd", ["a.b", "c", "d"]),
        (" ,a,, b ", ["a", "b"]),
        ("", []),
    ])
    def test_split(self, text, expected):
        """Commas and whitespace both separate paths."""
        assert parse_paths_input(text) == expected


class TestRunEditorAction:
    """Tests for run_editor_action()."""

    def test_actions_listed(self):
        """The default action is one of the selectable actions."""
        assert DEFAULT_ACTION in [value for _, value in EDITOR_ACTIONS]
        assert "compare" in [value for _, value in EDITOR_ACTIONS]

    def test_parse(self):
        """Parse unwraps stringified input compactly."""
        assert run_editor_action("parse", '  "{\\"a\\": \\"[1, 2]\\"}"\n') == '{"a":[1,2]}'

    def test_parse_prettified(self):
        """Parse indents when prettify is set."""
        assert run_editor_action("parse", '{"a": 1}', prettify=True) == '{\n  "a": 1\n}'

    def test_stringify(self):
        """Stringify encodes the requested paths."""
        result = run_editor_action("stringify", '{"a": {"b": 1}}', paths=["a"])
        assert json.loads(result) == {"a": '{"b":1}'}

    def test_stringify_without_paths(self):
        """Stringify with no paths gives compact output."""
        assert run_editor_action("stringify", '{ "a" : 1 }') == '{"a":1}'

    def test_stringify_missing_path(self):
        """A missing path is an encode error."""
        with pytest.raises(EncodeError):
            run_editor_action("stringify", '{"a": 1}', paths=["b"])

    def test_remove_spaces(self):
        """Remove Spaces compacts the input."""
        assert run_editor_action("remove_spaces", '[1,\n 2]') == "[1,2]"

    def test_malformed_input(self):
        """Malformed input is a parse error."""
        with pytest.raises(ParseError):
            run_editor_action("parse", '{"a": }')

    def test_unknown_action(self):
        """Compare is not a single-document action."""
        with pytest.raises(ValueError, match="Unknown editor action"):
            run_editor_action("compare", "{}")


class TestNodeLabels:
    """Tests for tree node labels."""

    @pytest.mark.parametrize("data, expected", [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (1.5, "1.5"),
        ("hi", '"hi"'),
        ('a "q"\n', r'"a \"q\"\n"'),
    ])
    def test_format_primitive(self, data, expected):
        """Primitives render as they would in JSON."""
        assert format_primitive(data) == expected

    def test_long_string_truncated(self):
        """Long strings are cut with an ellipsis."""
        label = format_primitive("x" * 200)
        assert label.endswith('..."')
        assert len(label) == MAX_LABEL_STRING_LENGTH + 2

    def test_object_label(self):
        """Objects show their key count."""
        assert make_node_label("meta", {"a": 1, "b": 2}) == "{} meta (2 keys)"
        assert make_node_label("meta", {"a": 1}) == "{} meta (1 key)"

    def test_array_label(self):
        """Arrays show their item count."""
        assert make_node_label("[0]", [1, 2, 3]) == "[] [0] (3 items)"

    def test_primitive_label(self):
        """Primitives show key and value."""
        assert make_node_label("name", "ops") == 'name: "ops"'

    def test_root_label(self):
        """The root label has no key."""
        assert make_node_label(None, {}) == "{} (0 keys)"
        assert make_node_label(None, 5) == "5"


class TestFormatDetailValue:
    """Tests for the field detail modal text."""

    def test_string_shown_raw(self):
        """Strings are shown without quotes."""
        assert format_detail_value("line 1\nline 2") == "line 1\nline 2"

    def test_container_indented(self):
        """Objects and arrays are indented JSON."""
        assert format_detail_value({"a": [1]}) == json.dumps({"a": [1]}, indent=2, ensure_ascii=False)

    def test_primitive_as_json(self):
        """Other values use their JSON text."""
        assert format_detail_value(None) == "null"
        assert format_detail_value(False) == "false"
