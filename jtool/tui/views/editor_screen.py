"""
Editor Screen for running JTool actions on pasted JSON.

The left editor holds the input document and the right editor shows the
result. For Compare, the left editor holds the old document and the right
editor the new one, and submitting opens the comparison screen.
"""

from __future__ import annotations

import json
import re
from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Checkbox, Footer, Header, Input, Select, Static, TextArea

from jtool.core import JToolError, encode_paths, normalize, remove_spaces_str, to_compact_json
from jtool.tui.views.comparison_screen import ComparisonScreen


# (label, value) pairs for the action selector, in display order
EDITOR_ACTIONS: list[tuple[str, str]] = [
    ("Parse", "parse"),
    ("Stringify", "stringify"),
    ("Remove Spaces", "remove_spaces"),
    ("Compare", "compare"),
]

DEFAULT_ACTION = "parse"

# Key paths may be separated by commas and/or whitespace
PATHS_SEPARATOR_RE = re.compile(r"[,\s]+")


def parse_paths_input(text: str) -> list[str]:
    """Split the paths input into dotted key paths.

    Args:
        text: Raw input such as ``"a.b, c"`` or ``"a.b c"``.

    Returns:
        The non-empty paths in input order.

    Examples:
        >>> parse_paths_input("a.b, c  d")
        ['a.b', 'c', 'd']
        >>> parse_paths_input("  ")
        []
    """
    return [path for path in PATHS_SEPARATOR_RE.split(text) if path]


def run_editor_action(action: str, text: str, prettify: bool = False, paths: list[str] | None = None) -> str:
    """Run a single-document editor action on the input text.

    Args:
        action: One of "parse", "stringify" or "remove_spaces".
        text: The input document.
        prettify: Indent the output of "parse".
        paths: Key paths for "stringify".

    Returns:
        The text to show in the output editor.

    Raises:
        JToolError: If the input cannot be normalized or a path cannot be
            stringified.
        ValueError: If the action is unknown.
    """
    text = text.strip()

    if action == "parse":
        value = normalize(text)
        if prettify:
            return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)
        return to_compact_json(value)
    if action == "stringify":
        return encode_paths(normalize(text), paths)
    if action == "remove_spaces":
        return remove_spaces_str(text)

    raise ValueError(f"Unknown editor action: {action}")


class EditorScreen(Screen):
    """Two-editor screen with an action bar.

    Attributes:
        initial_text: Text preloaded into the input editor.
    """

    CSS = """
    EditorScreen {
        layout: vertical;
    }

    #action-bar {
        height: auto;
        padding: 0 1;
    }

    #action-select {
        width: 24;
    }

    #paths-input {
        width: 1fr;
    }

    #editor-container {
        height: 1fr;
    }

    #input-panel, #output-panel {
        width: 50%;
    }

    #input-editor, #output-editor {
        height: 1fr;
    }
    """

    BINDINGS = [
        # Editors consume most keys, so submit must win over them
        Binding("ctrl+s", "submit", "Submit", show=True, priority=True),
        Binding("alt+enter", "submit", "Submit", show=False, priority=True),
        Binding("ctrl+q", "quit", "Quit", show=True, priority=True),
    ]

    def __init__(
        self,
        initial_text: str = "",
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the EditorScreen.

        Args:
            initial_text: Text to preload into the input editor.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self.initial_text = initial_text

    def compose(self) -> ComposeResult:
        """Compose the action bar and the two editors."""
        yield Header()
        with Horizontal(id="action-bar"):
            yield Select(EDITOR_ACTIONS, value=DEFAULT_ACTION, allow_blank=False, id="action-select")
            yield Checkbox("Prettify", id="prettify-checkbox")
            yield Input(placeholder="Paths to stringify, e.g. a.b, c", id="paths-input")
            yield Button("Submit", variant="primary", id="submit-button")
        with Horizontal(id="editor-container"):
            with Vertical(id="input-panel"):
                yield Static("Input", classes="panel-header", id="input-header")
                yield TextArea(self.initial_text, id="input-editor")
            with Vertical(id="output-panel"):
                yield Static("Output", classes="panel-header", id="output-header")
                yield TextArea("", id="output-editor")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#input-editor", TextArea).focus()

    @property
    def selected_action(self) -> str:
        """The currently selected editor action."""
        return str(self.query_one("#action-select", Select).value)

    def on_select_changed(self, event: Select.Changed) -> None:
        """Relabel the editors when switching to or from Compare."""
        comparing = event.value == "compare"
        self.query_one("#input-header", Static).update("Old" if comparing else "Input")
        self.query_one("#output-header", Static).update("New" if comparing else "Output")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "submit-button":
            self.action_submit()

    def action_submit(self) -> None:
        """Run the selected action on the editor contents."""
        input_editor = self.query_one("#input-editor", TextArea)
        output_editor = self.query_one("#output-editor", TextArea)

        if self.selected_action == "compare":
            self._open_comparison(input_editor.text, output_editor.text)
            return

        prettify = self.query_one("#prettify-checkbox", Checkbox).value
        paths = parse_paths_input(self.query_one("#paths-input", Input).value)

        try:
            result = run_editor_action(self.selected_action, input_editor.text, prettify, paths or None)
        except (JToolError, ValueError) as e:
            self.notify(str(e), title="Error", severity="error")
            return

        output_editor.load_text(result)

    def _open_comparison(self, old_text: str, new_text: str) -> None:
        """Normalize both documents and push the comparison screen."""
        try:
            old: Any = normalize(old_text.strip())
            new: Any = normalize(new_text.strip())
        except JToolError as e:
            self.notify(str(e), title="Error", severity="error")
            return

        self.app.push_screen(ComparisonScreen(old, new))

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()
