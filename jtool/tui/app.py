"""
Main Textual application for JTool.

Opens the editor screen, or with two files given, compares them directly.

Usage:
    jtool-tui                     Open an empty editor
    jtool-tui doc.json            Open the editor with doc.json loaded
    jtool-tui old.json new.json   Compare two documents side-by-side
"""

import argparse
import os
import sys
from typing import Any

from textual.app import App
from textual.binding import Binding

from jtool.core import JToolError, normalize
from jtool.data_formats import read_text
from jtool.tui.views.comparison_screen import ComparisonScreen
from jtool.tui.views.editor_screen import EditorScreen


class JToolApp(App):
    """A Textual app for parsing, stringifying and comparing JSON."""

    TITLE = "JTool"

    CSS = """
    Screen {
        background: $surface;
    }

    Header {
        dock: top;
        height: 3;
        background: $primary;
        color: $text;
    }

    Footer {
        dock: bottom;
        height: 1;
        background: $primary-darken-2;
    }

    #left-panel, #right-panel {
        width: 50%;
        border: solid $primary;
        padding: 0 1;
    }

    #left-panel {
        border-right: none;
    }

    #left-panel.active, #right-panel.active {
        border: solid $secondary;
    }

    .panel-header {
        dock: top;
        height: 3;
        background: $surface;
        border-bottom: solid $primary;
        text-align: center;
        text-style: bold;
        padding: 1;
    }

    #left-tree, #right-tree {
        height: 1fr;
    }

    /* Tree styling */
    Tree {
        background: $surface;
        padding: 1;
    }

    Tree > .tree--cursor {
        background: $secondary;
    }

    Tree > .tree--guides {
        color: $text-muted;
    }

    Static {
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        initial_text: str = "",
        compare_values: tuple[Any, Any] | None = None,
    ):
        """Initialize the app.

        Args:
            initial_text: Text to preload into the editor.
            compare_values: Normalized (old, new) documents to compare on
                start-up, instead of opening the editor.
        """
        super().__init__()
        self._initial_text = initial_text
        self._compare_values = compare_values

    def on_mount(self) -> None:
        """Push the editor, and the comparison on top of it when requested."""
        self.push_screen(EditorScreen(self._initial_text))
        if self._compare_values is not None:
            old, new = self._compare_values
            self.push_screen(ComparisonScreen(old, new))


def _check_readable(path: str) -> None:
    """Exit with an error when a path cannot be read."""
    if not os.path.exists(path):
        print(f"Error: Path not found: {path}", file=sys.stderr)
        sys.exit(1)

    if not os.access(path, os.R_OK):
        print(f"Error: Permission denied: {path}", file=sys.stderr)
        sys.exit(1)


def main() -> None:
    """Parse arguments and run the application."""
    parser = argparse.ArgumentParser(
        prog="jtool-tui",
        description="Parse, stringify and compare JSON documents in a terminal UI.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="FILE",
        help="One file to open in the editor, or two files (old and new) to compare",
    )
    args = parser.parse_args()

    if len(args.paths) > 2:
        parser.error("expected at most two files")

    for path in args.paths:
        _check_readable(path)

    try:
        texts = [read_text(path) for path in args.paths]
        if len(texts) == 2:
            old, new = (normalize(text.strip()) for text in texts)
            app = JToolApp(compare_values=(old, new))
        else:
            app = JToolApp(initial_text=texts[0] if texts else "")
    except (JToolError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    app.run()


if __name__ == "__main__":
    main()
