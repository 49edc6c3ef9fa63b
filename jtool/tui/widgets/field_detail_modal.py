"""
Modal screen for reading a value in full.

Tree labels truncate long strings and collapse containers to a count, so
the comparison screen opens this modal for the node under the cursor. The
header names the panel, the node's path and, when the node differs between
the two documents, how it differs. The same modal shows the rendered text
diff, which has no path.
"""

from __future__ import annotations

import json
from typing import Any

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from jtool.tui.widgets.diff_indicator import DIFF_STYLES


# Header wording per diff type
DIFF_KIND_LABELS = {
    "added": "added in new",
    "removed": "removed from old",
    "changed": "value changed",
    "type_changed": "type changed",
}


def format_detail_value(value: Any) -> str:
    """Format a node value for the detail view.

    Strings are shown as-is so embedded newlines render; objects and arrays
    are pretty-printed as JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False)
    return json.dumps(value)


def describe_field(panel_label: str, field_path: str | None = None, diff_kind: str | None = None) -> Text:
    """Build the modal header.

    Args:
        panel_label: Which view the value comes from, e.g. "Old" or "Diff".
        field_path: The formatted path of the node, if it is a node.
        diff_kind: The node's diff type, or None when it is unchanged.

    Returns:
        Styled header text, e.g. ``Old  $.a.b  (value changed)``.
    """
    header = Text(panel_label, style="bold")
    if field_path is not None:
        header.append(f"  {field_path}")
    if diff_kind is not None:
        header.append(
            f"  ({DIFF_KIND_LABELS.get(diff_kind, diff_kind)})",
            style=DIFF_STYLES.get(diff_kind, ""),
        )
    return header


class FieldDetailModal(ModalScreen[None]):
    """Full, scrollable view of one value."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("enter", "close", "Close"),
    ]

    CSS = """
    FieldDetailModal {
        align: center middle;
    }

    #detail-dialog {
        width: 80%;
        height: 80%;
        border: thick $primary;
        background: $surface;
    }

    #detail-header {
        padding: 0 1;
        background: $primary-darken-1;
    }

    #detail-body {
        padding: 1 2;
    }
    """

    def __init__(
        self,
        field_value: Any,
        panel_label: str,
        field_path: str | None = None,
        diff_kind: str | None = None,
    ) -> None:
        """
        Args:
            field_value: The full value, or preformatted text to show.
            panel_label: Header text naming the source, e.g. "Old" or "Diff".
            field_path: The formatted path of the node (e.g. ``$.a[0]``).
            diff_kind: The node's diff type from the diff map, if any.
        """
        super().__init__()
        self.field_value = field_value
        self.panel_label = panel_label
        self.field_path = field_path
        self.diff_kind = diff_kind

    @property
    def header_text(self) -> Text:
        return describe_field(self.panel_label, self.field_path, self.diff_kind)

    def compose(self) -> ComposeResult:
        with Vertical(id="detail-dialog"):
            yield Static(self.header_text, id="detail-header")
            with VerticalScroll(id="detail-body"):
                # JSON brackets are not Rich markup
                yield Static(format_detail_value(self.field_value), markup=False, id="detail-value")

    def action_close(self) -> None:
        self.dismiss(None)
