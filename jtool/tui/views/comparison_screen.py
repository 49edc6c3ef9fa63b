"""
Comparison Screen for side-by-side JSON comparison.

Displays the old document alongside the new one in a split-screen view
with synchronized expansion and diff highlighting.
"""

from __future__ import annotations

from typing import Any

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static
from textual.widgets.tree import TreeNode

from jtool.core import DiffEntry, diff, render_diff
from jtool.tui.mixins import DualPaneMixin, VimNavigationMixin
from jtool.tui.widgets import FieldDetailModal, build_diff_map, format_diff_summary, get_diff_summary
from jtool.tui.widgets.json_tree_panel import MAX_TREE_DEPTH, JsonTreePanel


class ComparisonScreen(DualPaneMixin, VimNavigationMixin, Screen):
    """Side-by-side JSON comparison view.

    The old document is shown on the left and the new one on the right.
    Diff highlighting starts enabled.
    """

    CSS = """
    ComparisonScreen {
        layout: vertical;
    }

    #diff-summary {
        height: auto;
        padding: 0 1;
        background: $surface-darken-1;
        text-style: bold;
    }

    #comparison-container {
        height: 1fr;
    }
    """

    # All dual-pane bindings plus screen-specific bindings
    BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [
        Binding("s", "toggle_sync", "Sync"),
        Binding("d", "toggle_diff", "Show Diff"),
        Binding("e", "expand_all", "Expand All"),
        Binding("c", "collapse_all", "Collapse All"),
        Binding("t", "show_diff_text", "Diff Text"),
    ]

    def __init__(
        self,
        old: Any,
        new: Any,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """Initialize the ComparisonScreen.

        Args:
            old: The normalized old document.
            new: The normalized new document.
            name: Optional name for the screen.
            id: Optional ID for the screen.
            classes: Optional CSS classes for the screen.
        """
        super().__init__(name=name, id=id, classes=classes)
        self._old = old
        self._new = new
        self._entries: list[DiffEntry] = diff(old, new)
        self._diff_map: dict[str, str] = build_diff_map(self._entries)
        self._sync_enabled: bool = True
        self._diff_enabled: bool = True

    def compose(self) -> ComposeResult:
        """Compose the screen layout with side-by-side panels."""
        yield Header()
        yield Static(format_diff_summary(get_diff_summary(self._entries)), id="diff-summary")
        with Horizontal(id="comparison-container"):
            with Vertical(id="left-panel", classes="active"):
                yield Static("Old", classes="panel-header")
                yield JsonTreePanel(label="old", id="left-tree")
            with Vertical(id="right-panel", classes="inactive"):
                yield Static("New", classes="panel-header")
                yield JsonTreePanel(label="new", id="right-tree")
        yield Footer()

    def on_mount(self) -> None:
        """Load both documents into the trees."""
        self.title = "Compare"

        for tree, value, label in self._trees_with_values():
            tree.diff_mode = self._diff_enabled
            tree.set_diff_map(self._diff_map)
            tree.load_json(value, label=label)

        self.query_one("#left-tree", JsonTreePanel).focus()
        self._update_panel_styles()

    def _trees(self) -> tuple[JsonTreePanel, JsonTreePanel]:
        return (
            self.query_one("#left-tree", JsonTreePanel),
            self.query_one("#right-tree", JsonTreePanel),
        )

    def _trees_with_values(self) -> list[tuple[JsonTreePanel, Any, str]]:
        left_tree, right_tree = self._trees()
        return [(left_tree, self._old, "old"), (right_tree, self._new, "new")]

    def action_toggle_sync(self) -> None:
        """Toggle synchronized expansion between panels."""
        self._sync_enabled = not self._sync_enabled
        for tree in self._trees():
            tree.sync_enabled = self._sync_enabled

        status = "enabled" if self._sync_enabled else "disabled"
        self.notify(f"Sync {status}")

    def action_toggle_diff(self) -> None:
        """Toggle diff highlighting."""
        self._diff_enabled = not self._diff_enabled

        for tree in self._trees():
            tree.diff_mode = self._diff_enabled
            if self._diff_enabled:
                tree.apply_diff_highlighting()
            else:
                tree.clear_diff_highlighting()

        status = "enabled" if self._diff_enabled else "disabled"
        self.notify(f"Diff highlighting {status}")

    def action_expand_all(self) -> None:
        """Expand all nodes in both trees."""
        for tree in self._trees():
            self._expand_all_nodes(tree.root)

        self.notify("Expanded all nodes")

    def action_collapse_all(self) -> None:
        """Collapse all nodes in both trees."""
        for tree in self._trees():
            self._collapse_all_nodes(tree.root)

        self.notify("Collapsed all nodes")

    def action_show_diff_text(self) -> None:
        """Show the textual diff in a modal."""
        text = render_diff(self._entries) if self._entries else "No differences"
        self.app.push_screen(FieldDetailModal(field_value=text, panel_label="Diff"))

    def _expand_all_nodes(self, node: TreeNode, depth: int = 0) -> None:
        """Recursively expand all nodes starting from the given node.

        Args:
            node: The tree node to expand.
            depth: Current recursion depth (used to prevent stack overflow).
        """
        if depth >= MAX_TREE_DEPTH:
            return

        if node.allow_expand:
            node.expand()
        for child in node.children:
            self._expand_all_nodes(child, depth + 1)

    def _collapse_all_nodes(self, node: TreeNode, depth: int = 0) -> None:
        """Recursively collapse all nodes below the root.

        Args:
            node: The tree node to collapse.
            depth: Current recursion depth (used to prevent stack overflow).
        """
        if depth >= MAX_TREE_DEPTH:
            return

        for child in node.children:
            self._collapse_all_nodes(child, depth + 1)
        if not node.is_root and node.allow_expand:
            node.collapse()

    def on_json_tree_panel_node_toggled(self, message: JsonTreePanel.NodeToggled) -> None:
        """Mirror an expand/collapse onto the other panel.

        Args:
            message: The NodeToggled message from a JsonTreePanel.
        """
        if not self._sync_enabled:
            return

        left_tree, right_tree = self._trees()
        if message.panel_id == "left-tree":
            right_tree.sync_node_toggle(message.node_path, message.expanded)
        elif message.panel_id == "right-tree":
            left_tree.sync_node_toggle(message.node_path, message.expanded)

    @property
    def entries(self) -> list[DiffEntry]:
        """Get the diff entries between the two documents."""
        return self._entries

    @property
    def diff_map(self) -> dict[str, str]:
        """Get the display-path to diff-type mapping."""
        return self._diff_map

    @property
    def sync_enabled(self) -> bool:
        """Check if expansion sync is enabled."""
        return self._sync_enabled

    @property
    def diff_enabled(self) -> bool:
        """Check if diff highlighting is enabled."""
        return self._diff_enabled
