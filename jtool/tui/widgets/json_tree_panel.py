"""
JSON Tree Panel widget for displaying JSON data in a tree structure.

This module provides a custom Tree widget that renders JSON data with proper
formatting for objects, arrays, and primitive values. It supports
synchronized expansion between two panels and diff highlighting.
"""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.message import Message
from textual.widgets import Tree
from textual.widgets.tree import TreeNode

from jtool.core import DiffPath, format_path
from jtool.tui.widgets.diff_indicator import get_node_diff_style


# Maximum depth for recursive tree operations to prevent stack overflow
MAX_TREE_DEPTH = 100

# Maximum string length to process before truncation (prevents memory issues with huge strings)
MAX_STRING_PROCESS_LENGTH = 10000

# Strings longer than this are truncated in node labels
MAX_LABEL_STRING_LENGTH = 50


def format_primitive(data: Any) -> str:
    """Format a primitive JSON value for a node label.

    Args:
        data: A string, number, boolean or None.

    Returns:
        The value as it would appear in JSON, with long strings truncated.
    """
    if data is None:
        return "null"
    if isinstance(data, bool):
        return "true" if data else "false"
    if isinstance(data, str):
        process_str = data[:MAX_STRING_PROCESS_LENGTH]
        # Escape special characters for display (before truncation for accurate length)
        display_str = (
            process_str.replace('\\', '\\\\')
            .replace('\n', '\\n')
            .replace('\r', '\\r')
            .replace('\t', '\\t')
            .replace('"', '\\"')
        )
        if len(display_str) > MAX_LABEL_STRING_LENGTH:
            display_str = display_str[:MAX_LABEL_STRING_LENGTH - 3] + "..."
        return f'"{display_str}"'
    return str(data)


def make_node_label(key: str | None, data: Any) -> str:
    """Build the label of a tree node.

    Labels follow these formats:
        - Objects: `{} key (N keys)`
        - Arrays: `[] key (N items)`
        - Primitives: `key: value`

    Args:
        key: The display key (``"name"`` or ``[0]``), or None for the root.
        data: The node value.

    Returns:
        The label text.
    """
    prefix = f"{key} " if key is not None else ""

    if isinstance(data, dict):
        count = len(data)
        return f"{{}} {prefix}({count} {'key' if count == 1 else 'keys'})"
    if isinstance(data, list):
        count = len(data)
        return f"[] {prefix}({count} {'item' if count == 1 else 'items'})"
    if key is None:
        return format_primitive(data)
    return f"{key}: {format_primitive(data)}"


class JsonTreePanel(Tree[DiffPath]):
    """
    JSON tree widget with support for synchronized expansion and diff highlighting.

    Every node is addressed by its diff path (a tuple of keys and indices),
    which is also how nodes are matched between the old and new panels.

    Attributes:
        sync_enabled: Whether expansion synchronization is enabled.
        diff_mode: Whether diff highlighting is enabled.
    """

    class NodeToggled(Message):
        """Posted when a node is expanded or collapsed.

        Attributes:
            node_path: The diff path of the node.
            expanded: Whether the node is now expanded.
            panel_id: The ID of the panel that emitted this message.
        """

        def __init__(self, node_path: DiffPath, expanded: bool, panel_id: str) -> None:
            self.node_path = node_path
            self.expanded = expanded
            self.panel_id = panel_id
            super().__init__()

    class NodeInspected(Message):
        """Posted when the full value of a node is requested.

        Kept apart from Tree.NodeSelected, which fires on every cursor
        selection.

        Attributes:
            node_path: The formatted path of the node (e.g. "$.messages[0]").
            node_key: The key name (e.g., "content", "[0]").
            node_value: The FULL original value (untruncated).
            panel_id: The ID of the panel that emitted this message.
            diff_kind: The node's diff type, or None when it is unchanged.
        """

        def __init__(
            self,
            node_path: str,
            node_key: str,
            node_value: Any,
            panel_id: str,
            diff_kind: str | None = None,
        ) -> None:
            self.node_path = node_path
            self.node_key = node_key
            self.node_value = node_value
            self.panel_id = panel_id
            self.diff_kind = diff_kind
            super().__init__()

    def __init__(
        self,
        label: str = "root",
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        """
        Initialize the JSON tree panel.

        Args:
            label: The label for the root node.
            id: The widget ID.
            classes: CSS classes for the widget.
        """
        super().__init__(label, id=id, classes=classes)
        self.sync_enabled: bool = True
        self.diff_mode: bool = False
        self._diff_map: dict[str, str] = {}
        self._nodes_by_path: dict[DiffPath, TreeNode[DiffPath]] = {}
        self._paths_by_id: dict[int, DiffPath] = {}
        self._node_data: dict[DiffPath, Any] = {}
        self._base_labels: dict[DiffPath, str] = {}

    def load_json(self, data: Any, label: str = "root") -> None:
        """
        Load JSON data into the tree.

        Clears the existing tree and populates it with the provided JSON
        data. The root node stands for the whole value.

        Args:
            data: The JSON value to display.
            label: The label for the root node.
        """
        self.clear()
        self._nodes_by_path.clear()
        self._paths_by_id.clear()
        self._node_data.clear()
        self._base_labels.clear()

        root_label = f"{label} {make_node_label(None, data)}"
        self.root.set_label(Text(root_label))
        self._register(self.root, (), data, root_label)
        self._add_children(self.root, data, (), depth=0)
        self.root.expand()

        if self.diff_mode:
            self.apply_diff_highlighting()

    def _register(self, node: TreeNode[DiffPath], path: DiffPath, data: Any, label: str) -> None:
        self._nodes_by_path[path] = node
        self._paths_by_id[node.id] = path
        self._node_data[path] = data
        self._base_labels[path] = label

    def _add_children(self, node: TreeNode[DiffPath], data: Any, path: DiffPath, depth: int) -> None:
        """Add the members of an object or the items of an array under a node.

        Args:
            node: The tree node standing for ``data``.
            data: The JSON value.
            path: The diff path of ``data``.
            depth: Current recursion depth (used to prevent stack overflow).
        """
        if isinstance(data, dict):
            for key, value in data.items():
                self._add_json_node(node, f'"{key}"', value, path + (key,), depth + 1)
        elif isinstance(data, list):
            for idx, item in enumerate(data):
                self._add_json_node(node, f"[{idx}]", item, path + (idx,), depth + 1)

    def _add_json_node(
        self,
        parent: TreeNode[DiffPath],
        key: str,
        data: Any,
        path: DiffPath,
        depth: int,
    ) -> None:
        if depth >= MAX_TREE_DEPTH:
            # Add a placeholder node indicating truncation
            parent.add_leaf(f"... (depth limit {MAX_TREE_DEPTH} reached)")
            return

        label = make_node_label(key, data)
        if isinstance(data, (dict, list)):
            child = parent.add(Text(label), data=path, allow_expand=True)
            self._register(child, path, data, label)
            self._add_children(child, data, path, depth)
        else:
            child = parent.add_leaf(Text(label), data=path)
            self._register(child, path, data, label)

    def set_diff_map(self, diff_map: dict[str, str]) -> None:
        """Set the diff map and apply highlighting to nodes.

        Args:
            diff_map: A dictionary mapping formatted paths to diff types.
        """
        self._diff_map = diff_map
        if self.diff_mode:
            self.apply_diff_highlighting()

    def apply_diff_highlighting(self) -> None:
        """Color every node label according to the diff map."""
        for path, node in self._nodes_by_path.items():
            base_label = self._base_labels[path]
            style = get_node_diff_style(format_path(path), self._diff_map) if self.diff_mode else None
            node.set_label(Text(base_label, style=style or ""))

    def clear_diff_highlighting(self) -> None:
        """Restore the plain labels of all nodes."""
        for path, node in self._nodes_by_path.items():
            node.set_label(Text(self._base_labels[path]))

    def node_at_path(self, path: DiffPath) -> TreeNode[DiffPath] | None:
        """Return the node displaying the given diff path, if any."""
        return self._nodes_by_path.get(path)

    def on_tree_node_expanded(self, event: Tree.NodeExpanded) -> None:
        """Announce expansion so a paired panel can follow."""
        self._post_toggle(event.node, expanded=True)

    def on_tree_node_collapsed(self, event: Tree.NodeCollapsed) -> None:
        """Announce collapse so a paired panel can follow."""
        self._post_toggle(event.node, expanded=False)

    def _post_toggle(self, node: TreeNode[DiffPath], expanded: bool) -> None:
        path = self._paths_by_id.get(node.id)
        if self.sync_enabled and self.id and path is not None:
            self.post_message(self.NodeToggled(path, expanded, self.id))

    def sync_node_toggle(self, node_path: DiffPath, expanded: bool) -> None:
        """Synchronize node expansion state from another panel.

        Nodes already in the requested state are left alone, which keeps
        two synchronized panels from echoing each other's messages forever.

        Args:
            node_path: The diff path of the node to toggle.
            expanded: Whether the node should be expanded.
        """
        if not self.sync_enabled:
            return

        node = self.node_at_path(node_path)
        if node is None or node.is_expanded == expanded:
            return

        if expanded:
            node.expand()
        else:
            node.collapse()

    def get_node_data(self, node: TreeNode[DiffPath]) -> tuple[str, Any]:
        """Get the key and original value for a node.

        Args:
            node: The tree node to get data for.

        Returns:
            A tuple of (key, value) where key is the last path segment
            (``[i]`` for array items) and value is the original untruncated
            data.
        """
        path = self._paths_by_id.get(node.id)
        if path is None:
            return (str(node.label), None)

        value = self._node_data.get(path)
        if not path:
            return (str(self.root.label), value)

        last = path[-1]
        key = f"[{last}]" if isinstance(last, int) else last
        return (key, value)

    def emit_node_inspected(self) -> None:
        """Emit a NodeInspected message for the current cursor node."""
        node = self.cursor_node
        if node is None or not self.id:
            return

        path = self._paths_by_id.get(node.id)
        if path is None:
            return

        key, value = self.get_node_data(node)
        display_path = format_path(path)
        self.post_message(
            self.NodeInspected(
                node_path=display_path,
                node_key=key,
                node_value=value,
                panel_id=self.id,
                diff_kind=self._diff_map.get(display_path),
            )
        )
