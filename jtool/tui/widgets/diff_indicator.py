"""
Diff Indicator utilities for highlighting structural differences.

This module turns the entries produced by jtool.core.diff() into a flat
mapping from display paths (as produced by format_path()) to diff types,
which the tree panels use to color their nodes.

Diff Types:
    - unchanged: Not mentioned by any entry
    - added: Exists in the new document only
    - removed: Exists in the old document only
    - changed: Same kind of primitive with a different value
    - type_changed: The value changed its JSON kind
"""

from __future__ import annotations

from typing import Any, Iterable

from jtool.core import DiffEntry, DiffKind, DiffPath, format_path


# Maximum recursion depth when marking nested nodes of a subtree
MAX_DIFF_DEPTH = 100

# Rich styles used to color tree node labels per diff type
DIFF_STYLES: dict[str, str] = {
    "added": "bold green",
    "removed": "bold red",
    "changed": "bold yellow",
    "type_changed": "bold magenta",
}


def _mark_subtree(
    value: Any,
    path: DiffPath,
    diff_type: str,
    diff_map: dict[str, str],
    depth: int = 0,
) -> None:
    """Mark a node and all of its nested nodes with one diff type.

    Args:
        value: The subtree value.
        path: The path of the subtree root.
        diff_type: The diff type to record.
        diff_map: The diff map to populate.
        depth: Current recursion depth.
    """
    diff_map[format_path(path)] = diff_type

    if depth >= MAX_DIFF_DEPTH:
        return  # Stop recursion at max depth

    if isinstance(value, dict):
        for key, nested_value in value.items():
            _mark_subtree(nested_value, path + (key,), diff_type, diff_map, depth + 1)
    elif isinstance(value, list):
        for idx, item in enumerate(value):
            _mark_subtree(item, path + (idx,), diff_type, diff_map, depth + 1)


def build_diff_map(entries: Iterable[DiffEntry]) -> dict[str, str]:
    """Build a display-path to diff-type mapping from diff entries.

    Added and removed subtrees are marked down to their leaves so that
    every node of the subtree is highlighted, not just its root. For a
    type change both the old and the new subtree are marked.

    Args:
        entries: Entries as returned by jtool.core.diff().

    Returns:
        A dictionary mapping formatted paths (e.g. ``$.messages[1].content``)
        to diff types.

    Examples:
        >>> from jtool.core import diff
        >>> build_diff_map(diff({"a": 1}, {"a": 2, "b": [3]}))
        {'$.b': 'added', '$.b[0]': 'added', '$.a': 'changed'}
    """
    diff_map: dict[str, str] = {}

    for entry in entries:
        if entry.kind is DiffKind.ADDED:
            _mark_subtree(entry.new_value, entry.path, "added", diff_map)
        elif entry.kind is DiffKind.REMOVED:
            _mark_subtree(entry.old_value, entry.path, "removed", diff_map)
        elif entry.kind is DiffKind.TYPE_CHANGED:
            _mark_subtree(entry.old_value, entry.path, "type_changed", diff_map)
            _mark_subtree(entry.new_value, entry.path, "type_changed", diff_map)
        else:
            diff_map[format_path(entry.path)] = "changed"

    return diff_map


def get_node_diff_style(path: str, diff_map: dict[str, str]) -> str | None:
    """Return the label style for a node based on its diff status.

    Args:
        path: The formatted path of the node.
        diff_map: The diff map from build_diff_map().

    Returns:
        A Rich style string, or None for unchanged nodes.
    """
    diff_type = diff_map.get(path)
    if diff_type is None:
        return None
    return DIFF_STYLES.get(diff_type)


def get_diff_summary(entries: Iterable[DiffEntry]) -> dict[str, int]:
    """Count diff entries by kind.

    Args:
        entries: Entries as returned by jtool.core.diff().

    Returns:
        A dictionary with a count for every diff kind.

    Examples:
        >>> from jtool.core import diff
        >>> get_diff_summary(diff({"a": 1}, {"b": 1}))
        {'added': 1, 'removed': 1, 'changed': 0, 'type_changed': 0}
    """
    summary = {kind.value: 0 for kind in DiffKind}

    for entry in entries:
        summary[entry.kind.value] += 1

    return summary


def format_diff_summary(summary: dict[str, int]) -> str:
    """Format a diff summary as a one-line status text."""
    total = sum(summary.values())
    if total == 0:
        return "No differences"

    noun = "difference" if total == 1 else "differences"
    return (
        f"{total} {noun}: "
        f"+{summary['added']} added, "
        f"-{summary['removed']} removed, "
        f"~{summary['changed']} changed, "
        f"!{summary['type_changed']} type changed"
    )
