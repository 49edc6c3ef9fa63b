"""
Text and JSON renderings of a structural diff.

Line format of render_diff():
    + $.path: new            added
    - $.path: old            removed
    ~ $.path: old -> new     changed
    ! $.path: old -> new (string -> number)   type changed

Values are shown as compact JSON, so every line can be read back without
ambiguity.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable

from jtool.core.compare import DiffEntry, DiffKind, DiffPath, json_kind
from jtool.core.stringify import to_compact_json


ROOT_PATH = "$"

# Keys that can be written after a dot without quoting
PLAIN_KEY_RE = re.compile(r'[^.\[\]"\s]+')

KIND_MARKERS: dict[DiffKind, str] = {
    DiffKind.ADDED: "+",
    DiffKind.REMOVED: "-",
    DiffKind.CHANGED: "~",
    DiffKind.TYPE_CHANGED: "!",
}


def format_segment(segment: str | int) -> str:
    """Format a single path segment.

    Args:
        segment: An object key or an array index.

    Returns:
        ``[i]`` for indices, ``.key`` for plain keys and ``["key"]`` for
        keys that are empty or contain dots, brackets, quotes or
        whitespace.
    """
    if isinstance(segment, int):
        return f"[{segment}]"
    if PLAIN_KEY_RE.fullmatch(segment):
        return f".{segment}"
    return f"[{json.dumps(segment, ensure_ascii=False)}]"


def format_path(path: DiffPath) -> str:
    """Format a diff path for display.

    Args:
        path: Tuple of keys and indices.

    Returns:
        The path rooted at ``$``.

    Examples:
        >>> format_path(())
        '$'
        >>> format_path(("messages", 0, "content"))
        '$.messages[0].content'
        >>> format_path(("a.b",))
        '$["a.b"]'
    """
    return ROOT_PATH + "".join(format_segment(segment) for segment in path)


def format_entry(entry: DiffEntry) -> str:
    """Format one diff entry as a single line."""
    marker = KIND_MARKERS[entry.kind]
    location = format_path(entry.path)

    if entry.kind is DiffKind.ADDED:
        return f"{marker} {location}: {to_compact_json(entry.new_value)}"
    if entry.kind is DiffKind.REMOVED:
        return f"{marker} {location}: {to_compact_json(entry.old_value)}"

    line = (
        f"{marker} {location}: {to_compact_json(entry.old_value)}"
        f" -> {to_compact_json(entry.new_value)}"
    )
    if entry.kind is DiffKind.TYPE_CHANGED:
        line += f" ({json_kind(entry.old_value)} -> {json_kind(entry.new_value)})"
    return line


def render_diff(entries: Iterable[DiffEntry]) -> str:
    """Render a diff as text, one line per entry, in diff order.

    Args:
        entries: Entries as returned by diff() or compare().

    Returns:
        The rendered lines joined by newlines. An empty diff renders as an
        empty string.
    """
    return "\n".join(format_entry(entry) for entry in entries)


def diff_to_records(entries: Iterable[DiffEntry]) -> list[dict[str, Any]]:
    """Convert a diff to JSON-serializable records.

    Each record has ``path`` (list of keys and indices) and ``kind``, plus
    ``old`` and/or ``new`` for whichever sides are present.

    Args:
        entries: Entries as returned by diff() or compare().

    Returns:
        A list of dictionaries, in diff order.
    """
    records: list[dict[str, Any]] = []
    for entry in entries:
        record: dict[str, Any] = {"path": list(entry.path), "kind": entry.kind.value}
        if entry.has_old:
            record["old"] = entry.old_value
        if entry.has_new:
            record["new"] = entry.new_value
        records.append(record)
    return records
