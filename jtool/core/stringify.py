r"""
Path-targeted re-stringification of JSON values.

encode_paths() is the inverse of one level of normalization: the subtree
found at each dotted key path is replaced by its compact JSON text, and the
whole value is then serialized compactly.

Usage:
    from jtool.core import encode_paths

    encode_paths({"a": "b", "c": {"d": "e"}}, ["c"])
    # '{"a":"b","c":"{\"d\":\"e\"}"}'
"""

from __future__ import annotations

import copy
import json
from typing import Any, Iterable

from jtool.core.errors import EncodeError


PATH_SEPARATOR = "."


def to_compact_json(value: Any) -> str:
    """Serialize a value as JSON with no insignificant whitespace.

    Raises:
        ValueError: If the value holds NaN or an infinity.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def sort_by_period_count(paths: Iterable[str]) -> list[str]:
    """Order key paths deepest first.

    Paths are sorted by descending number of separators. The sort is
    stable, so paths of equal depth keep their given order.

    Args:
        paths: Dotted key paths.

    Returns:
        A new list with the deepest paths first.

    Examples:
        >>> sort_by_period_count(["a.c", "a.b.c.d", "a", "b.c.d"])
        ['a.b.c.d', 'b.c.d', 'a.c', 'a']
    """
    return sorted(paths, key=lambda path: path.count(PATH_SEPARATOR), reverse=True)


def _encode_at(value: Any, path: str) -> None:
    """Replace the subtree at ``path`` with its compact JSON text, in place.

    Args:
        value: The working copy to modify.
        path: The dotted key path to encode.

    Raises:
        EncodeError: If a segment is missing or a non-object is met where an
            object is required.
    """
    *parents, last = path.split(PATH_SEPARATOR)

    current = value
    for segment in parents:
        if not isinstance(current, dict):
            raise EncodeError(path, f"cannot descend into {type(current).__name__} at '{segment}'")
        if segment not in current:
            raise EncodeError(path, f"key '{segment}' not found")
        current = current[segment]

    if not isinstance(current, dict):
        raise EncodeError(path, f"parent of '{last}' is not an object (got {type(current).__name__})")
    if last not in current:
        raise EncodeError(path, f"key '{last}' not found")

    current[last] = to_compact_json(current[last])


def encode_paths(value: Any, paths: Iterable[str] | None = None) -> str:
    r"""Serialize a value, stringifying the subtrees at the given key paths.

    Paths are applied deepest first so that a shallow path never turns a
    deeper target into text before that target has been encoded. The
    value passed in is never modified: all edits happen on a deep copy, and
    the first failing path aborts the whole call.

    Args:
        value: A JSON-compatible Python value.
        paths: Dotted key paths (e.g. ``"a.b.c"``). None or an empty
            sequence serializes the value as-is.

    Returns:
        The compact JSON text of the (partially re-stringified) value.

    Raises:
        EncodeError: If any path does not exist or passes through a value
            that is not an object.

    Examples:
        >>> encode_paths({"a": {"b": 1}, "x": 2}, ["a"])
        '{"a":"{\\"b\\":1}","x":2}'
    """
    ordered = sort_by_period_count(paths or [])
    if not ordered:
        return to_compact_json(value)

    working = copy.deepcopy(value)
    for path in ordered:
        _encode_at(working, path)

    return to_compact_json(working)
