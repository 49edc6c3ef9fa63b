"""
Structural diff between two JSON values.

The two trees are walked in parallel, depth first. Every place where they
disagree produces one DiffEntry describing what has to change to turn the
old value into the new one.

Diff Kinds:
    - added: Key or index exists in new but not in old
    - removed: Key or index exists in old but not in new
    - changed: Same kind of primitive, different value
    - type_changed: The two values are of different JSON kinds
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from jtool.core.parse import normalize


PathSegment = Union[str, int]
DiffPath = tuple[PathSegment, ...]


class _Missing:
    """Marker for the absent side of an added or removed entry."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, memo: dict) -> "_Missing":
        return self


MISSING: Any = _Missing()


class DiffKind(Enum):
    """What happened at a diff path."""

    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"
    TYPE_CHANGED = "type_changed"


@dataclass(frozen=True)
class DiffEntry:
    """One structural difference between two JSON values.

    Attributes:
        path: Location of the difference. Object keys are strings, array
            indices are ints; the root is the empty tuple.
        kind: The kind of difference.
        old_value: The value in the old document (MISSING when added).
        new_value: The value in the new document (MISSING when removed).
    """

    path: DiffPath
    kind: DiffKind
    old_value: Any = field(default=MISSING)
    new_value: Any = field(default=MISSING)

    @property
    def has_old(self) -> bool:
        return self.old_value is not MISSING

    @property
    def has_new(self) -> bool:
        return self.new_value is not MISSING


def json_kind(value: Any) -> str:
    """Return the JSON kind name of a Python value.

    Args:
        value: A JSON-compatible Python value.

    Returns:
        One of "null", "boolean", "number", "string", "array", "object".

    Raises:
        TypeError: If the value has no JSON counterpart.
    """
    if value is None:
        return "null"
    # bool is a subclass of int and must be checked first
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def _primitives_equal(old: Any, new: Any) -> bool:
    # 1 and 1.0 re-encode differently, so they are not the same number
    return type(old) is type(new) and old == new


def _entry(path: DiffPath, kind: DiffKind, old: Any = MISSING, new: Any = MISSING) -> DiffEntry:
    return DiffEntry(path, kind, copy.deepcopy(old), copy.deepcopy(new))


def _diff_objects(
    old: dict[str, Any],
    new: dict[str, Any],
    path: DiffPath,
    entries: list[DiffEntry],
) -> None:
    for key, value in old.items():
        if key not in new:
            entries.append(_entry(path + (key,), DiffKind.REMOVED, old=value))

    for key, value in new.items():
        if key not in old:
            entries.append(_entry(path + (key,), DiffKind.ADDED, new=value))

    for key, value in old.items():
        if key in new:
            _diff_values(value, new[key], path + (key,), entries)


def _diff_arrays(
    old: list[Any],
    new: list[Any],
    path: DiffPath,
    entries: list[DiffEntry],
) -> None:
    shared = min(len(old), len(new))

    for idx in range(shared):
        _diff_values(old[idx], new[idx], path + (idx,), entries)

    for idx in range(shared, len(old)):
        entries.append(_entry(path + (idx,), DiffKind.REMOVED, old=old[idx]))

    for idx in range(shared, len(new)):
        entries.append(_entry(path + (idx,), DiffKind.ADDED, new=new[idx]))


def _diff_values(old: Any, new: Any, path: DiffPath, entries: list[DiffEntry]) -> None:
    old_kind = json_kind(old)
    new_kind = json_kind(new)

    if old_kind != new_kind:
        entries.append(_entry(path, DiffKind.TYPE_CHANGED, old=old, new=new))
    elif old_kind == "object":
        _diff_objects(old, new, path, entries)
    elif old_kind == "array":
        _diff_arrays(old, new, path, entries)
    elif not _primitives_equal(old, new):
        entries.append(_entry(path, DiffKind.CHANGED, old=old, new=new))


def diff(old: Any, new: Any) -> list[DiffEntry]:
    """Compute the structural differences between two JSON values.

    Objects are compared key by key: keys only in ``old`` are reported as
    removed, keys only in ``new`` as added, and shared keys are compared
    recursively. Arrays are compared index by index, with any extra
    trailing elements reported as added or removed. Values of different
    JSON kinds produce a single type_changed entry for the whole subtree.

    Args:
        old: The old JSON value.
        new: The new JSON value.

    Returns:
        The differences in depth-first order: within an object, removed
        keys, then added keys, then differences inside shared keys; within
        an array, ascending indices. Empty if the values are equal.

    Examples:
        >>> diff({"a": 1}, {"a": 2})
        [DiffEntry(path=('a',), kind=<DiffKind.CHANGED: 'changed'>, old_value=1, new_value=2)]
        >>> diff({"a": 1}, {"a": 1})
        []
    """
    entries: list[DiffEntry] = []
    _diff_values(old, new, (), entries)
    return entries


def compare(old_text: str, new_text: str) -> list[DiffEntry]:
    """Normalize two texts and diff the results.

    Args:
        old_text: Raw text of the old document.
        new_text: Raw text of the new document.

    Returns:
        The differences, as returned by diff().

    Raises:
        ParseError: If either text is malformed JSON. Nothing is diffed in
            that case.
    """
    old = normalize(old_text)
    new = normalize(new_text)
    return diff(old, new)
