"""Compaction helpers built from normalize() and compact serialization."""

from __future__ import annotations

from typing import Any

from jtool.core.parse import normalize
from jtool.core.stringify import to_compact_json


def remove_spaces_value(value: Any) -> Any:
    """Return the normalized form of a value after a compact round trip.

    Raises:
        ParseError: If a string leaf of the value is malformed JSON.
    """
    return normalize(to_compact_json(value))


def remove_spaces_str(text: str) -> str:
    """Normalize text and re-serialize it without insignificant whitespace.

    Args:
        text: Raw or stringified JSON text.

    Returns:
        Compact JSON text of the normalized value.

    Raises:
        ParseError: If the text is malformed JSON.
    """
    return to_compact_json(normalize(text))
