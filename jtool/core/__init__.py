"""
Core JSON algorithms: normalization, path stringification and diffing.

Usage:
    from jtool.core import normalize, encode_paths, compare, render_diff

    value = normalize('"{\\"a\\": \\"[1, 2]\\"}"')   # {'a': [1, 2]}
    text = encode_paths(value, ["a"])                 # '{"a":"[1,2]"}'
    print(render_diff(compare('{"a": 1}', '{"a": 2}')))
    # ~ $.a: 1 -> 2
"""

from jtool.core.compare import (
    MISSING,
    DiffEntry,
    DiffKind,
    DiffPath,
    PathSegment,
    compare,
    diff,
    json_kind,
)
from jtool.core.errors import EncodeError, JToolError, ParseError
from jtool.core.parse import normalize, normalize_json, normalize_value, unescape_quotes, unquote
from jtool.core.remove_spaces import remove_spaces_str, remove_spaces_value
from jtool.core.render import diff_to_records, format_entry, format_path, render_diff
from jtool.core.stringify import encode_paths, sort_by_period_count, to_compact_json

__all__ = [
    # Errors
    "JToolError",
    "ParseError",
    "EncodeError",
    # Normalization
    "normalize",
    "normalize_json",
    "normalize_value",
    "unquote",
    "unescape_quotes",
    # Stringification
    "encode_paths",
    "sort_by_period_count",
    "to_compact_json",
    # Comparison
    "diff",
    "compare",
    "json_kind",
    "DiffEntry",
    "DiffKind",
    "DiffPath",
    "PathSegment",
    "MISSING",
    # Rendering
    "format_path",
    "format_entry",
    "render_diff",
    "diff_to_records",
    # Compaction
    "remove_spaces_str",
    "remove_spaces_value",
]
