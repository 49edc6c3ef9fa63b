r"""
Recursive de-stringification of JSON text.

A JSON document is often stored as a string inside another JSON document,
sometimes several levels deep, with every level adding its own quotes and
backslash escapes. normalize() peels those layers off until every string
leaf is either a fully decoded value or a genuinely plain string.

Usage:
    from jtool.core import normalize

    normalize('"{\\"a\\": 1}"')        # {'a': 1}
    normalize('{"a": "[1, 2]"}')       # {'a': [1, 2]}
    normalize('"hello"')               # 'hello'
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

from jtool.core.errors import ParseError


# One leading and one trailing double quote, anchored to the whole text
SURROUNDING_QUOTE_RE = re.compile(r'\A"|"\Z')

# An escaped quote preceded by an even run of backslashes (captured so it
# can be halved); the lookbehind keeps an escaped backslash from matching
ESCAPED_QUOTE_RE = re.compile(r'(?<!\\)((?:\\\\)*)\\"')

# Whitespace characters allowed around a JSON value (RFC 8259)
JSON_WHITESPACE = " \t\n\r"

NON_STANDARD_CONSTANTS = frozenset(["NaN", "Infinity", "-Infinity"])


class _RejectedLiteral(ValueError):
    """Raised by the decoder for a literal with no finite JSON value."""

    def __init__(self, literal: str, message: str) -> None:
        self.literal = literal
        self.message = message
        super().__init__(message)


def _reject_constant(name: str) -> Any:
    raise _RejectedLiteral(name, f"Non-standard constant {name!r} is not valid JSON")


def _parse_float(literal: str) -> float:
    # 1e400 is valid JSON syntax but would decode to inf
    value = float(literal)
    if not math.isfinite(value):
        raise _RejectedLiteral(literal, f"Number {literal!r} is out of range")
    return value


_DECODER = json.JSONDecoder(parse_constant=_reject_constant, parse_float=_parse_float)


def unquote(text: str) -> str:
    """Strip a single leading and a single trailing double quote.

    Args:
        text: The text to unquote.

    Returns:
        The text without its surrounding quotes. Text that is not quoted is
        returned unchanged.

    Examples:
        >>> unquote('"hello"')
        'hello'
        >>> unquote('{"a": 1}')
        '{"a": 1}'
    """
    return SURROUNDING_QUOTE_RE.sub("", text)


def _halve_backslashes(match: re.Match[str]) -> str:
    return match.group(1).replace("\\\\", "\\") + '"'


def unescape_quotes(text: str) -> str:
    r"""Collapse exactly one level of backslash-escaped quotes.

    A run of 2n backslashes followed by an escaped quote becomes n
    backslashes followed by a bare quote. Escaped backslashes that are not
    followed by a quote are left alone.

    Args:
        text: The text to unescape.

    Returns:
        The text with one escaping level removed from its quotes.

    Examples:
        >>> unescape_quotes('{\\"a\\": 1}')
        '{"a": 1}'
    """
    return ESCAPED_QUOTE_RE.sub(_halve_backslashes, text)


def _is_not_a_value(err: json.JSONDecodeError) -> bool:
    """Check whether the decoder rejected the text before its first token.

    This is the signature of a plain string such as ``hello`` (or an empty
    one), as opposed to a document that starts out as JSON and breaks
    later on, such as ``{"a": }``.
    """
    start = len(err.doc) - len(err.doc.lstrip(JSON_WHITESPACE))
    return err.msg == "Expecting value" and err.pos == start


def _literal_error(err: _RejectedLiteral, text: str) -> ParseError:
    return ParseError(err.message, doc=text, pos=max(text.find(err.literal), 0))


def _nesting_error(text: str) -> ParseError:
    return ParseError("Document is nested too deeply", doc=text)


def _normalize_string(value: str) -> Any:
    text = unescape_quotes(unquote(value))

    try:
        parsed = _DECODER.decode(text)
    except json.JSONDecodeError as err:
        if _is_not_a_value(err):
            return text
        raise ParseError.from_decode_error(err) from err
    except _RejectedLiteral as err:
        if text.strip(JSON_WHITESPACE) in NON_STANDARD_CONSTANTS:
            return text
        raise _literal_error(err, text) from err

    return _normalize_value(parsed)


def _normalize_value(value: Any) -> Any:
    if isinstance(value, str):
        return _normalize_string(value)
    if isinstance(value, list):
        return [_normalize_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _normalize_value(item) for key, item in value.items()}
    return value


def normalize_value(value: Any) -> Any:
    """Normalize an already-decoded JSON value.

    Strings are unquoted, unescaped and decoded again for as long as they
    keep decoding. Lists and dicts are normalized element by element, in
    order. Every other value is returned unchanged.

    Args:
        value: A JSON-compatible Python value.

    Returns:
        A new, fully normalized value. The input is not modified.

    Raises:
        ParseError: If any string leaf is malformed JSON, or the value is
            nested deeper than the interpreter's recursion limit.
    """
    try:
        return _normalize_value(value)
    except RecursionError as err:
        raise _nesting_error("") from err


def normalize(text: str) -> Any:
    r"""Decode text into a JSON value, unwrapping every stringified layer.

    The raw text is treated as a string leaf: its surrounding quotes and
    one level of escaped quotes are removed, it is parsed, and every string
    in the result is normalized in turn. Text that is not JSON at all is
    returned as a plain string.

    Because the whole text is unescaped once, escaped quotes inside the
    strings of an otherwise plain document are collapsed too; such
    documents belong to normalize_json().

    Args:
        text: Raw text, a JSON document, or a (possibly repeatedly)
            stringified JSON document.

    Returns:
        The fully decoded JSON value.

    Raises:
        ParseError: If the text, or any string nested in it, looks like a
            JSON document but is malformed, or is nested too deeply.

    Examples:
        >>> normalize('"{\\"a\\":1}"')
        {'a': 1}
        >>> normalize('"hello"')
        'hello'
    """
    try:
        return _normalize_string(text)
    except RecursionError as err:
        raise _nesting_error(text) from err


def normalize_json(text: str) -> Any:
    r"""Decode text that is known to be JSON, then normalize its string leaves.

    Unlike normalize(), the text itself is not unquoted or unescaped first,
    so escaped quotes inside its strings survive. Use this for sources that
    are valid JSON by construction, such as JSON Lines records.

    Args:
        text: A JSON document.

    Returns:
        The decoded value with every string leaf normalized.

    Raises:
        ParseError: If the text is not valid JSON (including numbers outside
            float range), or a string nested in it looks like a JSON
            document but is malformed.

    Examples:
        >>> normalize_json('{"a": "{\\"b\\": 1}"}')
        {'a': {'b': 1}}
    """
    try:
        return _normalize_value(_DECODER.decode(text))
    except json.JSONDecodeError as err:
        raise ParseError.from_decode_error(err) from err
    except _RejectedLiteral as err:
        raise _literal_error(err, text) from err
    except RecursionError as err:
        raise _nesting_error(text) from err
