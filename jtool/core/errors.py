"""
Exception types raised by the JTool core.

ParseError covers text that cannot be normalized, EncodeError covers key
paths that cannot be re-stringified. Comparison has no error type of its
own: it only fails when its raw text inputs fail to normalize.
"""

from __future__ import annotations

import json


class JToolError(Exception):
    """Base class for all JTool errors."""


class ParseError(JToolError, ValueError):
    """Raised when text is malformed JSON rather than a plain string.

    Attributes:
        doc: The text that failed to parse.
        cause: The underlying decoder error, if any.
        msg: The decoder's diagnostic message.
        pos: Character offset of the failure in ``doc``.
        lineno: Line of the failure (1-based).
        colno: Column of the failure (1-based).
    """

    def __init__(
        self,
        msg: str,
        doc: str = "",
        pos: int = 0,
        cause: json.JSONDecodeError | None = None,
    ) -> None:
        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.cause = cause
        self.lineno = doc.count("\n", 0, pos) + 1
        self.colno = pos - doc.rfind("\n", 0, pos)
        super().__init__(
            f"Error while parsing JSON: {msg}: line {self.lineno} column {self.colno} (char {pos})"
        )

    @classmethod
    def from_decode_error(cls, err: json.JSONDecodeError) -> "ParseError":
        """Wrap a json.JSONDecodeError, keeping its diagnostic."""
        return cls(err.msg, doc=err.doc, pos=err.pos, cause=err)


class EncodeError(JToolError, ValueError):
    """Raised when a key path cannot be stringified.

    Attributes:
        path: The dotted key path that failed.
        reason: Why the path could not be applied.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error while stringifying JSON at path '{path}': {reason}")
