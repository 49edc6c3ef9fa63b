"""
Whole-file document loader.

This module provides the JSONLoader class, which treats the entire content
of a file (or of standard input) as a single document. This is the
default for anything that is not JSON Lines or Parquet, because a
stringified document is rarely valid JSON at the top level.
"""

from __future__ import annotations

from typing import Iterator

from jtool.data_formats.base import DocumentLoader, read_text


class JSONLoader(DocumentLoader):
    """Document loader for single-document files.

    Surrounding whitespace is stripped so that a quoted document followed
    by a trailing newline still unwraps.

    Attributes:
        format_name: Returns 'json'.
        supported_extensions: Returns ['.json', '.txt'].
    """

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "json"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".json", ".txt"]

    def load(self, filename: str) -> Iterator[str]:
        """Yield the whole file as one document.

        Args:
            filename: Path to the file, or ``-`` for standard input.

        Yields:
            The stripped file content.

        Raises:
            FileNotFoundError: If the file does not exist.

        Examples:
            >>> loader = JSONLoader()
            >>> [document] = loader.load("data.json")
        """
        yield read_text(filename).strip()

    def get_document_count(self, filename: str) -> int:
        """Return 1: a whole file is always one document."""
        return 1
