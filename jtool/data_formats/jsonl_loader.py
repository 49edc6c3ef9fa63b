"""
JSONL format document loader.

This module provides the JSONLLoader class for loading JSONL (JSON Lines)
files where each line is a separate document.
"""

from __future__ import annotations

import sys
from typing import Any, Iterator

from jtool.core import normalize_json
from jtool.data_formats.base import STDIN_NAME, DocumentLoader


class JSONLLoader(DocumentLoader):
    """Document loader for JSONL (JSON Lines) format.

    Each non-blank line is one document. Every line is valid JSON by
    definition of the format, so lines are decoded strictly and only their
    string leaves are unwrapped.

    Attributes:
        format_name: Returns 'jsonl'.
        supported_extensions: Returns ['.jsonl', '.ndjson'].
    """

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "jsonl"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".jsonl", ".ndjson"]

    def load(self, filename: str) -> Iterator[str]:
        """Lazily load documents from a JSONL file.

        This generator yields one line at a time, making it memory-efficient
        for processing large files.

        Args:
            filename: Path to the JSONL file, or ``-`` for standard input.

        Yields:
            Each non-blank line, stripped.

        Raises:
            FileNotFoundError: If the file does not exist.

        Examples:
            >>> loader = JSONLLoader()
            >>> for document in loader.load("data.jsonl"):
            ...     print(loader.normalize_document(document))
        """
        if filename == STDIN_NAME:
            yield from self._iter_lines(sys.stdin)
            return

        with open(filename, "r", encoding="utf-8") as f:
            yield from self._iter_lines(f)

    @staticmethod
    def _iter_lines(lines: Iterator[str]) -> Iterator[str]:
        for line in lines:
            line = line.strip()
            if line:
                yield line

    def normalize_document(self, document: str) -> Any:
        """Decode a line strictly and normalize its string leaves."""
        return normalize_json(document)
