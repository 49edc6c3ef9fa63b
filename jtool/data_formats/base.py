"""
Abstract base class for document loaders.

This module defines the DocumentLoader interface that all format-specific
loaders must implement. A loader turns a file into a sequence of raw
document texts, and knows how those texts are decoded into normalized
values.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, Iterator

from jtool.core import normalize


# Filename that stands for standard input
STDIN_NAME = "-"


def read_text(filename: str) -> str:
    """Read a whole text file, or standard input for ``-``.

    Args:
        filename: Path to the file, or ``-``.

    Returns:
        The file content.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if filename == STDIN_NAME:
        return sys.stdin.read()
    with open(filename, "r", encoding="utf-8") as f:
        return f.read()


class DocumentLoader(ABC):
    """Abstract base class for loading JSON documents.

    All format-specific loaders (JSON, JSONL, Parquet) must inherit from
    this class and implement the abstract methods.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the format name (e.g., 'json', 'jsonl', 'parquet')."""
        pass

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions (e.g., ['.jsonl'])."""
        pass

    @abstractmethod
    def load(self, filename: str) -> Iterator[str]:
        """Lazily load raw documents from a file.

        Args:
            filename: Path to the file.

        Yields:
            Each document as raw text, ready for normalize().

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        pass

    def load_all(self, filename: str, max_documents: int | None = None) -> list[str]:
        """Load all documents from a file into memory.

        Args:
            filename: Path to the file.
            max_documents: Maximum number of documents to load (None = all).

        Returns:
            A list of raw document texts.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        documents: list[str] = []
        for i, document in enumerate(self.load(filename)):
            if max_documents is not None and i >= max_documents:
                break
            documents.append(document)
        return documents

    def get_document_count(self, filename: str) -> int:
        """Get the total number of documents in a file.

        Args:
            filename: Path to the file.

        Returns:
            The number of documents.
        """
        return sum(1 for _ in self.load(filename))

    def get_document_at_index(self, filename: str, index: int) -> str:
        """Get a specific document by index.

        Args:
            filename: Path to the file.
            index: The zero-based index of the document.

        Returns:
            The raw document text.

        Raises:
            FileNotFoundError: If the file does not exist.
            IndexError: If the index is out of range.
        """
        if index < 0:
            raise IndexError(f"Document index {index} cannot be negative")

        for i, document in enumerate(self.load(filename)):
            if i == index:
                return document

        raise IndexError(f"Document index {index} out of range")

    def normalize_document(self, document: str) -> Any:
        """Decode one raw document into a fully normalized value.

        Whole-file documents may themselves be stringified, so by default
        the raw text goes through normalize(). Formats whose records are
        valid JSON by construction override this.

        Args:
            document: A raw document as yielded by load().

        Returns:
            The normalized JSON value.

        Raises:
            ParseError: If the document is malformed JSON.
        """
        return normalize(document)

    def load_values(self, filename: str) -> Iterator[Any]:
        """Lazily load normalized values from a file.

        Args:
            filename: Path to the file.

        Yields:
            Each document, normalized.
        """
        for document in self.load(filename):
            yield self.normalize_document(document)

    def get_value_at_index(self, filename: str, index: int) -> Any:
        """Get a specific document by index, normalized.

        Raises:
            IndexError: If the index is out of range.
            ParseError: If the document is malformed JSON.
        """
        return self.normalize_document(self.get_document_at_index(filename, index))
