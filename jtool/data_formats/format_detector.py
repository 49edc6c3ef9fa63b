"""
Format detection utilities for input files.

This module provides functions to detect file formats and get appropriate loaders.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from jtool.data_formats.base import STDIN_NAME

if TYPE_CHECKING:
    from jtool.data_formats.base import DocumentLoader


# Mapping of file extensions to format names
EXTENSION_MAP: dict[str, str] = {
    ".json": "json",
    ".txt": "json",
    ".jsonl": "jsonl",
    ".ndjson": "jsonl",
    ".parquet": "parquet",
    ".pq": "parquet",
}

# Supported format names
SUPPORTED_FORMATS = frozenset(["json", "jsonl", "parquet"])

# Format used when neither the extension nor the content decides
DEFAULT_FORMAT = "json"


def detect_format(filename: str) -> str:
    """Detect file format from extension or content.

    Unknown extensions fall back to sniffing the Parquet magic bytes, and
    then to treating the whole file as one document.

    Args:
        filename: Path to the file, or ``-`` for standard input.

    Returns:
        Format name: "json", "jsonl", or "parquet"

    Examples:
        >>> detect_format("data.jsonl")
        'jsonl'
        >>> detect_format("data.parquet")
        'parquet'
        >>> detect_format("-")
        'json'
    """
    if filename == STDIN_NAME:
        return DEFAULT_FORMAT

    extension = Path(filename).suffix.lower()

    if extension in EXTENSION_MAP:
        return EXTENSION_MAP[extension]

    path = Path(filename)
    if path.is_file():
        # Check for Parquet magic bytes (PAR1)
        try:
            with open(filename, "rb") as f:
                if f.read(4) == b"PAR1":
                    return "parquet"
        except OSError:
            pass

    return DEFAULT_FORMAT


def get_loader_for_format(format_name: str) -> "DocumentLoader":
    """Get a loader for a specific format name.

    Args:
        format_name: The format name ("json", "jsonl", or "parquet").

    Returns:
        A DocumentLoader instance for the specified format.

    Raises:
        ValueError: If the format name is not supported.

    Examples:
        >>> loader = get_loader_for_format("parquet")
        >>> loader.format_name
        'parquet'
    """
    # Import loaders here to avoid circular imports
    from jtool.data_formats.json_loader import JSONLoader
    from jtool.data_formats.jsonl_loader import JSONLLoader
    from jtool.data_formats.parquet_loader import ParquetLoader

    if format_name not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported format '{format_name}'. "
            f"Supported formats: {', '.join(sorted(SUPPORTED_FORMATS))}"
        )

    loaders: dict[str, DocumentLoader] = {
        "json": JSONLoader(),
        "jsonl": JSONLLoader(),
        "parquet": ParquetLoader(),
    }

    return loaders[format_name]


def get_loader(filename: str, input_format: str = "auto") -> "DocumentLoader":
    """Factory function to get the appropriate loader for a file.

    Args:
        filename: Path to the file, or ``-`` for standard input.
        input_format: Format hint ('auto', 'json', 'jsonl', 'parquet').

    Returns:
        A DocumentLoader instance appropriate for the file format.

    Raises:
        ValueError: If an explicit format is not supported.

    Examples:
        >>> loader = get_loader("data.jsonl")
        >>> for document in loader.load("data.jsonl"):
        ...     print(document)
    """
    if input_format == "auto":
        return get_loader_for_format(detect_format(filename))
    return get_loader_for_format(input_format)
