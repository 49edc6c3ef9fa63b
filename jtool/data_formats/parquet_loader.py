"""
Parquet format document loader.

This module provides the ParquetLoader class for loading Apache Parquet
files. Every row becomes one JSON object document; columns that hold
stringified JSON (a common way to store nested payloads in a flat table)
are then unwrapped by normalize_document().
"""

from __future__ import annotations

import math
from typing import Any, Iterator

import pyarrow.parquet as pq

from jtool.core import normalize_json, to_compact_json
from jtool.data_formats.base import DocumentLoader


def _to_json_compatible(value: Any) -> Any:
    """Recursively convert a Parquet cell to JSON-compatible Python types.

    Arrow maps come back as lists of (key, value) tuples and binary columns
    as bytes; both are converted so the row can be serialized.

    Args:
        value: A value produced by pyarrow's ``to_pydict``.

    Returns:
        The value with only JSON-compatible types.
    """
    if value is None:
        return None

    # Handle PyArrow scalars that were not converted yet
    if hasattr(value, "as_py"):
        return _to_json_compatible(value.as_py())

    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")

    if isinstance(value, dict):
        return {str(k): _to_json_compatible(v) for k, v in value.items()}

    if isinstance(value, list):
        # Arrow map columns decode to a list of (key, value) pairs
        if value and all(isinstance(item, tuple) and len(item) == 2 for item in value):
            return {str(k): _to_json_compatible(v) for k, v in value}
        return [_to_json_compatible(item) for item in value]

    # NaN and infinities have no JSON spelling
    if isinstance(value, float) and not math.isfinite(value):
        return None

    if isinstance(value, (str, int, float, bool)):
        return value

    # Dates, decimals and other logical types are shown as text
    return str(value)


def _row_to_document(row: dict[str, Any]) -> str:
    """Serialize one Parquet row as a compact JSON object.

    Args:
        row: A dictionary representing a Parquet row.

    Returns:
        The row as JSON text.
    """
    return to_compact_json({key: _to_json_compatible(value) for key, value in row.items()})


class ParquetLoader(DocumentLoader):
    """Document loader for Apache Parquet format.

    Attributes:
        format_name: Returns 'parquet'.
        supported_extensions: Returns ['.parquet', '.pq'].
    """

    @property
    def format_name(self) -> str:
        """Return the format name."""
        return "parquet"

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [".parquet", ".pq"]

    def load(self, filename: str) -> Iterator[str]:
        """Lazily load row documents from a Parquet file.

        Reads the parquet file in batches and yields one row at a time
        for memory-efficient processing.

        Args:
            filename: Path to the Parquet file.

        Yields:
            Each row as a compact JSON object text.

        Raises:
            FileNotFoundError: If the file does not exist.
            pyarrow.ArrowInvalid: If the file is not a valid Parquet file.

        Examples:
            >>> loader = ParquetLoader()
            >>> for document in loader.load("data.parquet"):
            ...     print(loader.normalize_document(document))
        """
        parquet_file = pq.ParquetFile(filename)

        for batch in parquet_file.iter_batches():
            batch_dict = batch.to_pydict()

            num_rows = len(next(iter(batch_dict.values()))) if batch_dict else 0

            for i in range(num_rows):
                row = {key: values[i] for key, values in batch_dict.items()}
                yield _row_to_document(row)

    def normalize_document(self, document: str) -> Any:
        """Decode a row document and normalize its cells.

        Rows are serialized by this loader, so they are always valid JSON
        and only the cell values need unwrapping.
        """
        return normalize_json(document)

    def get_document_count(self, filename: str) -> int:
        """Get the number of rows from the Parquet file metadata.

        Args:
            filename: Path to the Parquet file.

        Returns:
            The total number of rows in the file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        parquet_file = pq.ParquetFile(filename)
        return parquet_file.metadata.num_rows

    def get_document_at_index(self, filename: str, index: int) -> str:
        """Get a specific row document by index.

        Uses row group information to read only the row group that contains
        the requested index.

        Args:
            filename: Path to the Parquet file.
            index: The zero-based index of the row to load.

        Returns:
            The row as a compact JSON object text.

        Raises:
            FileNotFoundError: If the file does not exist.
            IndexError: If the index is out of range.
        """
        if index < 0:
            raise IndexError(f"Document index {index} cannot be negative")

        parquet_file = pq.ParquetFile(filename)
        total_rows = parquet_file.metadata.num_rows

        if index >= total_rows:
            raise IndexError(f"Document index {index} out of range (0-{total_rows - 1})")

        current_row = 0
        for rg_idx in range(parquet_file.metadata.num_row_groups):
            rg_num_rows = parquet_file.metadata.row_group(rg_idx).num_rows

            if current_row + rg_num_rows > index:
                row_group = parquet_file.read_row_group(rg_idx)
                local_index = index - current_row

                batch_dict = row_group.to_pydict()
                row = {key: values[local_index] for key, values in batch_dict.items()}
                return _row_to_document(row)

            current_row += rg_num_rows

        # Should not reach here if metadata is accurate
        raise IndexError(f"Document index {index} out of range")
