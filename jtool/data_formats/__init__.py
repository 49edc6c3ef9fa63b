"""
Data formats module for multi-format document loading.

This module provides a unified interface for reading raw JSON documents
from whole files, JSON Lines files and Parquet tables.

Usage:
    from jtool.data_formats import get_loader

    # Auto-detect format and get appropriate loader
    loader = get_loader("data.parquet")
    for value in loader.load_values("data.parquet"):
        print(value)

    # Or detect format explicitly
    from jtool.data_formats import detect_format
    format_name = detect_format("data.jsonl")  # Returns 'jsonl'
"""

from jtool.data_formats.base import STDIN_NAME, DocumentLoader, read_text
from jtool.data_formats.format_detector import (
    DEFAULT_FORMAT,
    EXTENSION_MAP,
    SUPPORTED_FORMATS,
    detect_format,
    get_loader,
    get_loader_for_format,
)
from jtool.data_formats.json_loader import JSONLoader
from jtool.data_formats.jsonl_loader import JSONLLoader
from jtool.data_formats.parquet_loader import ParquetLoader

__all__ = [
    # Base class
    "DocumentLoader",
    "read_text",
    "STDIN_NAME",
    # Format detection
    "detect_format",
    "get_loader",
    "get_loader_for_format",
    "DEFAULT_FORMAT",
    "EXTENSION_MAP",
    "SUPPORTED_FORMATS",
    # Loaders
    "JSONLoader",
    "JSONLLoader",
    "ParquetLoader",
]
