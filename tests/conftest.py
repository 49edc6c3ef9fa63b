"""Pytest configuration and shared fixtures for jtool tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pyarrow as pa
import pyarrow.parquet as pq
import pytest


@pytest.fixture
def nested_document() -> dict[str, Any]:
    """Return a document with objects, arrays and every primitive kind."""
    return {
        "id": 7,
        "name": "widget",
        "ratio": 0.5,
        "active": True,
        "parent": None,
        "tags": ["red", "blue"],
        "meta": {"owner": {"name": "ops", "level": 2}},
    }


@pytest.fixture
def stringified_document(nested_document: dict[str, Any]) -> str:
    """Return nested_document quoted as a JSON string, with 'meta' stringified inside it."""
    document = dict(nested_document)
    document["meta"] = json.dumps(nested_document["meta"])
    return json.dumps(json.dumps(document))


@pytest.fixture
def json_file(tmp_path: Path, stringified_document: str) -> Path:
    """Create a single-document JSON file."""
    filepath = tmp_path / "document.json"
    filepath.write_text(stringified_document + "\n", encoding="utf-8")
    return filepath


@pytest.fixture
def jsonl_file(tmp_path: Path) -> Path:
    """Create a JSONL file with three documents and a blank line."""
    filepath = tmp_path / "documents.jsonl"
    lines = [
        json.dumps({"n": 0, "payload": json.dumps({"x": 0})}),
        json.dumps({"n": 1, "payload": json.dumps({"x": 1})}),
        "",
        json.dumps({"n": 2, "payload": json.dumps({"x": 2})}),
    ]
    filepath.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return filepath


@pytest.fixture
def parquet_file(tmp_path: Path) -> Path:
    """Create a Parquet file whose 'payload' column holds JSON text."""
    filepath = tmp_path / "documents.parquet"
    table = pa.table({
        "n": [0, 1, 2],
        "payload": [json.dumps({"x": i}) for i in range(3)],
    })
    pq.write_table(table, filepath)
    return filepath
