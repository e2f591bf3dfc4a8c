"""Load and inspect an OpenAPI document.

Reads a JSON document from disk and extracts the component schema table
and the path table the generators work from.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

DEFAULT_DOCUMENT_PATH = Path("document.json")


class DocumentError(ValueError):
    """Raised when a document cannot be used as generator input."""


def load_document(path: Path | str | None = None) -> dict[str, Any]:
    """Load an OpenAPI document from disk."""
    document_file = Path(path) if path else DEFAULT_DOCUMENT_PATH
    with open(document_file, encoding="utf-8") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as exc:
            raise DocumentError(f"{document_file} is not valid JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise DocumentError(f"{document_file} does not contain a JSON object")
    return document


def _require_mapping(value: Any, where: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DocumentError(f"'{where}' must be an object, got {type(value).__name__}")
    return value


def get_paths(document: dict[str, Any]) -> dict[str, Any]:
    """Extract the path table from the document."""
    if not isinstance(document, dict):
        raise DocumentError("document must be an object")
    return _require_mapping(document.get("paths"), "paths")


def get_schemas(document: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the document."""
    if not isinstance(document, dict):
        raise DocumentError("document must be an object")
    components = _require_mapping(document.get("components"), "components")
    return _require_mapping(components.get("schemas"), "components.schemas")
