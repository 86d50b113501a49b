"""
Schema Validation Utilities

Validates decoded phrases JSON against phrases.schema.json before any
QuoteRecord is built, so a malformed payload is rejected as a whole with a
message that names the offending element.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _format_path(parts) -> str:
    """Render a jsonschema path deque like [2].author."""
    rendered = ""
    for part in parts:
        rendered += f"[{part}]" if isinstance(part, int) else f".{part}"
    return rendered.lstrip(".")


def validate_phrases(data: Any) -> None:
    """
    Validate decoded phrases data against the phrases schema.

    Args:
        data: Value produced by json.loads on the configuration string

    Raises:
        ValidationError: If data is not an array of phrase objects
    """
    if not isinstance(data, list):
        raise ValidationError(
            f"Expected a JSON array of phrases, got {type(data).__name__}",
            path="",
        )

    schema = _load_schema("phrases")
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if errors:
        first = errors[0]
        path = _format_path(first.absolute_path)
        raise ValidationError(
            f"Schema validation failed at {path or '<root>'}: {first.message}",
            path=path,
            errors=[f"{_format_path(e.absolute_path) or '<root>'}: {e.message}" for e in errors],
        )
