"""JSON Schema validation for repository records documents."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator, ValidationError

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "repositories.schema.json"


class RecordsValidationError(ValueError):
    """Raised when a records document violates the schema.

    ``problems`` holds one ``$.json.path: message`` line per violation, in
    document order.
    """

    def __init__(self, problems: list[str]) -> None:
        super().__init__("\n" + "\n".join(f"- {problem}" for problem in problems))
        self.problems = problems


@lru_cache(maxsize=None)
def _validator_for(schema_path: Path) -> Draft202012Validator:
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def _describe(error: ValidationError) -> str:
    return f"{error.json_path}: {error.message}"


def validate_document(document: Any, schema_path: Path = SCHEMA_PATH) -> None:
    """Check ``document`` against the records schema.

    Raises:
        RecordsValidationError: listing every violation found.
    """
    errors = _validator_for(schema_path).iter_errors(document)
    ordered = sorted(errors, key=lambda e: [str(part) for part in e.absolute_path])
    if ordered:
        raise RecordsValidationError([_describe(error) for error in ordered])


def validate_file(path: Path, schema_path: Path = SCHEMA_PATH) -> Any:
    """Decode ``path`` as JSON, validate it and return the document."""
    document = json.loads(path.read_text(encoding="utf-8"))
    validate_document(document, schema_path)
    return document
