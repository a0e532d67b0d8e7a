"""Declarative shape of canonical rule frontmatter."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from jsonschema import Draft202012Validator

from rulesync.constants import WILDCARD_TARGET
from rulesync.errors import ValidationError
from rulesync.rules.tool_id import TOOL_ID_VALUES

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"

CANONICAL_PROPERTIES: dict[str, dict[str, Any]] = {
    "root": {"type": "boolean"},
    "targets": {
        "type": "array",
        "items": {"type": "string", "enum": [WILDCARD_TARGET, *TOOL_ID_VALUES]},
    },
    "description": {"type": "string"},
    "globs": {"type": "array", "items": {"type": "string"}},
}

OPAQUE_OVERRIDE_SCHEMA: dict[str, Any] = {"type": "object"}


@dataclass(frozen=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def build_frontmatter_schema(
    override_schemas: Optional[Mapping[str, dict[str, Any]]] = None,
) -> dict[str, Any]:
    properties: dict[str, Any] = dict(CANONICAL_PROPERTIES)
    for tool_id in TOOL_ID_VALUES:
        properties[tool_id] = OPAQUE_OVERRIDE_SCHEMA
    for tool_id, schema in (override_schemas or {}).items():
        properties[tool_id] = schema
    return {
        "$schema": JSON_SCHEMA_DIALECT,
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
    }


def validate_frontmatter(
    data: Any,
    override_schemas: Optional[Mapping[str, dict[str, Any]]] = None,
) -> ValidationResult:
    validator = Draft202012Validator(build_frontmatter_schema(override_schemas))
    errors = sorted(validator.iter_errors(data), key=lambda error: error.json_path)
    return ValidationResult(
        errors=[f"{error.json_path}: {error.message}" for error in errors]
    )


def ensure_valid_frontmatter(
    data: Any,
    path: Optional[Path] = None,
    override_schemas: Optional[Mapping[str, dict[str, Any]]] = None,
) -> None:
    result = validate_frontmatter(data, override_schemas=override_schemas)
    if not result.valid:
        raise ValidationError(path, result.errors)
