"""Contract validation for the aggregate JSON payload."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonschema import FormatChecker
from jsonschema import exceptions as jsex
from jsonschema.validators import validator_for

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "aggregate.schema.json"


@dataclass(frozen=True)
class ValidationIssue:
    """One schema violation, located by a JSON-pointer-like path."""

    path: str
    message: str
    validator: str

    @classmethod
    def from_error(cls, error: jsex.ValidationError) -> "ValidationIssue":
        return cls(
            path="/" + "/".join(str(part) for part in error.path),
            message=error.message,
            validator=str(error.validator),
        )


@dataclass
class ValidationResult:
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


class PayloadValidator:
    """Check a payload against the chart-facing JSON schema.

    Reports every violation rather than stopping at the first one.
    """

    def __init__(self, schema_path: str | Path = DEFAULT_SCHEMA_PATH) -> None:
        self.schema_path = Path(schema_path)
        schema = json.loads(self.schema_path.read_text(encoding="utf-8"))
        validator_cls = validator_for(schema)
        validator_cls.check_schema(schema)
        self._validator = validator_cls(schema, format_checker=FormatChecker())

    def validate(self, payload: dict[str, Any]) -> ValidationResult:
        errors = sorted(
            self._validator.iter_errors(payload),
            key=lambda err: [str(part) for part in err.path],
        )
        return ValidationResult(issues=[ValidationIssue.from_error(err) for err in errors])
