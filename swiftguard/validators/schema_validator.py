"""
Schema-driven Field Validator

Applies the declarative MT103 JSON Schema to a parsed record. The schema is
configuration: required fields and value patterns are tuned by editing the
schema document, not this module.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from jsonschema.exceptions import ValidationError as JsonSchemaError

from swiftguard.core.config import DEFAULT_SCHEMA_PATH
from swiftguard.core.exceptions import SchemaException
from swiftguard.validators.base_validator import BaseValidator, ValidationResult

logger = logging.getLogger(__name__)

_REQUIRED_MESSAGE = re.compile(r"^(['\"])(?P<name>.*)\1 is a required property$")


def load_schema(schema_path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """Load a JSON Schema document from disk."""
    path = Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH

    if not path.exists():
        raise SchemaException(f"Schema file not found: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaException(f"Invalid JSON in schema file: {e}", str(path))


class SchemaValidator(BaseValidator):
    """
    Structural validator for parsed MT103 records.

    Reports one error per missing required field and one per field whose
    value violates its type or pattern. Additional fields are ignored unless
    the schema forbids them. Holds no per-call state.
    """

    def __init__(
        self,
        schema: Optional[Mapping[str, Any]] = None,
        schema_path: Union[str, Path, None] = None,
    ):
        """
        Initialize the schema validator.

        Args:
            schema: Schema document; takes precedence over schema_path
            schema_path: Path to a JSON Schema file, defaults to the bundled MT103 schema
        """
        self.schema = dict(schema) if schema is not None else load_schema(schema_path)

        try:
            Draft7Validator.check_schema(self.schema)
        except SchemaError as e:
            raise SchemaException(
                f"Invalid field schema: {e.message}",
                str(schema_path) if schema_path else None,
            )

        self._validator = Draft7Validator(self.schema)

    @property
    def name(self) -> str:
        return "SchemaValidator"

    def validate(self, data: Any) -> ValidationResult:
        """
        Validate a parsed record against the field schema.

        Args:
            data: Parsed record

        Returns:
            ValidationResult with structural errors in schema-evaluation order
        """
        result = self._create_result()

        for error in self._validator.iter_errors(data):
            self._add_schema_error(error, result)

        if not result.is_valid:
            logger.debug(f"Structural validation failed with {result.error_count} error(s)")

        return result

    def _add_schema_error(self, error: JsonSchemaError, result: ValidationResult) -> None:
        """Translate a jsonschema error into an ErrorDetail."""
        base_path = self._instance_path(error)

        if error.validator == "required":
            match = _REQUIRED_MESSAGE.match(error.message)
            missing = match.group("name") if match else error.message
            result.add_error(
                f"must have required property '{missing}'",
                instance_path=f"{base_path}/{missing}",
                keyword="required",
                missingProperty=missing,
            )
        elif error.validator == "pattern":
            result.add_error(
                f'must match pattern "{error.validator_value}"',
                instance_path=base_path,
                keyword="pattern",
                pattern=error.validator_value,
            )
        elif error.validator == "type":
            result.add_error(
                f"must be {error.validator_value}",
                instance_path=base_path,
                keyword="type",
                type=error.validator_value,
            )
        else:
            result.add_error(
                error.message,
                instance_path=base_path,
                keyword=str(error.validator),
            )

    @staticmethod
    def _instance_path(error: JsonSchemaError) -> str:
        """JSON Pointer to the offending instance ("" for the record itself)."""
        return "".join(f"/{part}" for part in error.absolute_path)
