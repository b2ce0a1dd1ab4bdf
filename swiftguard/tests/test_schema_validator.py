"""
Tests for the schema-driven field validator.
"""

import json

import pytest

from swiftguard.core.exceptions import SchemaException
from swiftguard.swift import MANDATORY_FIELDS, parse_swift_message
from swiftguard.validators import SchemaValidator, load_schema

AMOUNT_PATTERN = r"^\d{6}[A-Z]{3}[\d,\.]+$"


@pytest.fixture
def validator():
    return SchemaValidator()


@pytest.fixture
def valid_record(valid_message):
    return parse_swift_message(valid_message)


class TestSchemaValidator:
    """Tests for structural validation."""

    def test_valid_record(self, validator, valid_record):
        result = validator.validate(valid_record)

        assert result.is_valid
        assert result.errors == []
        assert result.validator_name == "SchemaValidator"

    def test_missing_required_fields(self, validator, message_factory):
        """Each missing mandatory field yields one required error."""
        record = parse_swift_message(message_factory("REF1", F23B=None, F71A=None))
        result = validator.validate(record)

        assert not result.is_valid
        assert [e.instance_path for e in result.errors] == ["/bankOperationCode", "/charges"]

        error = result.errors[0]
        assert error.message == "must have required property 'bankOperationCode'"
        assert error.keyword == "required"
        assert error.params == {"missingProperty": "bankOperationCode"}

    def test_empty_record_reports_every_mandatory_field(self, validator):
        result = validator.validate({})

        assert [e.params["missingProperty"] for e in result.errors] == MANDATORY_FIELDS
        assert all("required property" in e.message for e in result.errors)

    def test_invalid_amount_pattern(self, validator, message_factory):
        record = parse_swift_message(message_factory("REF1", F32A="INVALID_DATE_USD"))
        result = validator.validate(record)

        assert not result.is_valid
        assert len(result.errors) == 1

        error = result.errors[0]
        assert error.instance_path == "/valueDateCurrencyAmount"
        assert error.keyword == "pattern"
        assert error.message == f'must match pattern "{AMOUNT_PATTERN}"'
        assert error.params == {"pattern": AMOUNT_PATTERN}

    def test_non_string_value(self, validator, valid_record):
        valid_record["charges"] = 42
        result = validator.validate(valid_record)

        assert [e.to_dict() for e in result.errors] == [
            {
                "message": "must be string",
                "instancePath": "/charges",
                "keyword": "type",
                "params": {"type": "string"},
            }
        ]

    def test_extra_fields_ignored(self, validator, valid_record):
        valid_record["remittanceInfo"] = "INVOICE 1"
        valid_record["somethingElse"] = "x"

        assert validator.validate(valid_record).is_valid

    def test_validation_is_idempotent(self, validator, message_factory):
        record = parse_swift_message(message_factory("REF1", F59=None, F32A="BAD"))
        snapshot = dict(record)

        first = [e.to_dict() for e in validator.validate(record).errors]
        second = [e.to_dict() for e in validator.validate(record).errors]

        assert first == second
        assert record == snapshot

    def test_required_errors_precede_pattern_errors(self, validator, message_factory):
        record = parse_swift_message(message_factory("REF1", F23B=None, F32A="BAD"))
        keywords = [e.keyword for e in validator.validate(record).errors]

        assert keywords == ["required", "pattern"]


class TestSchemaLoading:
    """Tests for schema loading and configuration faults."""

    def test_load_bundled_schema(self):
        schema = load_schema()

        assert schema["required"] == MANDATORY_FIELDS
        assert schema["properties"]["valueDateCurrencyAmount"]["pattern"] == AMOUNT_PATTERN

    def test_missing_schema_file(self, tmp_path):
        with pytest.raises(SchemaException) as exc_info:
            SchemaValidator(schema_path=tmp_path / "missing.json")

        assert exc_info.value.error_code == "SCHEMA_ERROR"

    def test_invalid_json_schema_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(SchemaException):
            SchemaValidator(schema_path=path)

    def test_invalid_schema_document(self):
        with pytest.raises(SchemaException):
            SchemaValidator(schema={"type": "no-such-type"})

    def test_custom_schema_from_file(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"type": "object", "required": ["transactionReference"]}))
        validator = SchemaValidator(schema_path=path)

        assert validator.validate({"transactionReference": "REF"}).is_valid
        assert not validator.validate({}).is_valid


class TestValidationResult:
    """Tests for the validation result container."""

    def test_to_dict(self, validator):
        result = validator.validate({"transactionReference": "REF1"})
        data = result.to_dict()

        assert data["is_valid"] is False
        assert data["validator_name"] == "SchemaValidator"
        assert data["validator_version"] == "1.0"
        assert len(data["errors"]) == result.error_count == 5
        assert data["errors"][0]["instancePath"] == "/bankOperationCode"
