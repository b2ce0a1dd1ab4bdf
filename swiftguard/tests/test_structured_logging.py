"""
Tests for structured logging.
"""

import json
import logging
import sys

from swiftguard.core.structured_logging import (
    LogCategory,
    LogContext,
    StructuredFormatter,
    build_logging_config,
)


def make_record(**extra):
    record = logging.LogRecord(
        name="swiftguard.service.validation_service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Message %s processed",
        args=("abc",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    """Tests for JSON log formatting."""

    def test_basic_record(self):
        payload = json.loads(StructuredFormatter().format(make_record()))

        assert payload["message"] == "Message abc processed"
        assert payload["level"] == "INFO"
        assert payload["category"] == "system"
        assert payload["component"] == "swiftguard.service.validation_service"
        assert "context" not in payload

    def test_context_and_metadata(self):
        record = make_record(
            category=LogCategory.AUDIT,
            context=LogContext(trace_id="t-1", transaction_reference="REF1"),
            metadata={"status": "success"},
        )
        payload = json.loads(StructuredFormatter().format(record))

        assert payload["category"] == "audit"
        assert payload["context"] == {"trace_id": "t-1", "transaction_reference": "REF1"}
        assert payload["metadata"] == {"status": "success"}

    def test_exception_info(self):
        try:
            raise ValueError("bad value")
        except ValueError:
            record = make_record()
            record.exc_info = sys.exc_info()

        payload = json.loads(StructuredFormatter().format(record))

        assert payload["exception"]["type"] == "ValueError"
        assert payload["exception"]["message"] == "bad value"


class TestLoggingConfig:
    """Tests for the dictConfig document."""

    def test_simple_formatter_by_default(self):
        config = build_logging_config("DEBUG")

        assert config["handlers"]["console"]["formatter"] == "simple"
        assert config["loggers"]["swiftguard"]["level"] == "DEBUG"

    def test_structured_formatter(self):
        config = build_logging_config("INFO", structured=True)

        assert config["handlers"]["console"]["formatter"] == "structured"
