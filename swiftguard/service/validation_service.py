"""
SwiftGuard - Validation Service

Composes the tag parser, the schema validator and the compliance gate into a
single request/response cycle and keeps the most recent verdict for polling
dashboards.
"""

import logging
import threading
import time
import uuid
from datetime import datetime, timezone
from typing import Optional, Union

from swiftguard.core.config import Config, get_config
from swiftguard.core.exceptions import MalformedInputException
from swiftguard.core.structured_logging import LogCategory, LogContext
from swiftguard.monitoring.metrics import record_fault, record_verdict
from swiftguard.service.models import ValidationVerdict
from swiftguard.swift.swift_parser import SwiftParser
from swiftguard.validators.compliance_validator import ComplianceGate, ScreeningVerdict
from swiftguard.validators.dedup_ledger import DedupLedger, create_ledger
from swiftguard.validators.schema_validator import SchemaValidator

logger = logging.getLogger(__name__)


class ValidationService:
    """
    MT103 validation façade.

    Pipeline: parse -> structural validation -> compliance screen (only for
    structurally valid records) -> verdict with trace id and timestamp.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        parser: Optional[SwiftParser] = None,
        schema_validator: Optional[SchemaValidator] = None,
        compliance_gate: Optional[ComplianceGate] = None,
        ledger: Optional[DedupLedger] = None,
    ):
        self.config = config or get_config()
        self.parser = parser or SwiftParser()
        self.schema_validator = schema_validator or SchemaValidator(
            schema_path=self.config.schema_path
        )
        self.compliance_gate = compliance_gate or ComplianceGate(
            ledger=ledger if ledger is not None else create_ledger(self.config.ledger),
            config=self.config.compliance,
        )

        self._last_verdict: Optional[ValidationVerdict] = None
        self._last_lock = threading.Lock()

    @property
    def ledger(self) -> DedupLedger:
        return self.compliance_gate.ledger

    def validate(
        self,
        raw_message: Union[str, bytes, None],
        received_at: Optional[datetime] = None,
    ) -> ValidationVerdict:
        """
        Parse, validate and screen one message.

        Args:
            raw_message: Message exactly as submitted
            received_at: Receive time for time-based rules, defaults to now

        Returns:
            ValidationVerdict

        Raises:
            MalformedInputException: If parsing raised (indicates a parser bug)
        """
        trace_id = str(uuid.uuid4())
        start_time = time.perf_counter()
        raw_text = self.parser.to_text(raw_message)

        try:
            record = self.parser.parse(raw_text)
        except Exception as e:
            record_fault(e)
            logger.exception(
                "Parser raised on submitted message",
                extra={"context": LogContext(trace_id=trace_id, component="parser")},
            )
            raise MalformedInputException(f"Unable to parse message: {e}", trace_id) from e

        structural = self.schema_validator.validate(record)
        outcome = self.compliance_gate.screen(record, structural.is_valid, received_at)

        verdict = ValidationVerdict(
            status=outcome.verdict,
            valid=structural.is_valid and outcome.verdict == ScreeningVerdict.SUCCESS,
            errors=list(structural.errors) + list(outcome.extra_errors),
            data=record,
            raw=raw_text,
            trace_id=trace_id,
            timestamp=datetime.now(timezone.utc).isoformat(),
            rule=outcome.rule,
        )

        with self._last_lock:
            self._last_verdict = verdict

        duration = time.perf_counter() - start_time
        record_verdict(
            verdict.status.value,
            duration,
            rule=outcome.rule.value if outcome.rule else None,
            structural_keywords=[e.keyword for e in structural.errors],
        )
        self._log_verdict(verdict, duration)

        return verdict

    def last_verdict(self) -> Optional[ValidationVerdict]:
        """Most recently produced verdict, or None before the first message."""
        with self._last_lock:
            return self._last_verdict

    def reset(self) -> None:
        """Forget accepted references and the cached verdict."""
        self.ledger.clear()
        with self._last_lock:
            self._last_verdict = None
        logger.info("Validation service state reset")

    def _log_verdict(self, verdict: ValidationVerdict, duration: float) -> None:
        reference = verdict.data.get("transactionReference")
        metadata = {
            "status": verdict.status.value,
            "error_count": len(verdict.errors),
            "duration_ms": round(duration * 1000, 3),
        }

        if verdict.valid:
            settlement = self.parser.parse_field_32a(verdict.data.get("valueDateCurrencyAmount", ""))
            if settlement:
                metadata["value_date"], metadata["currency"], metadata["amount"] = settlement

        logger.info(
            f"Message {verdict.trace_id} processed: {verdict.status.value}",
            extra={
                "category": LogCategory.AUDIT,
                "context": LogContext(
                    trace_id=verdict.trace_id,
                    component="validation_service",
                    operation="validate",
                    transaction_reference=reference,
                ),
                "metadata": metadata,
            },
        )


# Default service instance
_service: Optional[ValidationService] = None
_service_lock = threading.Lock()


def get_validation_service() -> ValidationService:
    """Get the process-wide validation service, creating it on first use."""
    global _service
    with _service_lock:
        if _service is None:
            _service = ValidationService()
        return _service


def set_validation_service(service: Optional[ValidationService]) -> None:
    """Replace the process-wide validation service."""
    global _service
    with _service_lock:
        _service = service


def validate(raw_message: Union[str, bytes, None]) -> ValidationVerdict:
    """Validate a message with the process-wide service."""
    return get_validation_service().validate(raw_message)


def last_verdict() -> Optional[ValidationVerdict]:
    """Most recent verdict of the process-wide service."""
    return get_validation_service().last_verdict()
