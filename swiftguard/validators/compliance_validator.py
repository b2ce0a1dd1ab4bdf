"""
Compliance Validators

Business-rule screening applied to structurally valid MT103 records:
- Sanctions screening of party fields against a jurisdiction denylist
- Optional business-hours gate
- Duplicate transaction reference rejection
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Pattern, Tuple
from zoneinfo import ZoneInfo

from swiftguard.core.config import WEEKDAY_NAMES, BusinessHoursConfig, ComplianceConfig
from swiftguard.core.structured_logging import LogCategory
from swiftguard.validators.base_validator import BaseValidator, ErrorDetail, ValidationResult
from swiftguard.validators.dedup_ledger import DedupLedger, InMemoryDedupLedger

logger = logging.getLogger(__name__)

SANCTIONS_ALERT_MESSAGE = "AML Alert: Sanctioned jurisdiction detected"


class ScreeningVerdict(str, Enum):
    """Outcome of the compliance screen."""

    SUCCESS = "success"
    FAILED = "failed"
    BLOCKED = "blocked"


class ComplianceRule(str, Enum):
    """Rule codes reported on compliance errors."""

    SANCTIONS_JURISDICTION = "SANCTIONS_JURISDICTION"
    OUTSIDE_BUSINESS_HOURS = "OUTSIDE_BUSINESS_HOURS"
    DUPLICATE_REFERENCE = "DUPLICATE_REFERENCE"


@dataclass
class ScreeningOutcome:
    """Verdict plus the business-rule errors to append after structural ones."""

    verdict: ScreeningVerdict
    extra_errors: List[ErrorDetail] = field(default_factory=list)
    rule: Optional[ComplianceRule] = None


class SanctionsValidator(BaseValidator):
    """
    Sanctions screening validator.

    Searches party fields for sanctioned-jurisdiction markers. Country names
    match case-insensitively on word boundaries; ISO alpha-2 codes match only
    as standalone upper-case tokens, so words such as ``FIRST`` or ``SKIP``
    are not mistaken for ``IR`` or ``KP``.
    """

    def __init__(
        self,
        sanctioned_jurisdictions: Optional[Mapping[str, str]] = None,
        screened_fields: Optional[List[str]] = None,
    ):
        """
        Initialize the sanctions validator.

        Args:
            sanctioned_jurisdictions: ISO alpha-2 code -> country name
            screened_fields: Record fields to screen
        """
        defaults = ComplianceConfig()
        self.sanctioned_jurisdictions = dict(
            sanctioned_jurisdictions
            if sanctioned_jurisdictions is not None
            else defaults.sanctioned_jurisdictions
        )
        self.screened_fields = list(screened_fields or defaults.screened_fields)
        self._markers = self._compile_markers(self.sanctioned_jurisdictions)

    @property
    def name(self) -> str:
        return "SanctionsValidator"

    @staticmethod
    def _compile_markers(jurisdictions: Mapping[str, str]) -> List[Tuple[str, str, Pattern]]:
        markers = []
        for code, country in jurisdictions.items():
            # Multi-word names may wrap onto the next address line
            name_pattern = r"\s+".join(re.escape(word) for word in country.split())
            markers.append(
                (code, country, re.compile(rf"\b{name_pattern}\b", re.IGNORECASE))
            )
            # Standalone token, or the country prefix of an IBAN (IR82...)
            code_pattern = re.escape(code.upper())
            markers.append(
                (
                    code,
                    code,
                    re.compile(rf"(?<![A-Za-z0-9]){code_pattern}(?:(?![A-Za-z0-9])|(?=\d{{2}}))"),
                )
            )
        return markers

    def validate(self, data: Any) -> ValidationResult:
        """
        Screen a parsed record against the jurisdiction denylist.

        Args:
            data: Parsed record

        Returns:
            ValidationResult with one error per screened field that matched
        """
        result = self._create_result()

        for field_name in self.screened_fields:
            text = data.get(field_name) if isinstance(data, Mapping) else None
            if not text:
                continue

            match = self._find_marker(text)
            if match:
                code, marker = match
                result.add_error(
                    SANCTIONS_ALERT_MESSAGE,
                    instance_path=f"/{field_name}",
                    keyword=ComplianceRule.SANCTIONS_JURISDICTION.value,
                    field=field_name,
                    marker=marker,
                    countryCode=code,
                    countryName=self.sanctioned_jurisdictions[code],
                )
        return result

    def _find_marker(self, text: str) -> Optional[Tuple[str, str]]:
        for code, marker, pattern in self._markers:
            if pattern.search(text):
                return code, marker
        return None


class BusinessHoursValidator(BaseValidator):
    """Rejects messages received outside the configured business window."""

    def __init__(self, config: Optional[BusinessHoursConfig] = None):
        self.config = config or BusinessHoursConfig()
        self.timezone = ZoneInfo(self.config.timezone)
        self.weekdays = {day.lower() for day in self.config.weekdays}

    @property
    def name(self) -> str:
        return "BusinessHoursValidator"

    def validate(self, data: Any, received_at: Optional[datetime] = None) -> ValidationResult:
        """
        Check the receive time against the business window.

        Args:
            data: Parsed record (unused, kept for the validator interface)
            received_at: Receive time; naive values are taken as UTC

        Returns:
            ValidationResult with an error when outside business hours
        """
        result = self._create_result()

        received_at = received_at or datetime.now(timezone.utc)
        if received_at.tzinfo is None:
            received_at = received_at.replace(tzinfo=timezone.utc)
        local_time = received_at.astimezone(self.timezone)

        weekday = WEEKDAY_NAMES[local_time.weekday()]
        in_window = (
            weekday in self.weekdays
            and self.config.start_hour <= local_time.hour < self.config.end_hour
        )

        if not in_window:
            result.add_error(
                f"Outside business hours: {local_time.isoformat()} is not within "
                f"{self.config.start_hour:02d}:00-{self.config.end_hour:02d}:00 "
                f"{self.config.timezone} on a business day.",
                keyword=ComplianceRule.OUTSIDE_BUSINESS_HOURS.value,
                receivedAt=local_time.isoformat(),
            )

        return result


class ComplianceGate:
    """
    Applies business rules to structurally valid records.

    Rule order: sanctions (hard stop), business hours, duplicate reference.
    Only an accepted message mutates the ledger, so a blocked or rejected
    message can be corrected and resubmitted under the same reference.
    """

    def __init__(
        self,
        ledger: Optional[DedupLedger] = None,
        config: Optional[ComplianceConfig] = None,
    ):
        self.config = config or ComplianceConfig()
        self.ledger = ledger if ledger is not None else InMemoryDedupLedger()

        self.sanctions_validator = (
            SanctionsValidator(
                self.config.sanctioned_jurisdictions,
                self.config.screened_fields,
            )
            if self.config.sanctions_enabled
            else None
        )
        self.business_hours_validator = (
            BusinessHoursValidator(self.config.business_hours)
            if self.config.business_hours.enabled
            else None
        )

    def screen(
        self,
        record: Dict[str, str],
        structurally_valid: bool,
        received_at: Optional[datetime] = None,
    ) -> ScreeningOutcome:
        """
        Screen a parsed record.

        Args:
            record: Parsed record
            structurally_valid: Result of the field validator
            received_at: Receive time for the business-hours gate

        Returns:
            ScreeningOutcome with verdict and business-rule errors
        """
        if not structurally_valid:
            return ScreeningOutcome(verdict=ScreeningVerdict.FAILED)

        reference = record.get("transactionReference", "")

        if self.sanctions_validator is not None:
            sanctions = self.sanctions_validator.validate(record)
            if not sanctions.is_valid:
                logger.warning(
                    f"Sanctions screen blocked reference {reference}",
                    extra={
                        "category": LogCategory.COMPLIANCE,
                        "metadata": {"hits": [e.params for e in sanctions.errors]},
                    },
                )
                return ScreeningOutcome(
                    verdict=ScreeningVerdict.BLOCKED,
                    extra_errors=list(sanctions.errors),
                    rule=ComplianceRule.SANCTIONS_JURISDICTION,
                )

        if self.business_hours_validator is not None:
            hours = self.business_hours_validator.validate(record, received_at)
            if not hours.is_valid:
                logger.info(f"Reference {reference} received outside business hours")
                return ScreeningOutcome(
                    verdict=ScreeningVerdict.FAILED,
                    extra_errors=list(hours.errors),
                    rule=ComplianceRule.OUTSIDE_BUSINESS_HOURS,
                )

        if not self.ledger.insert_if_absent(reference):
            logger.warning(
                f"Duplicate transaction reference {reference}",
                extra={"category": LogCategory.COMPLIANCE},
            )
            return ScreeningOutcome(
                verdict=ScreeningVerdict.FAILED,
                extra_errors=[
                    ErrorDetail(
                        message=f"Duplicate Transaction Reference: {reference} already exists.",
                        instance_path="/transactionReference",
                        keyword=ComplianceRule.DUPLICATE_REFERENCE.value,
                        params={"transactionReference": reference},
                    )
                ],
                rule=ComplianceRule.DUPLICATE_REFERENCE,
            )

        return ScreeningOutcome(verdict=ScreeningVerdict.SUCCESS)
