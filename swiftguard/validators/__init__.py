"""
MT103 Validators

Validation framework for parsed MT103 records:
- Schema-driven structural validation
- Sanctions screening
- Business-hours gate
- Duplicate reference detection against a dedup ledger
"""

from typing import List

from swiftguard.validators.base_validator import (
    ErrorDetail,
    ValidationResult,
    BaseValidator,
)
from swiftguard.validators.schema_validator import (
    SchemaValidator,
    load_schema,
)
from swiftguard.validators.dedup_ledger import (
    DedupLedger,
    InMemoryDedupLedger,
    RedisDedupLedger,
    create_ledger,
)
from swiftguard.validators.compliance_validator import (
    ComplianceGate,
    ComplianceRule,
    ScreeningOutcome,
    ScreeningVerdict,
    SanctionsValidator,
    BusinessHoursValidator,
    SANCTIONS_ALERT_MESSAGE,
)

__all__: List[str] = [
    # Base classes
    "ErrorDetail",
    "ValidationResult",
    "BaseValidator",
    # Structural validation
    "SchemaValidator",
    "load_schema",
    # Dedup ledger
    "DedupLedger",
    "InMemoryDedupLedger",
    "RedisDedupLedger",
    "create_ledger",
    # Compliance
    "ComplianceGate",
    "ComplianceRule",
    "ScreeningOutcome",
    "ScreeningVerdict",
    "SanctionsValidator",
    "BusinessHoursValidator",
    "SANCTIONS_ALERT_MESSAGE",
]
