"""
SwiftGuard - Service Data Models
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from swiftguard.validators.base_validator import ErrorDetail
from swiftguard.validators.compliance_validator import ComplianceRule, ScreeningVerdict


@dataclass
class ValidationVerdict:
    """Final result of parsing, validating and screening one message."""

    status: ScreeningVerdict
    valid: bool
    errors: List[ErrorDetail] = field(default_factory=list)
    data: Dict[str, str] = field(default_factory=dict)
    raw: str = ""
    trace_id: str = ""
    timestamp: str = ""
    # Compliance rule that rejected the message, if any
    rule: Optional[ComplianceRule] = None

    @property
    def is_duplicate(self) -> bool:
        return self.rule == ComplianceRule.DUPLICATE_REFERENCE

    @property
    def is_blocked(self) -> bool:
        return self.status == ScreeningVerdict.BLOCKED

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation returned by the HTTP binding."""
        return {
            "status": self.status.value,
            "valid": self.valid,
            "errors": [error.to_dict() for error in self.errors],
            "data": dict(self.data),
            "raw": self.raw,
            "traceId": self.trace_id,
            "timestamp": self.timestamp,
        }
