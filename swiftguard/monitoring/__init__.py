"""
SwiftGuard - Monitoring Module
"""

from .metrics import (
    MESSAGES_PROCESSED,
    COMPLIANCE_RULE_HITS,
    STRUCTURAL_ERRORS,
    PIPELINE_DURATION,
    PIPELINE_FAULTS,
    record_verdict,
    record_fault,
)

__all__ = [
    "MESSAGES_PROCESSED",
    "COMPLIANCE_RULE_HITS",
    "STRUCTURAL_ERRORS",
    "PIPELINE_DURATION",
    "PIPELINE_FAULTS",
    "record_verdict",
    "record_fault",
]
