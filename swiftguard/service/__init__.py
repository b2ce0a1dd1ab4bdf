"""
SwiftGuard - Validation Service Module
"""

from .models import ValidationVerdict
from .validation_service import (
    ValidationService,
    get_validation_service,
    set_validation_service,
    validate,
    last_verdict,
)

__all__ = [
    "ValidationVerdict",
    "ValidationService",
    "get_validation_service",
    "set_validation_service",
    "validate",
    "last_verdict",
]
