"""
Base Validator Framework

Provides common validation infrastructure for the structural and compliance
validators.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class ErrorDetail:
    """One structural or business-rule violation."""

    message: str
    instance_path: Optional[str] = None
    keyword: str = ""
    params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"message": self.message}
        if self.instance_path is not None:
            result["instancePath"] = self.instance_path
        if self.keyword:
            result["keyword"] = self.keyword
        if self.params:
            result["params"] = dict(self.params)
        return result


@dataclass
class ValidationResult:
    """Validation result with itemized errors and metadata."""

    is_valid: bool = True
    errors: List[ErrorDetail] = field(default_factory=list)
    validated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    validator_name: str = ""
    validator_version: str = "1.0"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_error(
        self,
        message: str,
        instance_path: Optional[str] = None,
        keyword: str = "",
        **params,
    ) -> None:
        """Add a validation error."""
        self.errors.append(
            ErrorDetail(
                message=message,
                instance_path=instance_path,
                keyword=keyword,
                params=params,
            )
        )
        self.is_valid = False

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            "is_valid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "validated_at": self.validated_at.isoformat(),
            "validator_name": self.validator_name,
            "validator_version": self.validator_version,
            "metadata": self.metadata,
        }

    @property
    def error_count(self) -> int:
        return len(self.errors)


class BaseValidator(ABC):
    """
    Abstract base class for record validators.

    Validators receive a parsed MT103 record and report violations through a
    ValidationResult. They never raise for invalid data.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return validator name."""
        pass

    @property
    def version(self) -> str:
        """Return validator version."""
        return "1.0"

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate the provided data.

        Args:
            data: Parsed record

        Returns:
            ValidationResult with any errors
        """
        pass

    def _create_result(self) -> ValidationResult:
        """Create a new validation result."""
        return ValidationResult(
            validator_name=self.name,
            validator_version=self.version,
        )
