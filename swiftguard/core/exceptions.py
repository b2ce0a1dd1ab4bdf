"""
SwiftGuard - Custom Exceptions

This module defines custom exception classes for SwiftGuard.
"""

from typing import Any, Dict, Optional


class SwiftGuardException(Exception):
    """Base exception for all SwiftGuard errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "SWIFTGUARD_ERROR"
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (Code: {self.error_code}, Context: {self.context})"
        return f"{self.message} (Code: {self.error_code})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationException(SwiftGuardException):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message,
            error_code="CONFIG_ERROR",
            context={"config_key": config_key} if config_key else {},
        )


class SchemaException(SwiftGuardException):
    """Exception raised when the field schema cannot be loaded or compiled."""

    def __init__(self, message: str, schema_path: Optional[str] = None):
        super().__init__(
            message,
            error_code="SCHEMA_ERROR",
            context={"schema_path": schema_path} if schema_path else {},
        )


class MalformedInputException(SwiftGuardException):
    """Exception raised when a submitted message cannot be processed at all."""

    def __init__(self, message: str, trace_id: Optional[str] = None):
        context = {"trace_id": trace_id} if trace_id else {}
        super().__init__(message, error_code="MALFORMED_INPUT", context=context)


class LedgerException(SwiftGuardException):
    """Exception raised when the dedup ledger backend fails."""

    def __init__(self, message: str, backend: Optional[str] = None):
        context = {"backend": backend} if backend else {}
        super().__init__(message, error_code="LEDGER_ERROR", context=context)


class GeneratorException(SwiftGuardException):
    """Exception raised when a message generator cannot produce a message."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        kind: Optional[str] = None,
    ):
        context = {}
        if provider:
            context["provider"] = provider
        if kind:
            context["kind"] = kind

        super().__init__(message, error_code="GENERATOR_ERROR", context=context)
