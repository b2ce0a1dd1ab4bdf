"""
SwiftGuard - Structured Logging

JSON log formatting with per-request trace context. Modules log through
standard ``logging.getLogger(__name__)`` loggers and attach structured fields
via ``extra={"context": LogContext(...), "metadata": {...}}``.
"""

import json
import logging
import logging.config
import traceback
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class LogCategory(Enum):
    """Log categories for filtering and routing."""

    SYSTEM = "system"
    PARSING = "parsing"
    VALIDATION = "validation"
    COMPLIANCE = "compliance"
    AUDIT = "audit"
    EXTERNAL_API = "external_api"


@dataclass
class LogContext:
    """Context information for structured logging."""

    trace_id: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    transaction_reference: Optional[str] = None
    additional_fields: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = asdict(self)
        # Remove None values
        return {k: v for k, v in result.items() if v is not None and v != {}}


@dataclass
class LogEvent:
    """Structured log event."""

    timestamp: float
    level: str
    category: LogCategory
    message: str
    component: str
    context: Optional[LogContext] = None
    exception: Optional[BaseException] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "timestamp": datetime.fromtimestamp(self.timestamp, timezone.utc).isoformat(),
            "level": self.level,
            "category": self.category.value,
            "message": self.message,
            "component": self.component,
            "metadata": self.metadata,
        }

        if self.context:
            result["context"] = self.context.to_dict()

        if self.exception:
            result["exception"] = {
                "type": type(self.exception).__name__,
                "message": str(self.exception),
                "traceback": traceback.format_exception(
                    type(self.exception), self.exception, self.exception.__traceback__
                ),
            }

        return result

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured logging."""

    def __init__(self, include_context: bool = True):
        super().__init__()
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        context = getattr(record, "context", None) if self.include_context else None
        category = getattr(record, "category", LogCategory.SYSTEM)
        metadata = getattr(record, "metadata", {})

        log_event = LogEvent(
            timestamp=record.created,
            level=record.levelname,
            category=category,
            message=record.getMessage(),
            component=getattr(record, "component", record.name),
            context=context,
            exception=record.exc_info[1] if record.exc_info else None,
            metadata=metadata,
        )

        return log_event.to_json()


SIMPLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_logging_config(level: str = "INFO", structured: bool = False) -> Dict[str, Any]:
    """Build a ``logging.config.dictConfig`` document."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {"()": StructuredFormatter, "include_context": True},
            "simple": {"format": SIMPLE_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "structured" if structured else "simple",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "swiftguard": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def setup_logging(level: str = "INFO", structured: bool = False) -> None:
    """Configure the logging system."""
    logging.config.dictConfig(build_logging_config(level.upper(), structured))
    logging.getLogger(__name__).debug(
        "Logging configured", extra={"metadata": {"level": level, "structured": structured}}
    )
