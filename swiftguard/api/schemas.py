"""
SwiftGuard - API Schemas
Pydantic models for response documentation.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorDetailModel(BaseModel):
    """One structural or compliance error."""
    message: str = Field(..., description="Human readable error message")
    instancePath: Optional[str] = Field(None, description="JSON pointer to the offending field")
    keyword: Optional[str] = Field(None, description="Schema keyword or compliance rule")
    params: Optional[Dict[str, Any]] = Field(None, description="Rule specific parameters")


class VerdictResponse(BaseModel):
    """Verdict for a submitted message."""
    status: str = Field(..., description="success, failed or blocked")
    valid: bool = Field(..., description="True only when the message passed every check")
    errors: List[ErrorDetailModel] = Field(default_factory=list)
    data: Dict[str, str] = Field(default_factory=dict, description="Parsed MT103 fields")
    raw: str = Field("", description="Message as submitted")
    traceId: str = Field(..., description="Per-request trace id")
    timestamp: str = Field(..., description="ISO-8601 UTC processing time")


class ErrorResponse(BaseModel):
    """Request could not be processed."""
    status: str = Field("error")
    message: str


class NoMessageResponse(BaseModel):
    """Returned before the first message is processed."""
    status: str = Field("none")
    message: str = Field("No message processed yet")


class HealthResponse(BaseModel):
    """Liveness check response."""
    status: str = Field("healthy")
    service: str
    version: str
