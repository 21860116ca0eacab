"""
Developer Registry — Shared Response Schemas
==============================================

What:  Response models shared by every router: errors, plain messages and
       the health check.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "referential_integrity_error",
            "message": "This level has associated developers and cannot be deleted.",
            "details": {"level_id": 3, "developer_count": 2},
            "request_id": "1f0c2a9e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class MessageResponse(BaseModel):
    """Body returned by successful deletions."""
    message: str = Field(description="Human-readable outcome")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    message: str = Field(description="Human-readable connectivity summary")
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
