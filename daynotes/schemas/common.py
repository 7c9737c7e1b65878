"""
DayNotes Backend — Shared Response Schemas
============================================

ErrorResponse is the single error envelope used by every handler in
main.py; the request correlation ID travels in the X-Request-ID header
instead of the body.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Example:
        {"message": "Missing or invalid field(s): userId"}
    """
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
