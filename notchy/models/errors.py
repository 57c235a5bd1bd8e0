"""
Error response schema.

Dependencies: pydantic
System role: Common API error body
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ErrorResponse(BaseModel):
    """Error body returned by every endpoint."""

    error: str = Field(description="Error message")
    details: str | None = Field(default=None, description="Reason, for generation failures")
    timestamp: str | None = Field(default=None, description="ISO-8601 time of the failure")
