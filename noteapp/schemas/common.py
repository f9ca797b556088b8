"""
Notes Backend — Shared Response Schemas
========================================

What:  Error and health-check bodies shared by every route module.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Error body returned by every failing endpoint.

    `error` is a single message, or a list of messages for validation
    failures:
        {"error": "token missing", "request_id": "a1b2c3d4"}
        {"error": ["Validation isEmail on username failed"], "request_id": "..."}
    """
    error: Union[str, List[str]] = Field(description="Error message(s)")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
