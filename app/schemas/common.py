"""
Common schemas used across multiple endpoints.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Error message")
    timestamp: datetime = Field(default_factory=_utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "error": "InternalServerError",
                "message": "An unexpected error occurred",
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }


class HealthResponse(BaseModel):
    """Health check response."""

    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(default_factory=_utcnow)
    uptime_seconds: float = Field(default=0, description="Service uptime")

    class Config:
        json_schema_extra = {
            "example": {
                "service": "Health Log Question Engine",
                "version": "1.0.0",
                "status": "healthy",
                "timestamp": "2024-01-15T10:30:00Z",
                "uptime_seconds": 3600.5
            }
        }
