"""Health and version response schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class HealthCheck(BaseModel):
    """Result of checking a single dependency."""

    name: str = Field(description="Check name")
    kind: str = Field(description="Kind of dependency checked")
    status: HealthStatus = Field(description="Check status")
    latency_ms: float = Field(description="Check latency in milliseconds")
    message: str = Field(default="", description="Status message")


class HealthResponse(BaseModel):
    """Overall service health with one entry per dependency.

    Example:
        ```json
        {
            "status": "healthy",
            "timestamp": "2025-01-01T00:00:00Z",
            "service": "admin-service",
            "version": "1.0.0",
            "checks": [
                {"name": "database", "kind": "sqlite", "status": "healthy",
                 "latency_ms": 0.42, "message": "Database operational"}
            ]
        }
        ```
    """

    status: HealthStatus = Field(description="Health status (healthy, unhealthy)")
    timestamp: datetime = Field(description="Check timestamp")
    service: str = Field(description="Service name")
    version: str = Field(description="Service version")
    checks: list[HealthCheck] = Field(default_factory=list)


class LivenessResponse(BaseModel):
    alive: bool = Field(default=True)
    timestamp: datetime


class VersionResponse(BaseModel):
    """Build information for the running service."""

    service: str
    version: str
    environment: str
    python_version: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "service": "admin-service",
                "version": "1.0.0",
                "environment": "production",
                "python_version": "3.12.4",
            }
        }
    )
