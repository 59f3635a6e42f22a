"""Health feature: liveness, database status and version endpoints."""

from __future__ import annotations

from .schemas import HealthCheck, HealthResponse, HealthStatus, LivenessResponse, VersionResponse
from .service import check_database

__all__ = [
    "HealthCheck",
    "HealthResponse",
    "HealthStatus",
    "LivenessResponse",
    "VersionResponse",
    "check_database",
]
