"""Health and version endpoints.

Endpoints:
    GET /health/live    - Process is alive
    GET /health/status  - Database ping; 503 when a check fails
                          (also served at /health, /healthz and /status)
    GET /version        - Service name, version and environment
"""

from __future__ import annotations

import platform
from datetime import UTC, datetime

from fastapi import APIRouter, Response, status

from admin_service.core.dependencies.database import DbSession
from admin_service.core.settings import get_app_settings
from admin_service.features.health.schemas import (
    HealthResponse,
    HealthStatus,
    LivenessResponse,
    VersionResponse,
)
from admin_service.features.health.service import check_database

router = APIRouter(tags=["health"])


@router.get("/health/live", response_model=LivenessResponse, summary="Liveness check")
async def liveness_check() -> LivenessResponse:
    return LivenessResponse(timestamp=datetime.now(UTC))


@router.get(
    "/health/status",
    response_model=HealthResponse,
    responses={503: {"description": "A dependency check failed"}},
    summary="Health status",
    description="Pings the database and reports one check per dependency",
)
@router.get("/health", response_model=HealthResponse, include_in_schema=False)
@router.get("/healthz", response_model=HealthResponse, include_in_schema=False)
@router.get("/status", response_model=HealthResponse, include_in_schema=False)
async def health_status(response: Response, session: DbSession) -> HealthResponse:
    """Overall health, unhealthy when any check is.

    Returns HTTP 503 when unhealthy so load balancers stop routing traffic.
    """
    app_settings = get_app_settings()
    checks = [await check_database(session)]
    overall = (
        HealthStatus.HEALTHY
        if all(check.status is HealthStatus.HEALTHY for check in checks)
        else HealthStatus.UNHEALTHY
    )
    if overall is HealthStatus.UNHEALTHY:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(
        status=overall,
        timestamp=datetime.now(UTC),
        service=app_settings.service_name,
        version=app_settings.version,
        checks=checks,
    )


@router.get("/version", response_model=VersionResponse, summary="Service version")
async def get_version() -> VersionResponse:
    app_settings = get_app_settings()
    return VersionResponse(
        service=app_settings.service_name,
        version=app_settings.version,
        environment=app_settings.environment,
        python_version=platform.python_version(),
    )
