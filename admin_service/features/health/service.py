"""Dependency checks behind the health endpoints."""

from __future__ import annotations

import asyncio
import logging
import time

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from admin_service.features.health.schemas import HealthCheck, HealthStatus

logger = logging.getLogger(__name__)


async def check_database(session: AsyncSession, timeout: float = 5.0) -> HealthCheck:
    """Ping the database with ``SELECT 1``.

    A failed or slow ping is reported as an unhealthy check, never raised.
    """
    kind = session.bind.dialect.name if session.bind is not None else "unknown"
    start_time = time.perf_counter()
    try:
        async with asyncio.timeout(timeout):
            await session.execute(text("SELECT 1"))
    except TimeoutError:
        logger.warning("Database health check timed out", extra={"timeout": timeout})
        return HealthCheck(
            name="database",
            kind=kind,
            status=HealthStatus.UNHEALTHY,
            latency_ms=(time.perf_counter() - start_time) * 1000,
            message=f"Timeout after {timeout}s",
        )
    except SQLAlchemyError as exc:
        logger.warning("Database health check failed", extra={"error": str(exc)})
        return HealthCheck(
            name="database",
            kind=kind,
            status=HealthStatus.UNHEALTHY,
            latency_ms=(time.perf_counter() - start_time) * 1000,
            message=f"Connection failed: {exc}",
        )

    return HealthCheck(
        name="database",
        kind=kind,
        status=HealthStatus.HEALTHY,
        latency_ms=(time.perf_counter() - start_time) * 1000,
        message="Database operational",
    )
