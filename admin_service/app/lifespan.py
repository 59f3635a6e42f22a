"""Application lifespan management.

Startup: logging.
Shutdown: engine disposal, then the logging queue is drained.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from admin_service.core.settings import get_app_settings, get_logging_settings
from admin_service.infra.database import close_database
from admin_service.infra.logging.config import setup_logging, shutdown

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop application services."""
    setup_logging(get_logging_settings())
    app_settings = get_app_settings()
    logger.info(
        "Starting %s",
        app_settings.service_name,
        extra={"version": app_settings.version, "environment": app_settings.environment},
    )
    try:
        yield
    finally:
        await close_database()
        logger.info("Stopped %s", app_settings.service_name)
        shutdown()
