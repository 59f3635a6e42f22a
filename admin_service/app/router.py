"""Router registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from admin_service.features.health.router import router as health_router
from admin_service.features.roles.router import router as roles_router
from admin_service.features.users.router import router as users_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from admin_service.core.settings import AppSettings


def setup_routers(app: FastAPI, app_settings: AppSettings) -> None:
    """Mount feature routers under the API prefix."""
    api_prefix = app_settings.api_prefix
    app.include_router(health_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)
    app.include_router(roles_router, prefix=api_prefix)
