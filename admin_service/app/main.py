"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from admin_service.app.exception_handlers import configure_exception_handlers
from admin_service.app.lifespan import lifespan
from admin_service.app.router import setup_routers
from admin_service.core.settings import get_app_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app_settings = get_app_settings()

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        debug=app_settings.debug,
        docs_url=app_settings.docs_url,
        openapi_url=app_settings.openapi_url,
        lifespan=lifespan,
    )

    configure_exception_handlers(app)
    setup_routers(app, app_settings)

    return app


# Application instance for uvicorn
app = create_app()
