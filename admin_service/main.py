"""Server entry point for admin-service.

    $ admin-service
    $ APP_PORT=9000 APP_DEBUG=true admin-service
"""

from __future__ import annotations

import sys
from typing import NoReturn


def run_server() -> NoReturn:
    """Serve the FastAPI application with uvicorn using configured settings."""
    import uvicorn

    from admin_service.core.settings import get_app_settings, get_logging_settings

    settings = get_app_settings()
    log_settings = get_logging_settings()

    uvicorn.run(
        "admin_service.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        access_log=settings.debug,
        log_level=log_settings.level.lower(),
    )
    sys.exit(0)


if __name__ == "__main__":
    run_server()
