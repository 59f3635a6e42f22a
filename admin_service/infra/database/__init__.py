"""Database infrastructure."""

from admin_service.infra.database.session import (
    AsyncSessionLocal,
    close_database,
    engine,
    get_async_session,
)

__all__ = ["AsyncSessionLocal", "close_database", "engine", "get_async_session"]
