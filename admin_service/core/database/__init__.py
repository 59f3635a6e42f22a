"""Database layer: declarative base, mixins, repository."""

from admin_service.core.database.base import (
    Base,
    SerialMixin,
    TimestampMixin,
    UUIDPKMixin,
)
from admin_service.core.database.exceptions import NotFoundError, RepositoryError
from admin_service.core.database.repository import BaseRepository

__all__ = [
    "Base",
    "BaseRepository",
    "NotFoundError",
    "RepositoryError",
    "SerialMixin",
    "TimestampMixin",
    "UUIDPKMixin",
]
