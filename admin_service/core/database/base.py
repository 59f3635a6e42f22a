"""Declarative base and column mixins for admin entities.

Every listable entity carries two keys:

- ``id``: UUID primary key, exposed to clients and used as the keyset tie-breaker
- ``serial_id``: monotonically assigned, unique integer used as the keyset order key

Example:
    class Role(Base, UUIDPKMixin, SerialMixin, TimestampMixin):
        __tablename__ = "roles"
        name: Mapped[str] = mapped_column(String(100), unique=True)
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import BigInteger, DateTime, Identity, Integer, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base with consistent constraint naming."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class UUIDPKMixin:
    """UUID v4 primary key."""

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
        comment="UUID v4 primary key",
    )


class SerialMixin:
    """Database-assigned order key.

    PostgreSQL fills it from an identity sequence. SQLite has no sequences on
    non-primary-key columns, so callers that target SQLite assign it explicitly.
    """

    serial_id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer(), "sqlite"),
        Identity(always=False),
        unique=True,
        nullable=False,
        comment="Monotonic order key used for keyset pagination",
    )


class TimestampMixin:
    """Creation and modification timestamps (UTC)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )
