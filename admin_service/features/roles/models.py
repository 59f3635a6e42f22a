"""SQLAlchemy models for the roles feature."""

from __future__ import annotations

from sqlalchemy import Boolean, Index, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from admin_service.core.database import Base, SerialMixin, TimestampMixin, UUIDPKMixin


class Role(Base, UUIDPKMixin, SerialMixin, TimestampMixin):
    """RBAC role. ``system`` roles are built in; ``auto_assign`` roles go to new users."""

    __tablename__ = "roles"
    __table_args__ = (Index("ix_roles_pagination", "serial_id", "id"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    system: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    auto_assign: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name!r})>"
