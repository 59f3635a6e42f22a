"""SQLAlchemy models for the users feature."""

from __future__ import annotations

from sqlalchemy import Boolean, Index, String, false
from sqlalchemy.orm import Mapped, mapped_column

from admin_service.core.database import Base, SerialMixin, TimestampMixin, UUIDPKMixin


class User(Base, UUIDPKMixin, SerialMixin, TimestampMixin):
    """Administrative user account."""

    __tablename__ = "users"
    __table_args__ = (Index("ix_users_pagination", "serial_id", "id"),)

    first_name: Mapped[str] = mapped_column(String(25), nullable=False)
    last_name: Mapped[str] = mapped_column(String(25), nullable=False)
    email: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    disabled: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
