"""Pydantic schemas for the roles feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class RoleRead(BaseModel):
    """Role as returned by the API; fields absent from ``fields`` stay unset."""

    id: UUID | None = None
    name: str | None = None
    description: str | None = None
    system: bool | None = None
    auto_assign: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
