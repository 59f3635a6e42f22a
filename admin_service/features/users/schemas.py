"""Pydantic schemas for the users feature.

Every field is optional because listings return only the requested
``fields``; unset fields are left out of the response entirely.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    """User as returned by the API. ``password_hash`` is never exposed."""

    id: UUID | None = None
    first_name: str | None = Field(default=None, max_length=25)
    last_name: str | None = Field(default=None, max_length=25)
    email: str | None = Field(default=None, max_length=50)
    disabled: bool | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
