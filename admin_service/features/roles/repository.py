"""Repository for roles."""

from __future__ import annotations

from functools import lru_cache

from admin_service.core.database import BaseRepository
from admin_service.core.pagination import KeysetListing
from admin_service.core.query import FieldWhitelist
from admin_service.features.roles.models import Role

# Descriptions are free text: selectable, never filtered or sorted on.
ROLE_FIELDS = FieldWhitelist(
    filterable=("id", "name", "system", "auto_assign", "created_at", "updated_at"),
    sortable=("id", "name", "system", "auto_assign", "created_at", "updated_at"),
    projectable=(
        "id",
        "name",
        "description",
        "system",
        "auto_assign",
        "created_at",
        "updated_at",
    ),
)


class RoleRepository(BaseRepository[Role]):
    """Keyset-paginated access to roles."""

    listing = KeysetListing(Role.__table__, "r", ROLE_FIELDS)


@lru_cache(maxsize=1)
def get_role_repository() -> RoleRepository:
    return RoleRepository(Role)
