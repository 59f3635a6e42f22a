"""Roles feature: keyset-paginated RBAC role administration."""

from __future__ import annotations

from .models import Role
from .repository import ROLE_FIELDS, RoleRepository, get_role_repository
from .schemas import RoleRead

__all__ = [
    "ROLE_FIELDS",
    "Role",
    "RoleRead",
    "RoleRepository",
    "get_role_repository",
]
