"""Users feature: keyset-paginated user administration."""

from __future__ import annotations

from .models import User
from .repository import USER_FIELDS, UserRepository, get_user_repository
from .schemas import UserRead

__all__ = [
    "USER_FIELDS",
    "User",
    "UserRead",
    "UserRepository",
    "get_user_repository",
]
