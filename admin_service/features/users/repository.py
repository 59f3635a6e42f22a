"""Repository for users."""

from __future__ import annotations

from functools import lru_cache

from admin_service.core.database import BaseRepository
from admin_service.core.pagination import KeysetListing
from admin_service.core.query import FieldWhitelist
from admin_service.features.users.models import User

USER_COLUMNS = ("id", "first_name", "last_name", "email", "disabled", "created_at", "updated_at")

USER_FIELDS = FieldWhitelist.uniform(USER_COLUMNS)


class UserRepository(BaseRepository[User]):
    """Keyset-paginated access to users."""

    listing = KeysetListing(User.__table__, "u", USER_FIELDS)


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    return UserRepository(User)
