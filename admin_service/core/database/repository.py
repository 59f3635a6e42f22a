"""Minimal generic repository for SQLAlchemy models.

Provides keyed lookups and keyset listing with explicit session passing.
For anything else, use the session directly.

Example:
    class UserRepository(BaseRepository[User]):
        listing = KeysetListing(User.__table__, "u", USER_FIELDS)

    user_repo = UserRepository(User)
    query = user_repo.listing.parse(filter="disabled=0", limit=20)
    page = await user_repo.list_page(session, query)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from admin_service.core.database.exceptions import NotFoundError, RepositoryError
from admin_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from admin_service.core.pagination import KeysetListing, ListQuery, Page


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Generic repository.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - create_many(session, instances) -> Sequence[T]
        - list_page(session, query) -> Page[dict]

    Subclasses set ``listing`` to expose keyset listing.
    """

    __slots__ = ("model", "_logger", "_lazy")

    listing: ClassVar[KeysetListing | None] = None

    def __init__(self, model: type[T]) -> None:
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(self, session: AsyncSession, id: Any) -> T | None:  # noqa: A002
        """Get entity by primary key."""
        instance = await session.get(self.model, id)
        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(self, session: AsyncSession, id: Any) -> T:  # noqa: A002
        """Get entity by primary key or raise NotFoundError."""
        instance = await self.get(session, id)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def create_many(self, session: AsyncSession, instances: Iterable[T]) -> Sequence[T]:
        """Add and flush several entities, returning them with server defaults loaded."""
        items = list(instances)
        session.add_all(items)
        await session.flush()
        self._lazy.debug(lambda: f"db.create_many: {self.model.__name__} x{len(items)}")
        return items

    async def list_page(self, session: AsyncSession, query: ListQuery) -> Page[dict[str, Any]]:
        """Run one keyset page of ``listing`` for a validated query.

        Raises:
            RepositoryError: The repository has no listing configured.
        """
        listing = self.listing
        if listing is None:
            raise RepositoryError(
                "Repository has no keyset listing", details={"model": self.model.__name__}
            )

        plan = listing.plan(query)
        result = await session.execute(plan.statement)
        rows = result.mappings().all()
        page = listing.finalize(rows, query)

        self._lazy.debug(
            lambda: (
                f"db.list_page: {self.model.__name__}"
                f"(direction={query.cursor.direction}, limit={query.limit})"
                f" -> {len(rows)} fetched, {page.paginator.size} returned"
            )
        )
        return page
