"""Listing response schemas.

    {
      "items": [...],
      "paginator": {"size": 2, "limit": 2, "next_token": "...", "next_page": "..."}
    }

Tokens and page links are omitted, not null, when no page exists in that
direction; routes serialise with ``response_model_exclude_unset=True`` and
:meth:`Paginator.build` only sets what is present.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class Paginator(BaseModel):
    """Pagination metadata of one page.

    Attributes:
        size: Rows actually returned.
        limit: Requested page size.
        next_token: Cursor for the following page, when one exists.
        prev_token: Cursor for the preceding page, when one exists.
        next_page: Ready-made URL for the following page.
        prev_page: Ready-made URL for the preceding page.
    """

    size: int = Field(ge=0, description="Number of items in this page")
    limit: int = Field(ge=1, description="Requested page size")
    next_token: str | None = Field(default=None, description="Cursor to fetch next page")
    prev_token: str | None = Field(default=None, description="Cursor to fetch previous page")
    next_page: str | None = Field(default=None, description="URL of the next page")
    prev_page: str | None = Field(default=None, description="URL of the previous page")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def build(cls, **values: Any) -> Paginator:
        """Construct, leaving ``None`` values unset so they are omitted on output."""
        return cls(**{key: value for key, value in values.items() if value is not None})

    def with_links(self, base_url: str, params: Mapping[str, Any] | None = None) -> Paginator:
        """Return a copy carrying ``next_page``/``prev_page`` URLs.

        ``params`` holds the request's other listing parameters (filter, sort,
        fields); empty values are dropped and the limit is always carried.
        """
        carried = {key: value for key, value in (params or {}).items() if value}
        links: dict[str, str] = {}
        if self.next_token:
            query = {"next_token": self.next_token, "limit": self.limit, **carried}
            links["next_page"] = f"{base_url}?{urlencode(query)}"
        if self.prev_token:
            query = {"prev_token": self.prev_token, "limit": self.limit, **carried}
            links["prev_page"] = f"{base_url}?{urlencode(query)}"
        return Paginator.build(**{**self.model_dump(exclude_unset=True), **links})


class Page(BaseModel, Generic[T]):
    """One page of a keyset listing.

    Usage:
        @router.get("/users", response_model=Page[UserRead], response_model_exclude_unset=True)
    """

    items: list[T] = Field(default_factory=list, description="Items in presentation order")
    paginator: Paginator

    def cast(self, schema: type[M]) -> Page[M]:
        """Validate every item into ``schema``, keeping the paginator."""
        return Page[schema](
            items=[schema.model_validate(item) for item in self.items],
            paginator=self.paginator,
        )

    def with_links(self, base_url: str, params: Mapping[str, Any] | None = None) -> Page[T]:
        """Return a copy whose paginator carries page URLs, see :meth:`Paginator.with_links`."""
        return self.model_copy(update={"paginator": self.paginator.with_links(base_url, params)})


__all__ = ["Page", "Paginator"]
