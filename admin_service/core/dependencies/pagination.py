"""Keyset listing query parameters for FastAPI routes.

Usage:
    from admin_service.core.dependencies.pagination import ListParamsDep

    @router.get("/users", response_model=Page[UserRead], response_model_exclude_unset=True)
    async def list_users(session: DbSession, params: ListParamsDep) -> Page[UserRead]:
        query = repo.listing.parse(**params.listing_kwargs())
        ...

Values are passed through unvalidated; ``KeysetListing.parse`` owns the
checks so that every error is reported as a listing problem type.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Query
from pydantic import BaseModel, Field


class ListParams(BaseModel):
    """Raw listing parameters of one request."""

    filter: str | None = Field(default=None, description="Filter expression")
    sort: str | None = Field(default=None, description="Sort expression")
    fields: str | None = Field(default=None, description="Comma-separated fields to return")
    next_token: str | None = Field(default=None, description="Cursor of the following page")
    prev_token: str | None = Field(default=None, description="Cursor of the preceding page")
    limit: int | None = Field(default=None, description="Page size")

    model_config = {"frozen": True}

    def listing_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``KeysetListing.parse``."""
        return self.model_dump()

    def carried(self) -> dict[str, str | None]:
        """Parameters repeated verbatim in ``next_page``/``prev_page`` links."""
        return {"filter": self.filter, "sort": self.sort, "fields": self.fields}


def get_list_params(
    filter: Annotated[  # noqa: A002
        str | None,
        Query(description="Filter, e.g. first_name='Ada' AND disabled=0"),
    ] = None,
    sort: Annotated[
        str | None,
        Query(description="Sort, e.g. last_name ASC, created_at DESC"),
    ] = None,
    fields: Annotated[
        str | None,
        Query(description="Fields to return, e.g. id,email"),
    ] = None,
    next_token: Annotated[
        str | None,
        Query(description="next_token from the previous response"),
    ] = None,
    prev_token: Annotated[
        str | None,
        Query(description="prev_token from the previous response"),
    ] = None,
    limit: Annotated[
        int | None,
        Query(description="Page size (defaults to PAGINATION_DEFAULT_LIMIT)"),
    ] = None,
) -> ListParams:
    """Collect listing query parameters."""
    return ListParams(
        filter=filter,
        sort=sort,
        fields=fields,
        next_token=next_token,
        prev_token=prev_token,
        limit=limit,
    )


ListParamsDep = Annotated[ListParams, Depends(get_list_params)]
