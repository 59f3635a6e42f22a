"""Keyset (cursor) pagination for listing endpoints.

Listings are ordered newest first by ``(order_key, row_id)``. A page is
fetched with one extra look-ahead row; the rows actually returned mint
``next_token``/``prev_token`` cursors only when a page exists in that
direction.

    listing = KeysetListing(User.__table__, "u", USER_FIELDS)

    @router.get("/users", response_model=Page[UserRead], response_model_exclude_unset=True)
    async def list_users(session: DbSession, params: ListParamsDep) -> Page[UserRead]:
        query = listing.parse(**params.listing_kwargs())
        ...

Cursors are opaque base64 strings that clients pass back unchanged.
"""

from admin_service.core.pagination.criteria import (
    KeysetCriteria,
    PageWindow,
    build_criteria,
    finalize_page,
)
from admin_service.core.pagination.cursor import CursorCodec, CursorData, OrderKeyKind
from admin_service.core.pagination.direction import Direction, ResolvedCursor, resolve_direction
from admin_service.core.pagination.listing import KeysetListing, ListingPlan, ListQuery
from admin_service.core.pagination.schemas import Page, Paginator

__all__ = [
    "CursorCodec",
    "CursorData",
    "Direction",
    "KeysetCriteria",
    "KeysetListing",
    "ListQuery",
    "ListingPlan",
    "OrderKeyKind",
    "Page",
    "PageWindow",
    "Paginator",
    "ResolvedCursor",
    "build_criteria",
    "finalize_page",
    "resolve_direction",
]
