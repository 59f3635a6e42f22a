"""Keyset criteria: WHERE/ORDER BY before the query, page window after it.

Listings are presented newest first, ``order_key DESC, row_id DESC``.

    first page   no seek predicate             ORDER BY key DESC, id DESC
    forward      key < anchor (id tie-break)   ORDER BY key DESC, id DESC
    backward     key > anchor (id tie-break)   ORDER BY key ASC,  id ASC

Every query fetches ``limit + 1`` rows; the extra look-ahead row only tells
:func:`finalize_page` whether another page exists in the fetch direction.
Backward pages come back nearest-first and are reversed into presentation
order before tokens are minted.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from admin_service.core.pagination.cursor import CursorCodec, CursorData
from admin_service.core.pagination.direction import Direction
from admin_service.core.query.fragment import SqlFragment

ANCHOR_ORDER_PARAM = "anchor_order_key"
ANCHOR_ROW_PARAM = "anchor_row_id"


@dataclass(frozen=True, slots=True)
class KeysetCriteria:
    """Output of :func:`build_criteria`.

    Attributes:
        where: Predicate body (no ``WHERE`` keyword), possibly empty.
        internal_sort: ORDER BY body used to fetch the page.
        external_sort: ORDER BY body of the page as presented.
    """

    where: SqlFragment
    internal_sort: str
    external_sort: str

    @property
    def where_clause(self) -> str:
        return f"WHERE {self.where.text}" if self.where else ""


def build_criteria(
    direction: Direction,
    anchor: CursorData | None,
    filter_fragment: SqlFragment,
    table_alias: str,
    *,
    id_column: str = "id",
    order_column: str = "serial_id",
) -> KeysetCriteria:
    """Combine a compiled filter with the seek predicate for ``direction``.

    ``filter_fragment`` must already be qualified with ``table_alias``; it is
    parenthesised so its OR connectors cannot leak into the seek predicate.

    Raises:
        ValueError: A forward or backward direction without an anchor.
    """
    order = f"{table_alias}.{order_column}" if table_alias else order_column
    row = f"{table_alias}.{id_column}" if table_alias else id_column
    descending = f"{order} DESC, {row} DESC"

    if direction is Direction.NONE:
        return KeysetCriteria(filter_fragment, descending, descending)

    if anchor is None:
        raise ValueError(f"{direction.value} pagination requires an anchor")

    op = "<" if direction is Direction.FORWARD else ">"
    seek = (
        f"({order} {op} :{ANCHOR_ORDER_PARAM}) AND "
        f"({row} {op} :{ANCHOR_ROW_PARAM} OR {order} {op} :{ANCHOR_ORDER_PARAM})"
    )
    text = f"({filter_fragment.text}) AND {seek}" if filter_fragment else seek
    where = SqlFragment(
        text,
        {
            **filter_fragment.params,
            ANCHOR_ORDER_PARAM: anchor.order_key,
            ANCHOR_ROW_PARAM: anchor.row_id,
        },
        {
            **filter_fragment.columns,
            ANCHOR_ORDER_PARAM: order_column,
            ANCHOR_ROW_PARAM: id_column,
        },
    )
    internal = descending if direction is Direction.FORWARD else f"{order} ASC, {row} ASC"
    return KeysetCriteria(where, internal, descending)


T = TypeVar("T")


@dataclass(frozen=True)
class PageWindow(Generic[T]):
    """Rows to present plus the navigation derived from the look-ahead row."""

    rows: tuple[T, ...]
    has_more_next: bool
    has_more_prev: bool
    next_token: str | None = None
    prev_token: str | None = None

    @property
    def size(self) -> int:
        return len(self.rows)


def finalize_page(
    rows: Sequence[T],
    limit: int,
    direction: Direction,
    *,
    codec: CursorCodec,
    id_attr: str = "id",
    order_attr: str = "serial_id",
) -> PageWindow[T]:
    """Trim the look-ahead row and mint the page's navigation tokens.

    Args:
        rows: Up to ``limit + 1`` rows in fetch (internal) order.
        limit: Requested page size.
        direction: Direction the rows were fetched in.
        codec: Codec used to mint tokens.
        id_attr: Row key holding the identifier.
        order_attr: Row key holding the order key.

    Returns:
        Window whose rows are in presentation order. The prev token anchors on
        the first presented row and the next token on the last; each is only
        present when a page is known to exist in that direction.
    """
    if limit < 1:
        raise ValueError(f"limit must be positive, got {limit}")

    has_more = len(rows) > limit
    display = list(rows[:limit])
    if not display:
        return PageWindow((), has_more_next=False, has_more_prev=False)

    if direction is Direction.BACKWARD:
        display.reverse()
        has_more_next, has_more_prev = True, has_more
    elif direction is Direction.FORWARD:
        has_more_next, has_more_prev = has_more, True
    else:
        has_more_next, has_more_prev = has_more, False

    next_token = (
        codec.encode_row(display[-1], id_attr=id_attr, order_attr=order_attr)
        if has_more_next
        else None
    )
    prev_token = (
        codec.encode_row(display[0], id_attr=id_attr, order_attr=order_attr)
        if has_more_prev
        else None
    )
    return PageWindow(tuple(display), has_more_next, has_more_prev, next_token, prev_token)
