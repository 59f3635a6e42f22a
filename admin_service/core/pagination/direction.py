"""Pagination direction resolution from client-supplied tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from admin_service.core.exceptions import (
    InvalidCursorError,
    InvalidNextTokenError,
    InvalidPrevTokenError,
)
from admin_service.core.pagination.cursor import CursorCodec, CursorData

logger = logging.getLogger(__name__)


class Direction(StrEnum):
    """Which way a request pages relative to its anchor.

    ``NONE`` is the first page, ``FORWARD`` continues toward smaller order
    keys after a next token, ``BACKWARD`` toward larger ones after a prev token.
    """

    NONE = "none"
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True, slots=True)
class ResolvedCursor:
    direction: Direction
    anchor: CursorData | None = None

    @property
    def row_id(self) -> UUID | None:
        return self.anchor.row_id if self.anchor else None

    @property
    def order_key(self) -> int | datetime | None:
        return self.anchor.order_key if self.anchor else None


FIRST_PAGE = ResolvedCursor(Direction.NONE)


def decode_next_token(token: str, codec: CursorCodec) -> CursorData:
    """Decode a ``next_token``, attributing failures to that parameter."""
    try:
        return codec.decode(token)
    except InvalidCursorError as exc:
        raise InvalidNextTokenError(f"next_token cannot be decoded: {exc.detail}") from exc


def decode_prev_token(token: str, codec: CursorCodec) -> CursorData:
    """Decode a ``prev_token``, attributing failures to that parameter."""
    try:
        return codec.decode(token)
    except InvalidCursorError as exc:
        raise InvalidPrevTokenError(f"prev_token cannot be decoded: {exc.detail}") from exc


def resolve_direction(
    next_token: str | None,
    prev_token: str | None,
    codec: CursorCodec,
) -> ResolvedCursor:
    """Pick the governing token and decode it.

    When both tokens are supplied the next token wins and the prev token is
    ignored; this is logged as a warning, never raised.

    Raises:
        InvalidNextTokenError: The governing next token is malformed.
        InvalidPrevTokenError: The governing prev token is malformed.
    """
    if next_token and prev_token:
        logger.warning(
            "Both next_token and prev_token supplied; prev_token ignored",
            extra={"operation": "pagination.resolve_direction"},
        )
    if next_token:
        return ResolvedCursor(Direction.FORWARD, decode_next_token(next_token, codec))
    if prev_token:
        return ResolvedCursor(Direction.BACKWARD, decode_prev_token(prev_token, codec))
    return FIRST_PAGE
