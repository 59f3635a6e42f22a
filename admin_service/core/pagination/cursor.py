"""Cursor encoding and decoding for keyset pagination.

A cursor names one row of an ordered listing by its identifier and its
order key. The wire format is standard base64 over ``"<uuid>;<order_key>"``:

    serial     3f0c1a6e-9b7d-4c52-8f0e-2d5b7a9c1e44;20
    timestamp  3f0c1a6e-9b7d-4c52-8f0e-2d5b7a9c1e44;2025-01-15T10:30:00.000000Z

Serial order keys are plain decimal int64 text. Timestamps are always UTC
with six fractional digits so every instant has exactly one spelling.

Cursors are only meaningful for the listing that minted them.
"""

from __future__ import annotations

import base64
import binascii
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from admin_service.core.exceptions import InvalidCursorError

SEPARATOR = ";"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
_SERIAL_RE = re.compile(r"-?[0-9]+")
_TIMESTAMP_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{6}Z"
)


class OrderKeyKind(StrEnum):
    """How the order key half of a cursor is spelled."""

    SERIAL = "serial"
    TIMESTAMP = "timestamp"


class CursorData(BaseModel):
    """Decoded cursor anchor.

    Attributes:
        row_id: Identifier of the anchor row (tie-breaker).
        order_key: Primary order value of the anchor row.
    """

    row_id: UUID = Field(description="Identifier of the anchor row")
    order_key: int | datetime = Field(description="Order key of the anchor row")

    model_config = {"frozen": True}


class CursorCodec:
    """Encode and decode cursors for one order-key kind.

    Usage:
        codec = CursorCodec(OrderKeyKind.SERIAL)
        token = codec.encode(user.id, user.serial_id)
        anchor = codec.decode(token)   # CursorData(row_id=..., order_key=20)

    ``decode`` is safe on arbitrary client input: every failure surfaces as
    ``InvalidCursorError``.
    """

    __slots__ = ("kind",)

    def __init__(self, kind: OrderKeyKind = OrderKeyKind.SERIAL) -> None:
        self.kind = OrderKeyKind(kind)

    def __repr__(self) -> str:
        return f"CursorCodec(kind={self.kind.value!r})"

    def encode(self, row_id: UUID | str, order_key: int | datetime) -> str:
        """Encode an anchor into an opaque token.

        Raises:
            ValueError: ``order_key`` does not fit this codec's kind.
        """
        payload = f"{UUID(str(row_id))}{SEPARATOR}{self._format_order_key(order_key)}"
        return base64.b64encode(payload.encode("utf-8")).decode("ascii")

    def decode(self, token: str) -> CursorData:
        """Decode a token produced by :meth:`encode`.

        Raises:
            InvalidCursorError: The token is malformed in any way.
        """
        if not isinstance(token, str):
            raise InvalidCursorError("cursor must be a string")
        try:
            payload = base64.b64decode(token.encode("ascii"), validate=True).decode("utf-8")
        except (UnicodeError, binascii.Error, ValueError) as exc:
            raise InvalidCursorError("cursor is not valid base64 text") from exc

        parts = payload.split(SEPARATOR)
        if len(parts) != 2:
            raise InvalidCursorError("cursor payload has an unexpected shape")
        row_text, order_text = parts

        if not _UUID_RE.fullmatch(row_text):
            raise InvalidCursorError("cursor row identifier is not a UUID")
        return CursorData(row_id=UUID(row_text), order_key=self._parse_order_key(order_text))

    def encode_row(
        self,
        row: Any,
        *,
        id_attr: str = "id",
        order_attr: str = "serial_id",
    ) -> str:
        """Encode the anchor of a mapping or attribute-bearing row."""
        if isinstance(row, Mapping):
            return self.encode(row[id_attr], row[order_attr])
        return self.encode(getattr(row, id_attr), getattr(row, order_attr))

    def _format_order_key(self, order_key: int | datetime) -> str:
        if self.kind is OrderKeyKind.SERIAL:
            if isinstance(order_key, bool) or not isinstance(order_key, int):
                raise ValueError(f"serial order key must be an int, got {order_key!r}")
            if not INT64_MIN <= order_key <= INT64_MAX:
                raise ValueError(f"serial order key {order_key} is outside int64 range")
            return str(order_key)

        if not isinstance(order_key, datetime):
            raise ValueError(f"timestamp order key must be a datetime, got {order_key!r}")
        if order_key.tzinfo is None:
            order_key = order_key.replace(tzinfo=timezone.utc)
        return order_key.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)

    def _parse_order_key(self, text: str) -> int | datetime:
        if self.kind is OrderKeyKind.SERIAL:
            if not _SERIAL_RE.fullmatch(text):
                raise InvalidCursorError("cursor order key is not a serial number")
            value = int(text)
            if not INT64_MIN <= value <= INT64_MAX:
                raise InvalidCursorError("cursor order key is outside int64 range")
            return value

        if not _TIMESTAMP_RE.fullmatch(text):
            raise InvalidCursorError("cursor order key is not a UTC timestamp")
        try:
            parsed = datetime.strptime(text, TIMESTAMP_FORMAT)
        except ValueError as exc:
            raise InvalidCursorError("cursor order key is not a valid timestamp") from exc
        return parsed.replace(tzinfo=timezone.utc)


__all__ = ["CursorCodec", "CursorData", "OrderKeyKind"]
