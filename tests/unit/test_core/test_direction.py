"""Unit tests for pagination direction resolution."""

from __future__ import annotations

import logging
from uuid import uuid4

import pytest

from admin_service.core.exceptions import (
    InvalidCursorError,
    InvalidNextTokenError,
    InvalidPrevTokenError,
)
from admin_service.core.pagination import CursorCodec, Direction, resolve_direction
from admin_service.core.pagination.direction import FIRST_PAGE

codec = CursorCodec()


class TestResolveDirection:
    """Tests for resolve_direction."""

    @pytest.mark.parametrize(("next_token", "prev_token"), [(None, None), ("", ""), ("", None)])
    def test_no_tokens_is_first_page(self, next_token, prev_token):
        resolved = resolve_direction(next_token, prev_token, codec)

        assert resolved is FIRST_PAGE
        assert resolved.direction is Direction.NONE
        assert resolved.row_id is None
        assert resolved.order_key is None

    def test_next_token_is_forward(self):
        row_id = uuid4()

        resolved = resolve_direction(codec.encode(row_id, 20), None, codec)

        assert resolved.direction is Direction.FORWARD
        assert resolved.row_id == row_id
        assert resolved.order_key == 20

    def test_prev_token_is_backward(self):
        row_id = uuid4()

        resolved = resolve_direction(None, codec.encode(row_id, 40), codec)

        assert resolved.direction is Direction.BACKWARD
        assert resolved.row_id == row_id
        assert resolved.order_key == 40

    def test_both_tokens_next_wins_with_warning(self, caplog):
        """prev_token is ignored, not rejected, and the conflict is logged."""
        next_id = uuid4()
        next_token = codec.encode(next_id, 20)
        prev_token = codec.encode(uuid4(), 40)

        with caplog.at_level(logging.WARNING, logger="admin_service.core.pagination.direction"):
            resolved = resolve_direction(next_token, prev_token, codec)

        assert resolved == resolve_direction(next_token, None, codec)
        assert resolved.row_id == next_id
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "prev_token ignored" in warnings[0].getMessage()

    def test_single_token_does_not_warn(self, caplog):
        with caplog.at_level(logging.WARNING):
            resolve_direction(codec.encode(uuid4(), 1), None, codec)

        assert not caplog.records

    def test_bad_next_token(self):
        with pytest.raises(InvalidNextTokenError) as exc_info:
            resolve_direction("garbage", None, codec)

        assert exc_info.value.type == "invalid-next-token"
        assert exc_info.value.extra == {"field": "next_token"}
        assert isinstance(exc_info.value, InvalidCursorError)

    def test_bad_prev_token(self):
        with pytest.raises(InvalidPrevTokenError) as exc_info:
            resolve_direction(None, "garbage", codec)

        assert exc_info.value.type == "invalid-prev-token"
        assert exc_info.value.extra == {"field": "prev_token"}

    def test_ignored_prev_token_is_not_decoded(self):
        """The resolver only decodes the governing token."""
        resolved = resolve_direction(codec.encode(uuid4(), 5), "garbage", codec)

        assert resolved.direction is Direction.FORWARD
