"""Unit tests for keyset criteria and page finalization."""

from __future__ import annotations

from uuid import uuid4

import pytest

from admin_service.core.pagination import (
    CursorCodec,
    CursorData,
    Direction,
    build_criteria,
    finalize_page,
)
from admin_service.core.query import SqlFragment

codec = CursorCodec()


def _rows(*serials: int) -> list[dict]:
    return [{"id": uuid4(), "serial_id": serial} for serial in serials]


# ──────────────────────────────────────────────────────────────
# build_criteria
# ──────────────────────────────────────────────────────────────


class TestBuildCriteria:
    """Tests for WHERE / ORDER BY generation."""

    def test_first_page_without_filter(self):
        criteria = build_criteria(Direction.NONE, None, SqlFragment(), "u")

        assert not criteria.where
        assert criteria.where_clause == ""
        assert criteria.internal_sort == "u.serial_id DESC, u.id DESC"
        assert criteria.external_sort == criteria.internal_sort

    def test_first_page_keeps_filter_as_is(self):
        fragment = SqlFragment("u.email = :filter_0", {"filter_0": "a"}, {"filter_0": "email"})

        criteria = build_criteria(Direction.NONE, None, fragment, "u")

        assert criteria.where_clause == "WHERE u.email = :filter_0"
        assert criteria.where.params == {"filter_0": "a"}

    def test_forward_seek(self):
        anchor = CursorData(row_id=uuid4(), order_key=20)

        criteria = build_criteria(Direction.FORWARD, anchor, SqlFragment(), "u")

        assert criteria.where.text == (
            "(u.serial_id < :anchor_order_key) AND "
            "(u.id < :anchor_row_id OR u.serial_id < :anchor_order_key)"
        )
        assert criteria.where.params == {
            "anchor_order_key": 20,
            "anchor_row_id": anchor.row_id,
        }
        assert criteria.where.columns == {
            "anchor_order_key": "serial_id",
            "anchor_row_id": "id",
        }
        assert criteria.internal_sort == "u.serial_id DESC, u.id DESC"

    def test_backward_seek(self):
        anchor = CursorData(row_id=uuid4(), order_key=20)

        criteria = build_criteria(Direction.BACKWARD, anchor, SqlFragment(), "u")

        assert criteria.where.text == (
            "(u.serial_id > :anchor_order_key) AND "
            "(u.id > :anchor_row_id OR u.serial_id > :anchor_order_key)"
        )
        assert criteria.internal_sort == "u.serial_id ASC, u.id ASC"
        assert criteria.external_sort == "u.serial_id DESC, u.id DESC"

    def test_filter_is_parenthesised(self):
        """OR in the filter must not escape the seek predicate."""
        fragment = SqlFragment(
            "u.email = :filter_0 OR u.email = :filter_1",
            {"filter_0": "a", "filter_1": "b"},
            {"filter_0": "email", "filter_1": "email"},
        )
        anchor = CursorData(row_id=uuid4(), order_key=5)

        criteria = build_criteria(Direction.FORWARD, anchor, fragment, "u")

        assert criteria.where.text.startswith("(u.email = :filter_0 OR u.email = :filter_1) AND ")
        assert set(criteria.where.params) == {
            "filter_0",
            "filter_1",
            "anchor_order_key",
            "anchor_row_id",
        }

    def test_custom_columns_without_alias(self):
        anchor = CursorData(row_id=uuid4(), order_key=1)

        criteria = build_criteria(
            Direction.FORWARD, anchor, SqlFragment(), "", id_column="uuid", order_column="seq"
        )

        assert criteria.internal_sort == "seq DESC, uuid DESC"
        assert "(seq < :anchor_order_key)" in criteria.where.text

    @pytest.mark.parametrize("direction", [Direction.FORWARD, Direction.BACKWARD])
    def test_anchor_required(self, direction):
        with pytest.raises(ValueError, match="anchor"):
            build_criteria(direction, None, SqlFragment(), "u")


# ──────────────────────────────────────────────────────────────
# finalize_page
# ──────────────────────────────────────────────────────────────


class TestFinalizePage:
    """Tests for look-ahead trimming and token minting."""

    def test_boundary_example(self):
        """Serials [30, 20, 10] with limit 2, followed forward."""
        rows = _rows(30, 20, 10)

        first = finalize_page(rows, 2, Direction.NONE, codec=codec)

        assert [row["serial_id"] for row in first.rows] == [30, 20]
        assert first.has_more_next is True
        assert first.has_more_prev is False
        assert first.prev_token is None
        assert codec.decode(first.next_token) == CursorData(
            row_id=rows[1]["id"], order_key=20
        )

        second = finalize_page(rows[2:], 2, Direction.FORWARD, codec=codec)

        assert [row["serial_id"] for row in second.rows] == [10]
        assert second.has_more_next is False
        assert second.has_more_prev is True
        assert second.next_token is None
        assert codec.decode(second.prev_token).order_key == 10

    def test_backward_rows_are_reversed(self):
        """Backward rows arrive ascending and are presented descending."""
        rows = _rows(20, 30, 40)

        window = finalize_page(rows, 2, Direction.BACKWARD, codec=codec)

        assert [row["serial_id"] for row in window.rows] == [30, 20]
        assert window.has_more_prev is True
        assert window.has_more_next is True
        assert codec.decode(window.prev_token).order_key == 30
        assert codec.decode(window.next_token).order_key == 20

    def test_backward_reaching_the_start(self):
        window = finalize_page(_rows(20, 30), 2, Direction.BACKWARD, codec=codec)

        assert [row["serial_id"] for row in window.rows] == [30, 20]
        assert window.has_more_prev is False
        assert window.prev_token is None
        assert window.next_token is not None

    def test_exact_fit_has_no_next(self):
        window = finalize_page(_rows(30, 20), 2, Direction.NONE, codec=codec)

        assert window.size == 2
        assert window.next_token is None
        assert window.prev_token is None

    @pytest.mark.parametrize("direction", list(Direction))
    def test_empty_rows_have_no_tokens(self, direction):
        window = finalize_page([], 5, direction, codec=codec)

        assert window.rows == ()
        assert window.has_more_next is False
        assert window.has_more_prev is False
        assert window.next_token is None
        assert window.prev_token is None

    def test_custom_attributes(self):
        rows = [{"uuid": uuid4(), "seq": 3}, {"uuid": uuid4(), "seq": 2}]

        window = finalize_page(rows, 1, Direction.NONE, codec=codec, id_attr="uuid", order_attr="seq")

        assert codec.decode(window.next_token).row_id == rows[0]["uuid"]

    def test_limit_must_be_positive(self):
        with pytest.raises(ValueError, match="limit"):
            finalize_page(_rows(1), 0, Direction.NONE, codec=codec)
