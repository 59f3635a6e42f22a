"""Unit tests for the application exception hierarchy."""

from __future__ import annotations

import pytest

from admin_service.core.exceptions import (
    AppException,
    BadRequestException,
    InvalidCursorError,
    InvalidFieldsError,
    InvalidFilterError,
    InvalidLimitError,
    InvalidNextTokenError,
    InvalidPrevTokenError,
    InvalidSortError,
    NotFoundException,
)


class TestAppException:
    """Tests for the RFC 7807 base exception."""

    def test_defaults(self):
        exc = AppException(status_code=503, detail="down")

        assert exc.type == "about:blank"
        assert exc.title == "Service Unavailable"
        assert exc.extra == {}
        assert str(exc) == "down"

    def test_unknown_status_title(self):
        assert AppException(status_code=418, detail="teapot").title == "Error"

    def test_not_found(self):
        exc = NotFoundException("User 1 not found", type="user-not-found")

        assert exc.status_code == 404
        assert exc.type == "user-not-found"
        assert exc.title == "Not Found"


class TestListingParameterErrors:
    """Every listing error is a 400 with a stable type slug."""

    @pytest.mark.parametrize(
        ("error_class", "type_", "field"),
        [
            (InvalidCursorError, "invalid-cursor", None),
            (InvalidNextTokenError, "invalid-next-token", "next_token"),
            (InvalidPrevTokenError, "invalid-prev-token", "prev_token"),
            (InvalidLimitError, "invalid-limit", "limit"),
            (InvalidSortError, "invalid-sort", "sort"),
            (InvalidFilterError, "invalid-filter", "filter"),
            (InvalidFieldsError, "invalid-fields", "fields"),
        ],
    )
    def test_type_and_field(self, error_class, type_, field):
        exc = error_class("bad input")

        assert isinstance(exc, BadRequestException)
        assert exc.status_code == 400
        assert exc.type == type_
        assert exc.title == "Bad Request"
        assert exc.extra.get("field") == field

    def test_token_errors_are_cursor_errors(self):
        assert issubclass(InvalidNextTokenError, InvalidCursorError)
        assert issubclass(InvalidPrevTokenError, InvalidCursorError)

    def test_value_and_extra(self):
        exc = InvalidFilterError("bad", value="x=1", extra={"column": "x"})

        assert exc.extra == {"field": "filter", "value": "x=1", "column": "x"}
