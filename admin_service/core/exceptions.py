"""Custom exception classes for the application."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.

    Example:
        raise AppException(
            status_code=400,
            detail="limit must be between 1 and 1000",
            type="invalid-limit",
            extra={"field": "limit", "value": 0},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad Request",
            404: "Not Found",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
            503: "Service Unavailable",
        }
        return titles.get(status_code, "Error")


class NotFoundException(AppException):
    """Exception raised when a resource is not found."""

    def __init__(
        self,
        detail: str,
        type: str = "not-found",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=404,
            detail=detail,
            type=type,
            title="Not Found",
            instance=instance,
            extra=extra,
        )


class BadRequestException(AppException):
    """Exception raised for malformed requests.

    Every listing-parameter error below is a client-input error reported
    before any query reaches the database.
    """

    def __init__(
        self,
        detail: str,
        type: str = "bad-request",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Bad Request",
            instance=instance,
            extra=extra,
        )


# ──────────────────────────────────────────────────────────────
# Listing parameter errors
# ──────────────────────────────────────────────────────────────


class _ListingParameterError(BadRequestException):
    """Bad request attributed to a single query parameter."""

    default_type = "bad-request"
    field: str | None = None

    def __init__(
        self,
        detail: str,
        *,
        value: Any = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        context: dict[str, Any] = {}
        if self.field is not None:
            context["field"] = self.field
        if value is not None:
            context["value"] = value
        context.update(extra or {})
        super().__init__(
            detail=detail,
            type=self.default_type,
            instance=instance,
            extra=context,
        )


class InvalidCursorError(_ListingParameterError):
    """Raised when a pagination token cannot be decoded.

    Tokens are opaque to clients, so the offending value is never echoed
    back in the problem details.
    """

    default_type = "invalid-cursor"


class InvalidNextTokenError(InvalidCursorError):
    """The ``next_token`` parameter is not a valid cursor."""

    default_type = "invalid-next-token"
    field = "next_token"


class InvalidPrevTokenError(InvalidCursorError):
    """The ``prev_token`` parameter is not a valid cursor."""

    default_type = "invalid-prev-token"
    field = "prev_token"


class InvalidLimitError(_ListingParameterError):
    """The ``limit`` parameter is outside the accepted range."""

    default_type = "invalid-limit"
    field = "limit"


class InvalidSortError(_ListingParameterError):
    """The ``sort`` parameter failed grammar or whitelist validation."""

    default_type = "invalid-sort"
    field = "sort"


class InvalidFilterError(_ListingParameterError):
    """The ``filter`` parameter failed grammar or whitelist validation."""

    default_type = "invalid-filter"
    field = "filter"


class InvalidFieldsError(_ListingParameterError):
    """The ``fields`` parameter names a column that cannot be projected."""

    default_type = "invalid-fields"
    field = "fields"


__all__ = [
    "AppException",
    "BadRequestException",
    "InvalidCursorError",
    "InvalidFieldsError",
    "InvalidFilterError",
    "InvalidLimitError",
    "InvalidNextTokenError",
    "InvalidPrevTokenError",
    "InvalidSortError",
    "NotFoundException",
]
