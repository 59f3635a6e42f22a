"""Generic keyset listing engine shared by every entity.

One ``KeysetListing`` is built per entity at import time from its table,
alias and whitelist; it holds no per-request state.

    listing = KeysetListing(User.__table__, "u", USER_FIELDS)
    query = listing.parse(filter="disabled=0", sort="email ASC", limit=20)
    plan = listing.plan(query)
    rows = (await session.execute(plan.statement)).mappings().all()
    page = listing.finalize(rows, query)

``parse`` performs every validation step, so nothing reaches the database
unless the whole request is well formed.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Integer, Table, bindparam, text
from sqlalchemy.sql.selectable import TextualSelect

from admin_service.core.exceptions import InvalidFilterError, InvalidLimitError
from admin_service.core.pagination.criteria import KeysetCriteria, build_criteria, finalize_page
from admin_service.core.pagination.cursor import CursorCodec
from admin_service.core.pagination.direction import (
    ResolvedCursor,
    decode_prev_token,
    resolve_direction,
)
from admin_service.core.pagination.schemas import Page, Paginator
from admin_service.core.query import (
    Condition,
    FieldList,
    FieldWhitelist,
    FilterExpression,
    SortExpression,
    SqlFragment,
    inject_prefix,
    parse_fields,
    parse_filter,
    parse_sort,
)
from admin_service.core.settings import get_pagination_settings
from admin_service.infra.logging import get_lazy_logger

FETCH_LIMIT_PARAM = "fetch_limit"


@dataclass(frozen=True, slots=True)
class ListQuery:
    """A fully validated listing request."""

    filter: FilterExpression
    sort: SortExpression
    fields: FieldList
    cursor: ResolvedCursor
    limit: int

    @property
    def fetch_limit(self) -> int:
        return self.limit + 1


@dataclass(frozen=True, slots=True)
class ListingPlan:
    """SQL for one page, ready to execute."""

    statement: TextualSelect
    sql: str
    params: Mapping[str, Any]
    columns: tuple[str, ...]
    criteria: KeysetCriteria


class KeysetListing:
    """Keyset pagination over one table or pre-joined view.

    Args:
        table: SQLAlchemy table the listing reads.
        alias: Table alias used to qualify every column reference.
        whitelist: Columns clients may filter, sort and select.
        id_column: Unique row identifier (UUID), the tie-breaker.
        order_column: Primary order key (serial or timestamp).
        codec: Cursor codec matching ``order_column``.
        default_limit: Page size when the client sends none. Defaults to settings.
        max_limit: Largest accepted page size. Defaults to settings.
    """

    __slots__ = (
        "table",
        "alias",
        "whitelist",
        "id_column",
        "order_column",
        "codec",
        "_default_limit",
        "_max_limit",
        "_lazy",
    )

    def __init__(
        self,
        table: Table,
        alias: str,
        whitelist: FieldWhitelist,
        *,
        id_column: str = "id",
        order_column: str = "serial_id",
        codec: CursorCodec | None = None,
        default_limit: int | None = None,
        max_limit: int | None = None,
    ) -> None:
        unknown = (whitelist.all_columns | {id_column, order_column}) - set(table.c.keys())
        if unknown:
            msg = f"{table.name} has no column(s) {', '.join(sorted(unknown))}"
            raise ValueError(msg)
        if not alias.isidentifier():
            raise ValueError(f"table alias {alias!r} is not an identifier")

        self.table = table
        self.alias = alias
        self.whitelist = whitelist
        self.id_column = id_column
        self.order_column = order_column
        self.codec = codec or CursorCodec()
        self._default_limit = default_limit
        self._max_limit = max_limit
        self._lazy = get_lazy_logger(f"listing.{table.name}")

    def __repr__(self) -> str:
        return f"KeysetListing({self.table.name!r}, alias={self.alias!r}, codec={self.codec!r})"

    @property
    def default_limit(self) -> int:
        if self._default_limit is not None:
            return self._default_limit
        return get_pagination_settings().default_limit

    @property
    def max_limit(self) -> int:
        if self._max_limit is not None:
            return self._max_limit
        return get_pagination_settings().max_limit

    # ──────────────────────────────────────────────────────────────
    # Request validation
    # ──────────────────────────────────────────────────────────────

    def parse(
        self,
        *,
        filter: str | None = None,  # noqa: A002
        sort: str | None = None,
        fields: str | None = None,
        next_token: str | None = None,
        prev_token: str | None = None,
        limit: int | None = None,
    ) -> ListQuery:
        """Validate raw listing parameters.

        Both tokens are checked even though only the next token governs when
        both are sent, so a malformed prev token is still reported.

        Raises:
            InvalidLimitError: ``limit`` outside ``1..max_limit``.
            InvalidFilterError: Filter fails grammar, whitelist or type checks.
            InvalidSortError: Sort fails grammar or whitelist checks.
            InvalidFieldsError: A selected field is not projectable.
            InvalidNextTokenError: ``next_token`` cannot be decoded.
            InvalidPrevTokenError: ``prev_token`` cannot be decoded.
        """
        if limit is None:
            limit = self.default_limit
        if not 1 <= limit <= self.max_limit:
            raise InvalidLimitError(
                f"limit must be between 1 and {self.max_limit}", value=limit
            )

        filter_expression = parse_filter(self.whitelist.filterable, filter)
        filter_expression = filter_expression.map_values(self._coerce_filter_value)
        sort_expression = parse_sort(self.whitelist.sortable, sort)
        field_list = parse_fields(self.whitelist.projectable, fields)

        if next_token and prev_token:
            decode_prev_token(prev_token, self.codec)
        cursor = resolve_direction(next_token, prev_token, self.codec)

        return ListQuery(filter_expression, sort_expression, field_list, cursor, limit)

    def _coerce_filter_value(self, condition: Condition) -> Any:
        """Convert a literal to the Python type of the column it is compared with.

        Raises:
            InvalidFilterError: The literal cannot represent a value of that column.
        """
        try:
            python_type = self.table.c[condition.column].type.python_type
        except NotImplementedError:
            return condition.value
        if python_type is str and condition.raw is not None:
            return condition.raw
        try:
            return _convert_literal(condition.value, python_type)
        except (TypeError, ValueError) as exc:
            raise InvalidFilterError(
                f"value {condition.value!r} is not valid for column {condition.column!r}",
                extra={"column": condition.column},
            ) from exc

    # ──────────────────────────────────────────────────────────────
    # SQL generation
    # ──────────────────────────────────────────────────────────────

    def selected_columns(self, query: ListQuery) -> tuple[str, ...]:
        """Columns fetched for ``query``: keys, projection, then sort columns."""
        wanted = [self.id_column, self.order_column]
        wanted.extend(self.output_columns(query.fields))
        wanted.extend(key.column for key in query.sort.keys)
        return tuple(dict.fromkeys(wanted))

    def output_columns(self, fields: FieldList) -> tuple[str, ...]:
        """Columns returned to the client, in table order when none are requested."""
        if fields:
            return fields.columns
        return tuple(name for name in self.table.c.keys() if name in self.whitelist.projectable)

    def plan(self, query: ListQuery) -> ListingPlan:
        """Render the ``limit + 1`` keyset query for ``query``."""
        qualifier = f"{self.alias}."
        rendered = query.filter.render()
        filter_fragment = rendered.with_text(
            inject_prefix(qualifier, rendered.text, self.whitelist.filterable)
        )
        criteria = build_criteria(
            query.cursor.direction,
            query.cursor.anchor,
            filter_fragment,
            self.alias,
            id_column=self.id_column,
            order_column=self.order_column,
        )

        columns = self.selected_columns(query)
        select_list = inject_prefix(qualifier, ", ".join(columns), columns)
        clauses = [f"SELECT {select_list}", f"FROM {self.table.name} AS {self.alias}"]
        if criteria.where:
            clauses.append(criteria.where_clause)
        clauses.append(f"ORDER BY {criteria.internal_sort}")
        clauses.append(f"LIMIT :{FETCH_LIMIT_PARAM}")
        sql = " ".join(clauses)

        params = {**criteria.where.params, FETCH_LIMIT_PARAM: query.fetch_limit}
        statement = (
            text(sql)
            .bindparams(*self._bind_params(criteria.where, query.fetch_limit))
            .columns(*(self.table.c[name] for name in columns))
        )

        self._lazy.debug(lambda: f"listing.plan {self.table.name}: {sql}")
        self._lazy.debug("listing.params %s", lambda: {k: str(v) for k, v in params.items()})
        return ListingPlan(statement, sql, params, columns, criteria)

    def _bind_params(self, where: SqlFragment, fetch_limit: int) -> list[Any]:
        bound = [
            bindparam(name, value, type_=self.table.c[where.columns[name]].type)
            for name, value in where.params.items()
        ]
        bound.append(bindparam(FETCH_LIMIT_PARAM, fetch_limit, type_=Integer()))
        return bound

    # ──────────────────────────────────────────────────────────────
    # Page assembly
    # ──────────────────────────────────────────────────────────────

    def finalize(self, rows: Sequence[Mapping[str, Any]], query: ListQuery) -> Page[dict[str, Any]]:
        """Turn fetched rows into the page returned to the client.

        Tokens are minted from presentation order before the client's sort is
        applied, which only reorders rows within the page.
        """
        window = finalize_page(
            rows,
            query.limit,
            query.cursor.direction,
            codec=self.codec,
            id_attr=self.id_column,
            order_attr=self.order_column,
        )
        ordered = (
            query.sort.apply(window.rows, lambda row, column: row[column])
            if query.sort
            else list(window.rows)
        )
        output = self.output_columns(query.fields)
        items = [{name: row[name] for name in output} for row in ordered]
        paginator = Paginator.build(
            size=window.size,
            limit=query.limit,
            next_token=window.next_token,
            prev_token=window.prev_token,
        )
        return Page[dict[str, Any]](items=items, paginator=paginator)


def _convert_literal(value: Any, python_type: type) -> Any:
    if python_type is bool:
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        if value in (0, 1):
            return bool(value)
    elif issubclass(python_type, UUID):
        if isinstance(value, str):
            return UUID(value)
    elif issubclass(python_type, datetime):
        if isinstance(value, str):
            return datetime.fromisoformat(value)
    elif python_type is int:
        if isinstance(value, int):
            return value
    elif python_type is float:
        if isinstance(value, int | float):
            return float(value)
    elif python_type is str:
        return str(value)
    else:
        return value
    raise TypeError(f"{value!r} cannot be used as {python_type.__name__}")
