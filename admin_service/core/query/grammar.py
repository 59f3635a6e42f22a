"""Filter, sort and field-selection grammar for listing endpoints.

Clients shape a listing with three small string languages:

    filter  first_name='Ada' AND created_at>'2024-01-01' OR serial_id<100
    sort    last_name ASC, created_at desc
    fields  id, email, first_name

The grammar is deliberately minimal. A filter is a flat sequence of
``<column><comparator><value>`` conditions joined by ``AND``/``OR`` with
``=``, ``>`` and ``<`` as the only comparators and no parentheses. Values
are single-quoted string literals (``''`` escapes a quote, spaces are
allowed) or decimal numbers. Every column must be in the entity whitelist.

Parsers raise the matching ``Invalid*Error``; the ``is_valid_*`` helpers
expose the same checks as booleans.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, TypeVar

from admin_service.core.exceptions import (
    InvalidFieldsError,
    InvalidFilterError,
    InvalidSortError,
)
from admin_service.core.query.fragment import SqlFragment

Comparator = Literal["=", ">", "<"]
Connector = Literal["AND", "OR"]
FilterValue = str | int | float

T = TypeVar("T")

_CONDITION_RE = re.compile(
    r"""
    (?P<column>[A-Za-z_][A-Za-z0-9_]*)
    \s*(?P<comparator>[=<>])\s*
    (?P<value>'(?:[^']|'')*'|[^\s']+)
    """,
    re.VERBOSE,
)
_WORD_RE = re.compile(r"\S+")
_WHITESPACE_RE = re.compile(r"\s*")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_CONNECTORS: frozenset[str] = frozenset({"AND", "OR"})
_DIRECTIONS: frozenset[str] = frozenset({"ASC", "DESC"})


# ──────────────────────────────────────────────────────────────
# Filter
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Condition:
    column: str
    comparator: Comparator
    value: FilterValue
    # Source text of an unquoted numeric literal, before conversion.
    raw: str | None = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class FilterExpression:
    """Parsed filter: ``conditions[i]`` is joined to the next by ``connectors[i]``."""

    conditions: tuple[Condition, ...] = ()
    connectors: tuple[Connector, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.conditions)

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(condition.column for condition in self.conditions)

    def map_values(self, convert: Callable[[Condition], Any]) -> FilterExpression:
        """Return a copy whose values are replaced by ``convert(condition)``."""
        return FilterExpression(
            tuple(
                Condition(c.column, c.comparator, convert(c), c.raw) for c in self.conditions
            ),
            self.connectors,
        )

    def render(self, param_prefix: str = "filter_") -> SqlFragment:
        """Render as SQL with bare column names and one bound parameter per value.

        Connectors keep standard SQL precedence (``AND`` binds tighter than ``OR``).
        """
        parts: list[str] = []
        params: dict[str, Any] = {}
        columns: dict[str, str] = {}
        for index, condition in enumerate(self.conditions):
            if index:
                parts.append(self.connectors[index - 1])
            name = f"{param_prefix}{index}"
            parts.append(f"{condition.column} {condition.comparator} :{name}")
            params[name] = condition.value
            columns[name] = condition.column
        return SqlFragment(" ".join(parts), params, columns)


def _scan_filter(text: str) -> list[Condition | str]:
    """Split a filter into conditions and bare words, honouring quoted literals."""
    tokens: list[Condition | str] = []
    pos = 0
    end = len(text)
    while True:
        pos = _WHITESPACE_RE.match(text, pos).end()  # type: ignore[union-attr]
        if pos >= end:
            return tokens

        match = _CONDITION_RE.match(text, pos)
        if match is not None and _at_token_end(text, match.end()):
            tokens.append(
                Condition(
                    match["column"],
                    match["comparator"],  # type: ignore[arg-type]
                    match["value"],
                )
            )
            pos = match.end()
            continue

        word = _WORD_RE.match(text, pos)
        if word is None or "'" in word.group():
            raise InvalidFilterError(f"unexpected input at position {pos}")
        tokens.append(word.group())
        pos = word.end()


def _at_token_end(text: str, pos: int) -> bool:
    return pos == len(text) or text[pos].isspace()


def _parse_value(raw: str) -> FilterValue:
    if raw.startswith("'"):
        return raw[1:-1].replace("''", "'")
    if _INTEGER_RE.fullmatch(raw):
        return int(raw)
    if _NUMBER_RE.fullmatch(raw):
        return float(raw)
    raise InvalidFilterError(
        f"value {raw!r} must be a single-quoted string or a number"
    )


def parse_filter(columns: Collection[str], text: str | None) -> FilterExpression:
    """Parse and whitelist-check a filter string.

    Raises:
        InvalidFilterError: Malformed expression, unknown column, bad value,
            or a connector other than AND/OR.
    """
    if not text or not text.strip():
        return FilterExpression()

    conditions: list[Condition] = []
    connectors: list[Connector] = []
    expect_condition = True
    for token in _scan_filter(text):
        if expect_condition:
            if not isinstance(token, Condition):
                raise InvalidFilterError(f"expected a condition, found {token!r}")
            if token.column not in columns:
                raise InvalidFilterError(
                    f"column {token.column!r} cannot be used in a filter"
                )
            literal = str(token.value)
            conditions.append(
                Condition(
                    token.column,
                    token.comparator,
                    _parse_value(literal),
                    None if literal.startswith("'") else literal,
                )
            )
        else:
            if isinstance(token, Condition) or token.upper() not in _CONNECTORS:
                found = token.column if isinstance(token, Condition) else token
                raise InvalidFilterError(f"expected AND or OR, found {found!r}")
            connectors.append(token.upper())  # type: ignore[arg-type]
        expect_condition = not expect_condition

    if expect_condition:
        raise InvalidFilterError("filter ends with a dangling operator")
    return FilterExpression(tuple(conditions), tuple(connectors))


# ──────────────────────────────────────────────────────────────
# Sort
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class SortKey:
    column: str
    descending: bool = False

    @property
    def direction(self) -> str:
        return "DESC" if self.descending else "ASC"


@dataclass(frozen=True, slots=True)
class SortExpression:
    keys: tuple[SortKey, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.keys)

    def apply(self, rows: Sequence[T], getter: Callable[[T, str], Any]) -> list[T]:
        """Stable in-memory reorder of ``rows``.

        NULLs sort last for ASC and first for DESC, matching PostgreSQL.
        """
        ordered = list(rows)
        for key in reversed(self.keys):
            ordered.sort(
                key=lambda row, column=key.column: _null_aware(getter(row, column)),
                reverse=key.descending,
            )
        return ordered

    def __str__(self) -> str:
        return ", ".join(f"{key.column} {key.direction}" for key in self.keys)


def _null_aware(value: Any) -> tuple[Any, ...]:
    return (1,) if value is None else (0, value)


def parse_sort(columns: Collection[str], text: str | None) -> SortExpression:
    """Parse ``<column> <ASC|DESC>[, ...]``.

    Raises:
        InvalidSortError: Unknown column, missing or unknown direction.
    """
    if not text or not text.strip():
        return SortExpression()

    keys: list[SortKey] = []
    for item in text.split(","):
        parts = item.split()
        if len(parts) != 2:
            raise InvalidSortError(
                f"sort item {item.strip()!r} must be '<column> ASC' or '<column> DESC'"
            )
        column, direction = parts
        if column not in columns:
            raise InvalidSortError(f"column {column!r} cannot be used for sorting")
        if direction.upper() not in _DIRECTIONS:
            raise InvalidSortError(f"unknown sort direction {direction!r}")
        keys.append(SortKey(column, descending=direction.upper() == "DESC"))
    return SortExpression(tuple(keys))


# ──────────────────────────────────────────────────────────────
# Fields
# ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class FieldList:
    columns: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.columns)

    def __str__(self) -> str:
        return ",".join(self.columns)


def parse_fields(columns: Collection[str], text: str | None) -> FieldList:
    """Parse a comma-separated projection list, dropping duplicates.

    Raises:
        InvalidFieldsError: Empty item or a column outside the whitelist.
    """
    if not text or not text.strip():
        return FieldList()

    selected: dict[str, None] = {}
    for item in text.split(","):
        name = item.strip()
        if name not in columns:
            raise InvalidFieldsError(f"field {name!r} cannot be selected")
        selected[name] = None
    return FieldList(tuple(selected))


# ──────────────────────────────────────────────────────────────
# Boolean validators
# ──────────────────────────────────────────────────────────────


def is_valid_filter(columns: Collection[str], text: str | None) -> bool:
    try:
        parse_filter(columns, text)
    except InvalidFilterError:
        return False
    return True


def is_valid_sort(columns: Collection[str], text: str | None) -> bool:
    try:
        parse_sort(columns, text)
    except InvalidSortError:
        return False
    return True


def is_valid_fields(columns: Collection[str], text: str | None) -> bool:
    try:
        parse_fields(columns, text)
    except InvalidFieldsError:
        return False
    return True
