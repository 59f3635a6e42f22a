"""Client query languages: whitelist, filter/sort/fields grammar, prefix injection."""

from admin_service.core.query.fragment import SqlFragment
from admin_service.core.query.grammar import (
    Condition,
    FieldList,
    FilterExpression,
    SortExpression,
    SortKey,
    is_valid_fields,
    is_valid_filter,
    is_valid_sort,
    parse_fields,
    parse_filter,
    parse_sort,
)
from admin_service.core.query.injector import inject_prefix
from admin_service.core.query.whitelist import FieldWhitelist

__all__ = [
    "Condition",
    "FieldList",
    "FieldWhitelist",
    "FilterExpression",
    "SortExpression",
    "SortKey",
    "SqlFragment",
    "inject_prefix",
    "is_valid_fields",
    "is_valid_filter",
    "is_valid_sort",
    "parse_fields",
    "parse_filter",
    "parse_sort",
]
