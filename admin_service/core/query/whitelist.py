"""Per-entity column whitelists for filtering, sorting and projection."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FieldWhitelist:
    """Column names a listing accepts from clients.

    Instances are immutable and safe to share between concurrent requests.

    Example:
        USER_FIELDS = FieldWhitelist(
            filterable={"id", "email", "disabled"},
            sortable={"email", "created_at"},
            projectable={"id", "email", "first_name"},
        )
    """

    filterable: frozenset[str]
    sortable: frozenset[str]
    projectable: frozenset[str]

    def __init__(
        self,
        *,
        filterable: Iterable[str] = (),
        sortable: Iterable[str] = (),
        projectable: Iterable[str] = (),
    ) -> None:
        object.__setattr__(self, "filterable", frozenset(filterable))
        object.__setattr__(self, "sortable", frozenset(sortable))
        object.__setattr__(self, "projectable", frozenset(projectable))

    @classmethod
    def uniform(cls, columns: Iterable[str]) -> FieldWhitelist:
        """Whitelist where every column is filterable, sortable and projectable."""
        names = frozenset(columns)
        return cls(filterable=names, sortable=names, projectable=names)

    @property
    def all_columns(self) -> frozenset[str]:
        return self.filterable | self.sortable | self.projectable
