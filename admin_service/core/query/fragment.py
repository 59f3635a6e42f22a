"""Parameterized SQL fragments."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class SqlFragment:
    """SQL text plus the values bound to its ``:name`` placeholders.

    Only whitelisted column names ever appear in ``text``; client values
    travel in ``params``. ``columns`` maps each parameter to the column it
    is compared against so the executor can bind it with that column's type.
    """

    text: str = ""
    params: Mapping[str, Any] = field(default_factory=dict)
    columns: Mapping[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.text)

    def with_text(self, text: str) -> SqlFragment:
        return SqlFragment(text, self.params, self.columns)
