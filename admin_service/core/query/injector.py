"""Table-qualifier injection for whitelisted column names."""

from __future__ import annotations

import re
from collections.abc import Iterable


def inject_prefix(prefix: str, text: str, columns: Iterable[str]) -> str:
    """Prefix every whitelisted column occurrence in ``text`` with ``prefix``.

    Content between matching single or double quotes is left untouched, and
    longer names win over names they contain (``user_id`` before ``id``).
    Only whole words are rewritten.

    Example:
        >>> inject_prefix("u.", "name='id' AND id>1", ["id", "name"])
        "u.name='id' AND u.id>1"
    """
    names = sorted({name for name in columns if name}, key=len, reverse=True)
    if not text or not names:
        return text

    alternatives = "|".join(re.escape(name) for name in names)
    pattern = re.compile(rf"""'[^']*'|"[^"]*"|\b(?:{alternatives})\b""")

    def qualify(match: re.Match[str]) -> str:
        token = match.group()
        if token[0] in "'\"":
            return token
        return f"{prefix}{token}"

    return pattern.sub(qualify, text)
