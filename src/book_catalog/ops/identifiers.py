"""Parsing of book identifiers taken from paths and query strings."""

from __future__ import annotations

import re
from typing import Any

_DIGITS = re.compile(r"[0-9]+")


def parse_book_id(raw: Any) -> int | None:
    """Return *raw* as a positive integer book id, or ``None``.

    Accepts ints and base-10 digit strings (surrounding whitespace
    ignored).  Zero, negatives, booleans, floats and anything else are
    rejected.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if isinstance(raw, str):
        text = raw.strip()
        if _DIGITS.fullmatch(text):
            value = int(text)
            return value if value > 0 else None
    return None
