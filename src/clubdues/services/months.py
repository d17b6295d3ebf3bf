"""Month-key arithmetic.

A month key is a plain ``YYYY-MM`` string. Canonical keys sort
lexicographically in calendar order, so they are stored and compared as-is.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Iterator

from ..errors import ValidationError

_MONTH_KEY = re.compile(r"^(\d{4})-(\d{2})$")

_MONTH_NAMES = {
    "fr": (
        "janvier", "février", "mars", "avril", "mai", "juin",
        "juillet", "août", "septembre", "octobre", "novembre", "décembre",
    ),
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}


def parse_month(key: str) -> tuple[int, int]:
    """Return ``(year, month)`` for a canonical month key."""

    match = _MONTH_KEY.match(key or "")
    if not match:
        raise ValidationError(f"Invalid month {key!r}; expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month {key!r}; month must be 01-12")
    return year, month


def _key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def month_of(value: date) -> str:
    """Month key containing ``value``."""

    return _key(value.year, value.month)


def current_month(today: date | None = None) -> str:
    """Month key for ``today`` (defaults to the system date)."""

    return month_of(today or date.today())


def add_months(key: str, n: int) -> str:
    """Offset a month key by ``n`` whole months, carrying across years."""

    year, month = parse_month(key)
    index = year * 12 + (month - 1) + n
    return _key(index // 12, index % 12 + 1)


def compare(a: str, b: str) -> int:
    """Return -1, 0 or 1 ordering ``a`` against ``b`` by (year, month)."""

    left, right = parse_month(a), parse_month(b)
    return (left > right) - (left < right)


def month_range(start: str, end: str) -> Iterator[str]:
    """Yield every month key from ``start`` through ``end`` inclusive."""

    cursor = start
    while compare(cursor, end) <= 0:
        yield cursor
        cursor = add_months(cursor, 1)


def first_day(key: str) -> date:
    year, month = parse_month(key)
    return date(year, month, 1)


def format_month(key: str, locale: str = "fr") -> str:
    """Human-readable label such as ``septembre 2024``."""

    year, month = parse_month(key)
    names = _MONTH_NAMES.get((locale or "").lower()[:2], _MONTH_NAMES["en"])
    return f"{names[month - 1]} {year}"


__all__ = [
    "add_months",
    "compare",
    "current_month",
    "first_day",
    "format_month",
    "month_of",
    "month_range",
    "parse_month",
]
