"""Month-key arithmetic on canonical "YYYY-MM" strings."""

from __future__ import annotations

from datetime import UTC, date, datetime
import re

MONTH_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


class InvalidMonthFormat(ValueError):
    """Raised when a month key does not match YYYY-MM."""


def is_month(value: object) -> bool:
    return isinstance(value, str) and bool(MONTH_RE.match(value))


def parse_month(value: str) -> tuple[int, int]:
    if not isinstance(value, str):
        raise InvalidMonthFormat(f"{value!r}: expected YYYY-MM string")
    match = MONTH_RE.match(value)
    if match is None:
        raise InvalidMonthFormat(f"'{value}' is not valid; expected YYYY-MM")
    return int(match.group(1)), int(match.group(2))


def _format(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def _index(value: str) -> int:
    year, month = parse_month(value)
    return year * 12 + (month - 1)


def add_months(value: str, n: int) -> str:
    """Return the month key ``n`` months after ``value`` (before, if negative)."""
    year, month = divmod(_index(value) + n, 12)
    return _format(year, month + 1)


def months_between(start: str, end: str) -> int:
    return _index(end) - _index(start)


def month_range(first: str, last: str) -> list[str]:
    """Inclusive ascending list of month keys; empty when first > last."""
    start = _index(first)
    stop = _index(last)
    return [_format(*_split(idx)) for idx in range(start, stop + 1)]


def _split(idx: int) -> tuple[int, int]:
    year, month = divmod(idx, 12)
    return year, month + 1


def current_month(today: date | datetime | None = None) -> str:
    if today is None:
        today = datetime.now(UTC)
    return _format(today.year, today.month)


def resolve_today(today: str | None) -> str:
    if today is None:
        return current_month()
    parse_month(today)
    return today
