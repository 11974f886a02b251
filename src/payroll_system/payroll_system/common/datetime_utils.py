from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from ..core.constants import WEEKEND_WEEKDAYS


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def is_weekend(value: date) -> bool:
    return value.weekday() in WEEKEND_WEEKDAYS


def days_in_month(year: int, month: int) -> int:
    """Number of days of a zero-indexed month (0 = January)."""
    return calendar.monthrange(year, month + 1)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar date of a zero-indexed month."""
    start = date(year, month + 1, 1)
    return start, start + timedelta(days=days_in_month(year, month) - 1)


def month_label(year: int, month: int) -> str:
    """e.g. 'February 2026'."""
    return f"{calendar.month_name[month + 1]} {year}"


def is_last_day_of_month(value: date) -> bool:
    return value.day == calendar.monthrange(value.year, value.month)[1]
