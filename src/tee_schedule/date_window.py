"""Calendar and clock helpers used for rule matching and booking windows.

Season and recurring special-day ranges carry no year, so they are compared
as ``month * 100 + day`` integers or zero-padded ``MM-DD`` strings rather
than with date arithmetic (which would force an arbitrary year).
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List

from .models import DayType

WEEKDAY_NAMES = {
    0: "Monday",
    1: "Tuesday",
    2: "Wednesday",
    3: "Thursday",
    4: "Friday",
    5: "Saturday",
    6: "Sunday",
}

WEEKEND_INDICES = {5, 6}

MINUTES_PER_DAY = 24 * 60


def day_type(value: date) -> DayType:
    return DayType.WEEKEND if value.weekday() in WEEKEND_INDICES else DayType.WEEKDAY


def day_name(value: date) -> str:
    return WEEKDAY_NAMES[value.weekday()]


def month_day_value(month: int, day: int) -> int:
    return month * 100 + day


def in_month_day_range(value: int, start: int, end: int) -> bool:
    """Inclusive range test over ``month * 100 + day`` values.

    ``start > end`` means the range wraps the year boundary.
    """
    if start <= end:
        return start <= value <= end
    return value >= start or value <= end


def month_day_key(value: date) -> str:
    return f"{value.month:02d}-{value.day:02d}"


def in_recurring_range(mmdd: str, start: str, end: str) -> bool:
    """Inclusive, wrap-aware range test over zero-padded ``MM-DD`` strings."""
    if start <= end:
        return start <= mmdd <= end
    return mmdd >= start or mmdd <= end


def in_fixed_range(iso: str, start: str, end: str) -> bool:
    """Inclusive range test over ``YYYY-MM-DD`` strings; never wraps."""
    return start <= iso <= end


def parse_clock(value: str) -> int:
    """Minutes since midnight for an ``HH:MM`` string."""
    hours, _, minutes = value.partition(":")
    return int(hours) * 60 + int(minutes or 0)


def format_clock(minutes: int) -> str:
    """``HH:MM`` for minutes since midnight, wrapped into a single day."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def booking_window_dates(today: date | None = None, *, window_days: int = 7) -> List[date]:
    """
    Dates currently open for booking.

    Covers ``today`` itself plus ``window_days`` days ahead, matching how the
    tee sheet exposes its advance-booking window.
    """
    today = today or date.today()
    return [today + timedelta(days=offset) for offset in range(window_days + 1)]
