"""Canned configuration for courses that have not been set up yet."""

from __future__ import annotations

from typing import Optional

from .models import ApplicableDays, BaseSchedule, BookingMode, TimePeriod, TwilightMode

FALLBACK_WEEKDAY_HOURS = ("06:00", "17:00")
FALLBACK_WEEKEND_HOURS = ("05:30", "17:30")
FALLBACK_TWILIGHT_TIME = "16:00"
FALLBACK_BOOKING_WINDOW_DAYS = 7
DEFAULT_MINUTES_BEFORE_SUNSET = 90


def default_time_periods() -> tuple[TimePeriod, ...]:
    """Early Bird, Prime AM, Midday, Prime PM and an open-ended Twilight."""
    rows = [
        ("Early Bird", "06:00", "07:00", 12, False),
        ("Prime AM", "07:00", "11:00", 8, True),
        ("Midday", "11:00", "14:00", 10, False),
        ("Prime PM", "14:00", "16:00", 8, True),
        ("Twilight", "16:00", None, 12, False),
    ]
    return tuple(
        TimePeriod(
            name=name,
            start_time=start,
            end_time=end,
            interval_minutes=interval,
            is_prime_time=prime,
            applicable_days=ApplicableDays.ALL,
            sort_order=index,
        )
        for index, (name, start, end, interval, prime) in enumerate(rows)
    )


def create_default_base_schedule(course_id: Optional[str] = None) -> BaseSchedule:
    """Base schedule a new course starts from: no seasons, no special days."""
    return BaseSchedule(
        course_id=course_id,
        weekday_first_tee=FALLBACK_WEEKDAY_HOURS[0],
        weekday_last_tee=FALLBACK_WEEKDAY_HOURS[1],
        weekday_booking_mode=BookingMode.EIGHTEEN,
        weekend_first_tee=FALLBACK_WEEKEND_HOURS[0],
        weekend_last_tee=FALLBACK_WEEKEND_HOURS[1],
        weekend_booking_mode=BookingMode.EIGHTEEN,
        twilight_mode=TwilightMode.FIXED,
        twilight_minutes_before_sunset=DEFAULT_MINUTES_BEFORE_SUNSET,
        twilight_fixed_default=FALLBACK_TWILIGHT_TIME,
        default_booking_window_days=FALLBACK_BOOKING_WINDOW_DAYS,
        time_periods=default_time_periods(),
    )
