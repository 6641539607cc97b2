"""Merge base schedule, seasons and special days into one effective schedule."""

from __future__ import annotations

from datetime import date
from typing import Optional

import structlog

from .date_window import day_type as compute_day_type
from .defaults import (
    FALLBACK_BOOKING_WINDOW_DAYS,
    FALLBACK_TWILIGHT_TIME,
    FALLBACK_WEEKDAY_HOURS,
    FALLBACK_WEEKEND_HOURS,
)
from .matching import select_season, select_special_day
from .models import (
    ActiveSeason,
    ActiveSpecialDay,
    BaseSchedule,
    BookingMode,
    DayType,
    EffectiveSchedule,
    SpecialDayType,
    TwilightMode,
)
from .sunset import compute_twilight_time, utc_offset_hours

LOGGER = structlog.get_logger(__name__)

WEEKEND_HOURS_TYPES = {SpecialDayType.WEEKEND, SpecialDayType.HOLIDAY}


def resolve(config: BaseSchedule, value: date) -> EffectiveSchedule:
    """Effective operating parameters for ``value``.

    Precedence, lowest to highest: base schedule for the day type, the
    selected season, the selected special day. A sunset-derived twilight
    time replaces any literal twilight override. Only periods applicable to
    the real day type of ``value`` are returned.
    """
    day_type = compute_day_type(value)

    first_tee = config.first_tee_for(day_type)
    last_tee = config.last_tee_for(day_type)
    booking_mode = config.booking_mode_for(day_type)
    booking_window_days = config.default_booking_window_days
    twilight_time = config.twilight_fixed_default
    time_periods = config.time_periods
    active_season: Optional[ActiveSeason] = None
    active_special_day: Optional[ActiveSpecialDay] = None
    is_closed = False

    season = select_season(config.seasons, value)
    if season is not None:
        active_season = ActiveSeason(id=season.id, name=season.name)
        if season.override_first_tee:
            first_tee = season.override_first_tee
        if season.override_last_tee:
            last_tee = season.override_last_tee
        if season.override_booking_window_days is not None:
            booking_window_days = season.override_booking_window_days
        if season.override_twilight_time:
            twilight_time = season.override_twilight_time
        if season.override_time_periods and season.time_periods:
            time_periods = season.time_periods
        season_mode = season.booking_mode_for(day_type)
        if season_mode is not None:
            booking_mode = season_mode
        LOGGER.debug("resolver.season_matched", date=value.isoformat(), season=season.name)

    special_day = select_special_day(config.special_days, value)
    if special_day is not None:
        active_special_day = ActiveSpecialDay(id=special_day.id, name=special_day.name, type=special_day.type)
        if special_day.type is SpecialDayType.CLOSED:
            is_closed = True
        elif special_day.type in WEEKEND_HOURS_TYPES:
            first_tee = config.weekend_first_tee
            last_tee = config.weekend_last_tee
        elif special_day.type is SpecialDayType.CUSTOM:
            if special_day.custom_first_tee:
                first_tee = special_day.custom_first_tee
            if special_day.custom_last_tee:
                last_tee = special_day.custom_last_tee
            if special_day.custom_time_periods and special_day.time_periods:
                time_periods = special_day.time_periods
        if special_day.booking_mode is not None:
            booking_mode = special_day.booking_mode
        LOGGER.debug(
            "resolver.special_day_matched",
            date=value.isoformat(),
            special_day=special_day.name,
            type=special_day.type.value,
        )

    if config.twilight_mode is TwilightMode.SUNSET and config.has_coordinates:
        offset = utc_offset_hours(value, config.longitude, config.timezone)
        twilight_time = compute_twilight_time(
            value,
            config.latitude,
            config.longitude,
            config.twilight_minutes_before_sunset,
            utc_offset=offset,
        )

    return EffectiveSchedule(
        course_id=config.course_id,
        date=value,
        day_type=day_type,
        first_tee=first_tee,
        last_tee=last_tee,
        twilight_mode=config.twilight_mode,
        twilight_time=twilight_time,
        booking_window_days=booking_window_days,
        booking_mode=booking_mode,
        time_periods=tuple(
            period
            for period in sorted(time_periods, key=lambda item: item.sort_order)
            if period.applies_to(day_type)
        ),
        active_season=active_season,
        active_special_day=active_special_day,
        is_closed=is_closed,
    )


def fallback_schedule(value: date, course_id: Optional[str] = None) -> EffectiveSchedule:
    """Hardcoded schedule for a course with no configuration at all."""
    day_type = compute_day_type(value)
    first_tee, last_tee = FALLBACK_WEEKEND_HOURS if day_type is DayType.WEEKEND else FALLBACK_WEEKDAY_HOURS
    return EffectiveSchedule(
        course_id=course_id,
        date=value,
        day_type=day_type,
        first_tee=first_tee,
        last_tee=last_tee,
        twilight_mode=TwilightMode.FIXED,
        twilight_time=FALLBACK_TWILIGHT_TIME,
        booking_window_days=FALLBACK_BOOKING_WINDOW_DAYS,
        booking_mode=BookingMode.EIGHTEEN,
    )
