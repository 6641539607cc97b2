"""Approximate sunset-relative twilight time from course coordinates.

Declination sine approximation only, with no equation of time or refraction.
Results land within a few minutes to a quarter hour of the true sunset.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog

from .date_window import format_clock

LOGGER = structlog.get_logger(__name__)

AXIAL_TILT_DEGREES = 23.45


def day_of_year(value: date) -> int:
    return value.timetuple().tm_yday


def solar_declination(value: date) -> float:
    """Solar declination in degrees."""
    return AXIAL_TILT_DEGREES * math.sin(math.radians((360 / 365) * (day_of_year(value) - 81)))


def sunset_hour_angle(latitude: float, declination: float) -> float:
    """Hour angle at sunset in degrees.

    Polar day and polar night push the cosine outside [-1, 1]; it is clamped
    so the sun "sets" at midnight or noon instead of failing.
    """
    cos_hour_angle = -math.tan(math.radians(latitude)) * math.tan(math.radians(declination))
    cos_hour_angle = max(-1.0, min(1.0, cos_hour_angle))
    return math.degrees(math.acos(cos_hour_angle))


def utc_offset_hours(value: date, longitude: float, timezone_name: Optional[str] = None) -> float:
    """Clock offset from UTC for the course on ``value``.

    Uses the IANA zone when one is configured (so daylight saving applies),
    otherwise the nominal zone of the longitude's meridian.
    """
    if timezone_name:
        try:
            zone = ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError):
            LOGGER.warning("sunset.unknown_timezone", timezone=timezone_name)
        else:
            offset = datetime.combine(value, time(12, 0), tzinfo=zone).utcoffset()
            if offset is not None:
                return offset.total_seconds() / 3600
    return float(round(longitude / 15))


def compute_twilight_time(
    value: date,
    latitude: float,
    longitude: float,
    minutes_before_sunset: int,
    utc_offset: Optional[float] = None,
) -> str:
    """Twilight start as ``HH:MM`` course clock time.

    Sunset is solar noon (``12 - longitude / 15`` in UTC, shifted by the
    course's UTC offset) plus the sunset hour angle; the twilight start is
    ``minutes_before_sunset`` earlier, floored to the minute.
    """
    if utc_offset is None:
        utc_offset = utc_offset_hours(value, longitude)

    hour_angle = sunset_hour_angle(latitude, solar_declination(value))
    solar_noon = 12 - longitude / 15 + utc_offset
    sunset_hours = solar_noon + hour_angle / 15

    twilight_minutes = math.floor(sunset_hours * 60 - minutes_before_sunset)
    return format_clock(twilight_minutes)
