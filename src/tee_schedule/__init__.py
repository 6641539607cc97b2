"""Effective tee sheet schedules for golf courses."""

from importlib.metadata import PackageNotFoundError, version

from .defaults import create_default_base_schedule, default_time_periods
from .models import (
    ApplicableDays,
    BaseSchedule,
    BookingMode,
    DayType,
    EffectiveSchedule,
    SeasonRule,
    SpecialDayRule,
    SpecialDayType,
    TimePeriod,
    TwilightMode,
)
from .resolver import fallback_schedule, resolve
from .sunset import compute_twilight_time

try:
    __version__ = version("tee-schedule")
except PackageNotFoundError:  # pragma: no cover - fallback during local dev
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ApplicableDays",
    "BaseSchedule",
    "BookingMode",
    "DayType",
    "EffectiveSchedule",
    "SeasonRule",
    "SpecialDayRule",
    "SpecialDayType",
    "TimePeriod",
    "TwilightMode",
    "compute_twilight_time",
    "create_default_base_schedule",
    "default_time_periods",
    "fallback_schedule",
    "resolve",
]
