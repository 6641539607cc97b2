"""Schedule configuration models and the derived effective schedule."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

CLOCK_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
RECURRING_DATE_PATTERN = re.compile(r"^(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")
FIXED_DATE_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$")

ClockTime = Annotated[str, StringConstraints(pattern=CLOCK_PATTERN)]


class DayType(str, Enum):
    WEEKDAY = "WEEKDAY"
    WEEKEND = "WEEKEND"


class ApplicableDays(str, Enum):
    ALL = "ALL"
    WEEKDAY = "WEEKDAY"
    WEEKEND = "WEEKEND"


class BookingMode(str, Enum):
    """Tee sheet layout: one starting tee, or hole 1 and hole 10 in parallel."""

    EIGHTEEN = "EIGHTEEN"
    CROSS = "CROSS"


class TwilightMode(str, Enum):
    FIXED = "FIXED"
    SUNSET = "SUNSET"


class SpecialDayType(str, Enum):
    CLOSED = "CLOSED"
    WEEKEND = "WEEKEND"
    HOLIDAY = "HOLIDAY"
    CUSTOM = "CUSTOM"


class ScheduleModel(BaseModel):
    """Base for configuration documents.

    Documents are immutable once loaded and accept either the camelCase keys
    used by the configuration service or the snake_case attribute names.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class TimePeriod(ScheduleModel):
    """A named window of the operating day with its own tee-time interval."""

    id: Optional[str] = None
    name: str
    start_time: ClockTime
    end_time: Optional[ClockTime] = None
    interval_minutes: int = Field(..., gt=0)
    is_prime_time: bool = False
    applicable_days: ApplicableDays = ApplicableDays.ALL
    sort_order: int = Field(0, ge=0)

    @field_validator("end_time", mode="before")
    @classmethod
    def open_ended(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def applies_to(self, day_type: DayType) -> bool:
        return self.applicable_days is ApplicableDays.ALL or self.applicable_days.value == day_type.value


class SeasonRule(ScheduleModel):
    """A prioritised month/day range overriding part of the base schedule.

    The range is inclusive and compared as ``month * 100 + day``; a start
    later than the end wraps over the new year (e.g. Nov 1 - Feb 28).
    """

    id: Optional[str] = None
    name: str
    start_month: int = Field(..., ge=1, le=12)
    start_day: int = Field(..., ge=1, le=31)
    end_month: int = Field(..., ge=1, le=12)
    end_day: int = Field(..., ge=1, le=31)
    is_recurring: bool = True
    priority: int = 0
    override_first_tee: Optional[ClockTime] = None
    override_last_tee: Optional[ClockTime] = None
    override_booking_window_days: Optional[int] = Field(
        None,
        ge=1,
        validation_alias=AliasChoices(
            "overrideBookingWindow",
            "overrideBookingWindowDays",
            "override_booking_window_days",
        ),
        serialization_alias="overrideBookingWindow",
    )
    override_twilight_time: Optional[ClockTime] = None
    override_time_periods: bool = False
    time_periods: tuple[TimePeriod, ...] = ()
    weekday_booking_mode: Optional[BookingMode] = None
    weekend_booking_mode: Optional[BookingMode] = None

    @field_validator(
        "override_first_tee",
        "override_last_tee",
        "override_twilight_time",
        mode="before",
    )
    @classmethod
    def empty_override(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def booking_mode_for(self, day_type: DayType) -> Optional[BookingMode]:
        if day_type is DayType.WEEKEND:
            return self.weekend_booking_mode
        return self.weekday_booking_mode


class SpecialDayRule(ScheduleModel):
    """A holiday, closure, forced-weekend or custom day (or range of days).

    Recurring rules hold ``MM-DD`` bounds and may wrap the new year; one-off
    rules hold full ``YYYY-MM-DD`` bounds.
    """

    id: Optional[str] = None
    name: str
    start_date: str
    end_date: str
    is_recurring: bool = True
    type: SpecialDayType
    custom_first_tee: Optional[ClockTime] = None
    custom_last_tee: Optional[ClockTime] = None
    custom_time_periods: bool = False
    time_periods: tuple[TimePeriod, ...] = ()
    booking_mode: Optional[BookingMode] = None
    notes: Optional[str] = None

    @field_validator("custom_first_tee", "custom_last_tee", mode="before")
    @classmethod
    def empty_custom_time(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @model_validator(mode="after")
    def check_date_format(self) -> "SpecialDayRule":
        pattern = RECURRING_DATE_PATTERN if self.is_recurring else FIXED_DATE_PATTERN
        expected = "MM-DD" if self.is_recurring else "YYYY-MM-DD"
        for label, value in (("start_date", self.start_date), ("end_date", self.end_date)):
            if not pattern.match(value):
                raise ValueError(f"{label} must be {expected} for special day {self.name!r}, got {value!r}")
        return self


class BaseSchedule(ScheduleModel):
    """Per-course schedule defaults plus its seasons and special days."""

    id: Optional[str] = None
    course_id: Optional[str] = None
    weekday_first_tee: ClockTime = "06:00"
    weekday_last_tee: ClockTime = "17:00"
    weekday_booking_mode: BookingMode = BookingMode.EIGHTEEN
    weekend_first_tee: ClockTime = "05:30"
    weekend_last_tee: ClockTime = "17:30"
    weekend_booking_mode: BookingMode = BookingMode.EIGHTEEN
    twilight_mode: TwilightMode = TwilightMode.FIXED
    twilight_minutes_before_sunset: int = Field(90, ge=0, le=180)
    twilight_fixed_default: ClockTime = "16:00"
    latitude: Optional[float] = Field(None, ge=-90, le=90, alias="clubLatitude")
    longitude: Optional[float] = Field(None, ge=-180, le=180, alias="clubLongitude")
    timezone: Optional[str] = None
    default_booking_window_days: int = Field(7, ge=1, le=365)
    time_periods: tuple[TimePeriod, ...] = ()
    seasons: tuple[SeasonRule, ...] = ()
    special_days: tuple[SpecialDayRule, ...] = ()

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def first_tee_for(self, day_type: DayType) -> str:
        return self.weekend_first_tee if day_type is DayType.WEEKEND else self.weekday_first_tee

    def last_tee_for(self, day_type: DayType) -> str:
        return self.weekend_last_tee if day_type is DayType.WEEKEND else self.weekday_last_tee

    def booking_mode_for(self, day_type: DayType) -> BookingMode:
        return self.weekend_booking_mode if day_type is DayType.WEEKEND else self.weekday_booking_mode

    def fingerprint(self) -> str:
        """Digest of the whole aggregate; changes whenever any nested rule does."""
        payload = self.model_dump_json(by_alias=True)
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class ActiveSeason:
    id: Optional[str]
    name: str


@dataclass(frozen=True)
class ActiveSpecialDay:
    id: Optional[str]
    name: str
    type: SpecialDayType


@dataclass(frozen=True)
class EffectiveSchedule:
    """Operating parameters in force for one course on one date."""

    date: date
    day_type: DayType
    first_tee: str
    last_tee: str
    twilight_mode: TwilightMode
    twilight_time: str
    booking_window_days: int
    booking_mode: BookingMode
    time_periods: tuple[TimePeriod, ...] = field(default_factory=tuple)
    active_season: Optional[ActiveSeason] = None
    active_special_day: Optional[ActiveSpecialDay] = None
    is_closed: bool = False
    course_id: Optional[str] = None

    @property
    def iso(self) -> str:
        return self.date.isoformat()

    def to_dict(self) -> dict[str, Any]:
        """Render the camelCase shape returned to booking clients."""
        payload: dict[str, Any] = {
            "courseId": self.course_id,
            "date": self.iso,
            "dayType": self.day_type.value,
            "firstTee": self.first_tee,
            "lastTee": self.last_tee,
            "twilightMode": self.twilight_mode.value,
            "twilightTime": self.twilight_time,
            "bookingWindowDays": self.booking_window_days,
            "bookingMode": self.booking_mode.value,
            "timePeriods": [period.model_dump(mode="json", by_alias=True) for period in self.time_periods],
            "isClosed": self.is_closed,
        }
        if self.active_season is not None:
            payload["activeSeason"] = {"id": self.active_season.id, "name": self.active_season.name}
        if self.active_special_day is not None:
            payload["activeSpecialDay"] = {
                "id": self.active_special_day.id,
                "name": self.active_special_day.name,
                "type": self.active_special_day.type.value,
            }
        return payload
