"""Tests for configuration document validation."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from tee_schedule.defaults import default_time_periods
from tee_schedule.models import (
    ApplicableDays,
    BaseSchedule,
    BookingMode,
    DayType,
    SeasonRule,
    SpecialDayRule,
    SpecialDayType,
    TimePeriod,
    TwilightMode,
)
from tee_schedule.resolver import resolve

UPSTREAM_DOCUMENT = {
    "id": "cfg-1",
    "courseId": "north-course",
    "weekdayFirstTee": "06:30",
    "weekdayLastTee": "16:30",
    "weekdayBookingMode": "CROSS",
    "weekendFirstTee": "05:30",
    "weekendLastTee": "17:30",
    "weekendBookingMode": "EIGHTEEN",
    "twilightMode": "SUNSET",
    "twilightMinutesBeforeSunset": 60,
    "twilightFixedDefault": "16:00",
    "clubLatitude": 13.75,
    "clubLongitude": 100.5,
    "defaultBookingWindowDays": 10,
    "timePeriods": [
        {
            "id": "tp-1",
            "name": "Morning",
            "startTime": "06:00",
            "endTime": None,
            "intervalMinutes": 8,
            "isPrimeTime": True,
            "applicableDays": "ALL",
            "sortOrder": 0,
        }
    ],
    "seasons": [
        {
            "id": "s-1",
            "name": "High Season",
            "startMonth": 11,
            "startDay": 1,
            "endMonth": 2,
            "endDay": 28,
            "isRecurring": True,
            "priority": 10,
            "overrideFirstTee": "",
            "overrideLastTee": "18:00",
            "overrideBookingWindow": 14,
            "overrideTwilightTime": None,
            "overrideTimePeriods": False,
            "weekdayBookingMode": None,
            "weekendBookingMode": "CROSS",
            "timePeriods": [],
        }
    ],
    "specialDays": [
        {
            "id": "d-1",
            "name": "Songkran",
            "startDate": "04-13",
            "endDate": "04-15",
            "isRecurring": True,
            "type": "HOLIDAY",
            "customFirstTee": None,
            "customLastTee": None,
            "customTimePeriods": False,
            "bookingMode": None,
            "timePeriods": [],
        }
    ],
}


class TestUpstreamDocument:
    def test_camel_case_document_loads(self):
        config = BaseSchedule.model_validate(UPSTREAM_DOCUMENT)

        assert config.course_id == "north-course"
        assert config.weekday_booking_mode is BookingMode.CROSS
        assert config.twilight_mode is TwilightMode.SUNSET
        assert config.latitude == 13.75
        assert config.has_coordinates
        assert config.seasons[0].override_booking_window_days == 14
        assert config.seasons[0].override_first_tee is None
        assert config.special_days[0].type is SpecialDayType.HOLIDAY
        assert config.time_periods[0].end_time is None

    def test_round_trip_keeps_aliases(self):
        config = BaseSchedule.model_validate(UPSTREAM_DOCUMENT)
        dumped = config.model_dump(mode="json", by_alias=True)

        assert dumped["clubLatitude"] == 13.75
        assert dumped["seasons"][0]["overrideBookingWindow"] == 14
        assert BaseSchedule.model_validate(dumped) == config


class TestTimePeriod:
    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            TimePeriod(name="Broken", start_time="06:00", interval_minutes=0)

    @pytest.mark.parametrize("value", ["6:00", "24:00", "06:60", "noon"])
    def test_clock_format(self, value):
        with pytest.raises(ValidationError):
            TimePeriod(name="Broken", start_time=value, interval_minutes=10)

    def test_applies_to(self):
        weekend = TimePeriod(
            name="Weekend",
            start_time="06:00",
            interval_minutes=10,
            applicable_days=ApplicableDays.WEEKEND,
        )
        assert weekend.applies_to(DayType.WEEKEND)
        assert not weekend.applies_to(DayType.WEEKDAY)

    def test_is_immutable(self):
        period = default_time_periods()[0]
        with pytest.raises(ValidationError):
            period.interval_minutes = 5


class TestSeasonRule:
    def test_month_bounds(self):
        with pytest.raises(ValidationError):
            SeasonRule(name="Broken", start_month=13, start_day=1, end_month=2, end_day=1)

    def test_booking_mode_for_day_type(self):
        season = SeasonRule(
            name="Summer",
            start_month=3,
            start_day=1,
            end_month=10,
            end_day=31,
            weekend_booking_mode=BookingMode.CROSS,
        )
        assert season.booking_mode_for(DayType.WEEKEND) is BookingMode.CROSS
        assert season.booking_mode_for(DayType.WEEKDAY) is None


class TestSpecialDayRule:
    def test_recurring_rule_requires_month_day(self):
        with pytest.raises(ValidationError):
            SpecialDayRule(name="Bad", start_date="2026-12-25", end_date="2026-12-25", type="HOLIDAY")

    def test_fixed_rule_requires_full_date(self):
        with pytest.raises(ValidationError):
            SpecialDayRule(
                name="Bad",
                start_date="12-25",
                end_date="12-25",
                is_recurring=False,
                type="CLOSED",
            )

    def test_blank_custom_times_become_none(self):
        rule = SpecialDayRule(
            name="Custom",
            start_date="05-01",
            end_date="05-01",
            type="CUSTOM",
            custom_first_tee="",
        )
        assert rule.custom_first_tee is None


class TestBaseSchedule:
    def test_defaults(self):
        config = BaseSchedule()
        assert config.first_tee_for(DayType.WEEKDAY) == "06:00"
        assert config.last_tee_for(DayType.WEEKEND) == "17:30"
        assert config.booking_mode_for(DayType.WEEKEND) is BookingMode.EIGHTEEN
        assert not config.has_coordinates

    def test_booking_window_bounds(self):
        with pytest.raises(ValidationError):
            BaseSchedule(default_booking_window_days=0)

    def test_fingerprint_tracks_nested_changes(self, default_config):
        season = SeasonRule(name="Winter", start_month=11, start_day=1, end_month=2, end_day=28)
        changed = default_config.model_copy(update={"seasons": (season,)})

        assert default_config.fingerprint() == default_config.fingerprint()
        assert changed.fingerprint() != default_config.fingerprint()


class TestSeasonBookingWindowKeys:
    @pytest.mark.parametrize(
        "key",
        ["overrideBookingWindow", "overrideBookingWindowDays", "override_booking_window_days"],
    )
    def test_each_key_sets_the_override(self, key):
        season = SeasonRule.model_validate(
            {"name": "High Season", "startMonth": 11, "startDay": 1, "endMonth": 2, "endDay": 28, key: 14}
        )
        config = BaseSchedule(seasons=[season])

        assert season.override_booking_window_days == 14
        assert resolve(config, date(2026, 12, 25)).booking_window_days == 14

    def test_serialises_under_upstream_key(self):
        season = SeasonRule(
            name="High Season",
            start_month=11,
            start_day=1,
            end_month=2,
            end_day=28,
            override_booking_window_days=14,
        )
        dumped = season.model_dump(by_alias=True)
        assert dumped["overrideBookingWindow"] == 14
        assert "overrideBookingWindowDays" not in dumped
