"""Tee-time slot preview generated from an effective schedule."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .date_window import format_clock, parse_clock
from .models import EffectiveSchedule, TimePeriod

DEFAULT_INTERVAL_MINUTES = 10
MAX_SLOTS = 200
PLAYERS_PER_SLOT = 4


@dataclass(frozen=True)
class TeeTimeSlot:
    """A single starting time on the tee sheet."""

    time: str
    period_name: str
    interval: int
    is_prime_time: bool
    is_twilight: bool


@dataclass(frozen=True)
class SlotSummary:
    total_slots: int
    max_players: int
    prime_time_slots: int
    prime_time_percentage: int


@dataclass(frozen=True)
class SchedulePreview:
    """Slots for one date along with the schedule that produced them."""

    schedule: EffectiveSchedule
    slots: list[TeeTimeSlot] = field(default_factory=list)

    @property
    def summary(self) -> SlotSummary:
        prime = sum(1 for slot in self.slots if slot.is_prime_time)
        total = len(self.slots)
        return SlotSummary(
            total_slots=total,
            max_players=total * PLAYERS_PER_SLOT,
            prime_time_slots=prime,
            prime_time_percentage=math.floor(prime / total * 100 + 0.5) if total else 0,
        )


def period_at(minutes: int, periods: Sequence[TimePeriod], last_tee: str) -> Optional[TimePeriod]:
    """First period, by sort order, whose [start, end) covers ``minutes``.

    Open-ended periods run until the last tee.
    """
    for period in sorted(periods, key=lambda item: item.sort_order):
        start = parse_clock(period.start_time)
        end = parse_clock(period.end_time or last_tee)
        if start <= minutes < end:
            return period
    return None


def generate_tee_time_slots(schedule: EffectiveSchedule) -> SchedulePreview:
    """Lay out tee times from first to last tee (inclusive).

    Each step uses the interval of the period covering the current time,
    falling back to ten minutes outside any period. Slots at or after the
    twilight time are labelled Twilight and never count as prime time.
    """
    if schedule.is_closed:
        return SchedulePreview(schedule=schedule)

    twilight = parse_clock(schedule.twilight_time)
    last_tee = parse_clock(schedule.last_tee)
    current = parse_clock(schedule.first_tee)
    slots: list[TeeTimeSlot] = []

    while current <= last_tee and len(slots) < MAX_SLOTS:
        period = period_at(current, schedule.time_periods, schedule.last_tee)
        interval = period.interval_minutes if period else DEFAULT_INTERVAL_MINUTES
        is_twilight = current >= twilight
        if is_twilight:
            name = "Twilight"
        else:
            name = period.name if period else "Standard"
        slots.append(
            TeeTimeSlot(
                time=format_clock(current),
                period_name=name,
                interval=interval,
                is_prime_time=bool(period and period.is_prime_time) and not is_twilight,
                is_twilight=is_twilight,
            )
        )
        current += interval

    return SchedulePreview(schedule=schedule, slots=slots)
