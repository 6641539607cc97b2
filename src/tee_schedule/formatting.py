"""Plain-text rendering of effective schedules for the CLI."""

from __future__ import annotations

from typing import Optional

from .date_window import day_name
from .models import EffectiveSchedule, TimePeriod
from .slots import SchedulePreview, TeeTimeSlot


def format_schedule(schedule: EffectiveSchedule, preview: Optional[SchedulePreview] = None) -> str:
    """Build a human-friendly description of one resolved date."""
    lines: list[str] = [f"{day_name(schedule.date)} ({schedule.iso}) - {schedule.day_type.value.lower()}"]

    if schedule.is_closed:
        lines.append("Course closed.")
    lines.append(f"Tee times: {schedule.first_tee} - {schedule.last_tee}")
    lines.append(f"Twilight from: {schedule.twilight_time} ({schedule.twilight_mode.value.lower()})")
    lines.append(f"Booking mode: {schedule.booking_mode.value}")
    lines.append(f"Booking window: {schedule.booking_window_days} days")

    if schedule.active_season:
        lines.append(f"Season: {schedule.active_season.name}")
    if schedule.active_special_day:
        special = schedule.active_special_day
        lines.append(f"Special day: {special.name} ({special.type.value})")

    lines.append("")
    if schedule.time_periods:
        lines.append("Periods:")
        for period in schedule.time_periods:
            lines.append(f"- {format_period(period)}")
    else:
        lines.append("No time periods configured.")

    if preview is not None and preview.slots:
        summary = preview.summary
        lines.append("")
        lines.append(
            f"Slots: {summary.total_slots} ({summary.prime_time_slots} prime, "
            f"{summary.prime_time_percentage}%), up to {summary.max_players} players"
        )
        for slot in preview.slots:
            lines.append(f"- {format_slot(slot)}")

    return "\n".join(lines).strip()


def format_period(period: TimePeriod) -> str:
    """Format a single time period."""
    end = period.end_time or "close"
    pieces = [f"{period.name} {period.start_time}-{end}", f"every {period.interval_minutes} min"]
    if period.is_prime_time:
        pieces.append("prime")
    return ", ".join(pieces)


def format_slot(slot: TeeTimeSlot) -> str:
    pieces = [slot.time, slot.period_name]
    if slot.is_prime_time:
        pieces.append("prime")
    return " ".join(pieces)
