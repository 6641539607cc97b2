"""Review a schedule for rules whose precedence is decided only by list order.

Resolution tolerates these (first listed wins); this module lets the
administrative side report or reject them before they are saved.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from itertools import combinations
from typing import Iterator, List, Optional

import structlog

from .date_window import month_day_key
from .errors import ScheduleConflictError
from .matching import season_matches, special_day_matches
from .models import BaseSchedule, SeasonRule, SpecialDayRule

LOGGER = structlog.get_logger(__name__)

# Leap year so that Feb 29 takes part in month/day comparisons.
REFERENCE_YEAR = 2024


@dataclass(frozen=True)
class ScheduleConflict:
    """Two rules that both cover ``sample`` with no priority between them."""

    kind: str
    first: str
    second: str
    sample: str

    def describe(self) -> str:
        return f"{self.kind} {self.first!r} and {self.second!r} both cover {self.sample}"


def _reference_days() -> Iterator[date]:
    current = date(REFERENCE_YEAR, 1, 1)
    while current.year == REFERENCE_YEAR:
        yield current
        current += timedelta(days=1)


def _fixed_days(rule: SpecialDayRule) -> Iterator[date]:
    start = date.fromisoformat(rule.start_date)
    end = date.fromisoformat(rule.end_date)
    while start <= end:
        yield start
        start += timedelta(days=1)


def season_overlap(first: SeasonRule, second: SeasonRule) -> Optional[str]:
    """First ``MM-DD`` covered by both seasons, if any."""
    for day in _reference_days():
        if season_matches(first, day) and season_matches(second, day):
            return month_day_key(day)
    return None


def special_day_overlap(first: SpecialDayRule, second: SpecialDayRule) -> Optional[str]:
    """A date (or ``MM-DD`` for two recurring rules) covered by both rules."""
    if first.is_recurring and second.is_recurring:
        for day in _reference_days():
            if special_day_matches(first, day) and special_day_matches(second, day):
                return month_day_key(day)
        return None
    if not first.is_recurring and not second.is_recurring:
        start = max(first.start_date, second.start_date)
        end = min(first.end_date, second.end_date)
        return start if start <= end else None
    fixed, recurring = (second, first) if first.is_recurring else (first, second)
    for day in _fixed_days(fixed):
        if special_day_matches(recurring, day):
            return day.isoformat()
    return None


def find_conflicts(config: BaseSchedule) -> List[ScheduleConflict]:
    """Equal-priority overlapping seasons and overlapping special days."""
    conflicts: List[ScheduleConflict] = []

    for first, second in combinations(config.seasons, 2):
        if first.priority != second.priority:
            continue
        sample = season_overlap(first, second)
        if sample is not None:
            conflicts.append(ScheduleConflict("season", first.name, second.name, sample))

    for first, second in combinations(config.special_days, 2):
        sample = special_day_overlap(first, second)
        if sample is not None:
            conflicts.append(ScheduleConflict("special day", first.name, second.name, sample))

    if conflicts:
        LOGGER.info("validation.conflicts_found", course_id=config.course_id, count=len(conflicts))
    return conflicts


def ensure_no_conflicts(config: BaseSchedule) -> None:
    """Raise ``ScheduleConflictError`` when any precedence is ambiguous."""
    conflicts = find_conflicts(config)
    if conflicts:
        raise ScheduleConflictError(conflicts)
