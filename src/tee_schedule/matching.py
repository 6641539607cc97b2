"""Date matching and tie-break selection for seasons and special days."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from .date_window import (
    in_fixed_range,
    in_month_day_range,
    in_recurring_range,
    month_day_key,
    month_day_value,
)
from .models import SeasonRule, SpecialDayRule


def season_matches(season: SeasonRule, value: date) -> bool:
    return in_month_day_range(
        month_day_value(value.month, value.day),
        month_day_value(season.start_month, season.start_day),
        month_day_value(season.end_month, season.end_day),
    )


def special_day_matches(rule: SpecialDayRule, value: date) -> bool:
    if rule.is_recurring:
        return in_recurring_range(month_day_key(value), rule.start_date, rule.end_date)
    return in_fixed_range(value.isoformat(), rule.start_date, rule.end_date)


def select_season(seasons: Iterable[SeasonRule], value: date) -> Optional[SeasonRule]:
    """Highest-priority season covering ``value``.

    Equal priorities resolve to the season listed first.
    """
    selected: Optional[SeasonRule] = None
    for season in seasons:
        if not season_matches(season, value):
            continue
        if selected is None or season.priority > selected.priority:
            selected = season
    return selected


def select_special_day(rules: Iterable[SpecialDayRule], value: date) -> Optional[SpecialDayRule]:
    """First special day in list order covering ``value``."""
    for rule in rules:
        if special_day_matches(rule, value):
            return rule
    return None
