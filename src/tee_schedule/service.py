"""Effective-schedule lookups for the booking side, backed by a store."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Tuple

import structlog

from .date_window import booking_window_dates
from .errors import ScheduleNotFoundError
from .models import BaseSchedule, EffectiveSchedule
from .resolver import fallback_schedule, resolve
from .store import ScheduleStore

LOGGER = structlog.get_logger(__name__)


class ScheduleService:
    """Loads course configuration and resolves it per date.

    Resolved schedules are memoised on ``(configuration fingerprint, date)``
    so an edited configuration is never answered from a stale entry.
    """

    def __init__(self, store: ScheduleStore, *, auto_create: bool = False, cache_size: int = 512):
        self._store = store
        self._auto_create = auto_create
        self._cache_size = cache_size
        self._cache: Dict[Tuple[str, date], EffectiveSchedule] = {}

    async def get_base_schedule(self, course_id: str, auto_create: Optional[bool] = None) -> Optional[BaseSchedule]:
        """Stored configuration, the freshly created default, or ``None``."""
        create = self._auto_create if auto_create is None else auto_create
        try:
            return await self._store.load(course_id)
        except ScheduleNotFoundError:
            if not create:
                LOGGER.info("service.schedule_missing", course_id=course_id)
                return None
        LOGGER.info("service.creating_default", course_id=course_id)
        return await self._store.create_default(course_id)

    async def effective_schedule(self, course_id: str, value: date) -> EffectiveSchedule:
        """Resolved schedule for ``value``; fallback hours if nothing is configured."""
        config = await self.get_base_schedule(course_id)
        if config is None:
            return fallback_schedule(value, course_id=course_id)
        return self.resolve_cached(config, value)

    async def booking_window(self, course_id: str, today: Optional[date] = None) -> List[EffectiveSchedule]:
        """Schedules for every date currently open for booking.

        The window length comes from the schedule resolved for ``today``.
        """
        today = today or date.today()
        config = await self.get_base_schedule(course_id)
        if config is None:
            first = fallback_schedule(today, course_id=course_id)
            return [
                fallback_schedule(value, course_id=course_id)
                for value in booking_window_dates(today, window_days=first.booking_window_days)
            ]
        first = self.resolve_cached(config, today)
        return [
            self.resolve_cached(config, value)
            for value in booking_window_dates(today, window_days=first.booking_window_days)
        ]

    def resolve_cached(self, config: BaseSchedule, value: date) -> EffectiveSchedule:
        key = (config.fingerprint(), value)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        effective = resolve(config, value)
        if self._cache_size <= 0:
            return effective
        if len(self._cache) >= self._cache_size:
            self._cache.pop(next(iter(self._cache)))
        self._cache[key] = effective
        return effective
