"""Configuration stores that supply a course's base schedule."""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any, Optional, Protocol

import httpx
import structlog
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from .config import Settings
from .defaults import create_default_base_schedule
from .errors import (
    InvalidScheduleError,
    ScheduleNotFoundError,
    ScheduleStoreError,
    StoreUnavailableError,
)
from .models import BaseSchedule

LOGGER = structlog.get_logger(__name__)

COURSE_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


def check_course_id(course_id: str) -> str:
    if not COURSE_ID_PATTERN.match(course_id):
        raise ScheduleStoreError(f"Invalid course id {course_id!r}")
    return course_id


class ScheduleStore(Protocol):
    async def load(self, course_id: str) -> BaseSchedule:
        """Return the stored schedule or raise ``ScheduleNotFoundError``."""

    async def create_default(self, course_id: str) -> BaseSchedule:
        """Return the stored schedule, creating the default one if absent."""


def parse_document(payload: Any, course_id: str) -> BaseSchedule:
    """Validate a raw schedule document."""
    if payload is None:
        raise ScheduleNotFoundError(course_id)
    try:
        config = BaseSchedule.model_validate(payload)
    except ValidationError as exc:
        LOGGER.error("store.document_invalid", course_id=course_id, errors=exc.error_count())
        raise InvalidScheduleError(f"Schedule for course {course_id!r} is invalid: {exc}") from exc
    if config.course_id is None:
        config = config.model_copy(update={"course_id": course_id})
    return config


class FileScheduleStore:
    """One JSON document per course under a directory."""

    def __init__(self, directory: Path | str):
        self._directory = Path(directory)

    def path_for(self, course_id: str) -> Path:
        check_course_id(course_id)
        return self._directory / f"{course_id}.json"

    async def load(self, course_id: str) -> BaseSchedule:
        path = self.path_for(course_id)
        if not path.exists():
            raise ScheduleNotFoundError(course_id)

        LOGGER.debug("store.load.start", course_id=course_id, path=str(path))
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidScheduleError(f"Schedule for course {course_id!r} is not valid JSON") from exc
        return parse_document(payload, course_id)

    async def save(self, config: BaseSchedule) -> Path:
        if not config.course_id:
            raise ScheduleStoreError("Cannot save a schedule without a course id")
        path = self.path_for(config.course_id)
        document = config.model_dump_json(by_alias=True, indent=2)

        def _write() -> None:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(document + "\n", encoding="utf-8")

        await asyncio.to_thread(_write)
        LOGGER.info("store.save.success", course_id=config.course_id, path=str(path))
        return path

    async def create_default(self, course_id: str) -> BaseSchedule:
        try:
            return await self.load(course_id)
        except ScheduleNotFoundError:
            pass
        config = create_default_base_schedule(course_id)
        await self.save(config)
        LOGGER.info("store.default_created", course_id=course_id)
        return config


class HttpScheduleStore:
    """Read schedules from the configuration service over HTTP."""

    def __init__(
        self,
        settings: Settings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        wait: Optional[wait_base] = None,
        attempts: int = 3,
    ):
        if settings.store_url is None:
            raise ValueError("store_url must be configured for the HTTP store")
        self._settings = settings
        self._transport = transport
        self._wait = wait or wait_exponential(multiplier=1, min=1, max=8)
        self._attempts = attempts

    async def load(self, course_id: str) -> BaseSchedule:
        payload = await self._get(course_id)
        return parse_document(payload, course_id)

    async def create_default(self, course_id: str) -> BaseSchedule:
        payload = await self._get(course_id, params={"autoCreate": "true"})
        return parse_document(payload, course_id)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._settings.store_token is not None:
            headers["Authorization"] = f"Bearer {self._settings.store_token.get_secret_value()}"
        return headers

    async def _get(self, course_id: str, params: Optional[dict[str, str]] = None) -> Any:
        """Fetch a schedule document, retrying transient failures."""
        url = self._settings.schedule_url(check_course_id(course_id))
        LOGGER.info("store.load.start", course_id=course_id, url=url)

        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(StoreUnavailableError),
            wait=self._wait,
            stop=stop_after_attempt(self._attempts),
            reraise=True,
        ):
            with attempt:
                async with httpx.AsyncClient(
                    timeout=self._settings.timeout_seconds,
                    transport=self._transport,
                    headers=self._headers(),
                ) as client:
                    try:
                        response = await client.get(url, params=params)
                    except httpx.TransportError as exc:
                        LOGGER.warning("store.load.transport_error", course_id=course_id, error=str(exc))
                        raise StoreUnavailableError(f"Configuration store unreachable: {exc}") from exc
                return self._decode(response, course_id)

    @staticmethod
    def _decode(response: httpx.Response, course_id: str) -> Any:
        if response.status_code == 404:
            raise ScheduleNotFoundError(course_id)
        if response.status_code >= 500:
            LOGGER.warning("store.load.server_error", course_id=course_id, status_code=response.status_code)
            raise StoreUnavailableError(f"Configuration store returned {response.status_code}")
        if response.is_error:
            LOGGER.error("store.load.failed", status_code=response.status_code, body=response.text)
            raise ScheduleStoreError(f"Configuration store returned {response.status_code}: {response.text}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise InvalidScheduleError(f"Schedule for course {course_id!r} is not valid JSON") from exc
        LOGGER.info("store.load.success", course_id=course_id)
        return payload


def build_store(settings: Settings) -> ScheduleStore:
    """HTTP store when a store URL is configured, file store otherwise."""
    if settings.uses_remote_store:
        return HttpScheduleStore(settings)
    return FileScheduleStore(settings.store_dir)
