"""Tests for the file and HTTP configuration stores."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest
from tenacity import wait_none

from tee_schedule.config import Settings
from tee_schedule.errors import (
    InvalidScheduleError,
    ScheduleNotFoundError,
    ScheduleStoreError,
    StoreUnavailableError,
)
from tee_schedule.models import BaseSchedule
from tee_schedule.store import FileScheduleStore, HttpScheduleStore, build_store


class TestFileScheduleStore:
    def test_missing_course_raises_not_found(self, store_dir):
        store = FileScheduleStore(store_dir)
        with pytest.raises(ScheduleNotFoundError) as excinfo:
            asyncio.run(store.load("north-course"))
        assert excinfo.value.course_id == "north-course"

    def test_create_default_persists_and_is_idempotent(self, store_dir):
        store = FileScheduleStore(store_dir)

        created = asyncio.run(store.create_default("north-course"))
        assert (store_dir / "north-course.json").exists()
        assert len(created.time_periods) == 5

        loaded = asyncio.run(store.load("north-course"))
        assert loaded == created
        assert asyncio.run(store.create_default("north-course")) == created

    def test_saved_document_uses_camel_case(self, store_dir, default_config):
        store = FileScheduleStore(store_dir)
        path = asyncio.run(store.save(default_config))

        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["courseId"] == "north-course"
        assert document["weekdayFirstTee"] == "06:00"

    def test_course_id_is_filled_from_file_name(self, store_dir):
        (store_dir / "south-course.json").write_text(json.dumps({"weekdayFirstTee": "07:00"}), encoding="utf-8")
        config = asyncio.run(FileScheduleStore(store_dir).load("south-course"))
        assert config.course_id == "south-course"
        assert config.weekday_first_tee == "07:00"

    def test_invalid_json(self, store_dir):
        (store_dir / "broken.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidScheduleError):
            asyncio.run(FileScheduleStore(store_dir).load("broken"))

    def test_invalid_document(self, store_dir):
        (store_dir / "broken.json").write_text(json.dumps({"weekdayFirstTee": "late"}), encoding="utf-8")
        with pytest.raises(InvalidScheduleError):
            asyncio.run(FileScheduleStore(store_dir).load("broken"))

    @pytest.mark.parametrize("course_id", ["../etc/passwd", ".hidden", "a/b", ""])
    def test_rejects_unsafe_course_ids(self, store_dir, course_id):
        with pytest.raises(ScheduleStoreError):
            asyncio.run(FileScheduleStore(store_dir).load(course_id))

    def test_save_requires_course_id(self, store_dir):
        with pytest.raises(ScheduleStoreError):
            asyncio.run(FileScheduleStore(store_dir).save(BaseSchedule()))


def _http_store(handler, **settings) -> HttpScheduleStore:
    settings.setdefault("store_url", "http://config.test/api")
    return HttpScheduleStore(
        Settings(**settings),
        transport=httpx.MockTransport(handler),
        wait=wait_none(),
    )


class TestHttpScheduleStore:
    def test_loads_document(self, default_config):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=default_config.model_dump(mode="json", by_alias=True))

        config = asyncio.run(_http_store(handler, store_token="secret").load("north-course"))

        assert config == default_config
        assert requests[0].url.path == "/api/courses/north-course/schedule-config"
        assert requests[0].headers["Authorization"] == "Bearer secret"

    def test_not_found(self):
        store = _http_store(lambda request: httpx.Response(404))
        with pytest.raises(ScheduleNotFoundError):
            asyncio.run(store.load("north-course"))

    def test_null_document_means_not_configured(self):
        store = _http_store(lambda request: httpx.Response(200, json=None))
        with pytest.raises(ScheduleNotFoundError):
            asyncio.run(store.load("north-course"))

    def test_retries_transient_failures(self, default_config):
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            if calls["count"] == 1:
                raise httpx.ConnectError("connection refused", request=request)
            if calls["count"] == 2:
                return httpx.Response(503)
            return httpx.Response(200, json=default_config.model_dump(mode="json", by_alias=True))

        config = asyncio.run(_http_store(handler).load("north-course"))
        assert config.course_id == "north-course"
        assert calls["count"] == 3

    def test_gives_up_after_attempts(self):
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            return httpx.Response(502)

        with pytest.raises(StoreUnavailableError):
            asyncio.run(_http_store(handler).load("north-course"))
        assert calls["count"] == 3

    def test_client_errors_are_not_retried(self):
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            return httpx.Response(403, text="forbidden")

        with pytest.raises(ScheduleStoreError):
            asyncio.run(_http_store(handler).load("north-course"))
        assert calls["count"] == 1

    def test_invalid_body(self):
        store = _http_store(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(InvalidScheduleError):
            asyncio.run(store.load("north-course"))

    def test_create_default_requests_auto_create(self, default_config):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.params.get("autoCreate"))
            return httpx.Response(200, json=default_config.model_dump(mode="json", by_alias=True))

        asyncio.run(_http_store(handler).create_default("north-course"))
        assert seen == ["true"]

    @pytest.mark.parametrize("course_id", ["../admin", "a/b", ""])
    def test_rejects_unsafe_course_ids(self, course_id):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={})

        with pytest.raises(ScheduleStoreError):
            asyncio.run(_http_store(handler).load(course_id))
        assert requests == []

    def test_requires_store_url(self):
        with pytest.raises(ValueError):
            HttpScheduleStore(Settings())


class TestBuildStore:
    def test_file_store_by_default(self, store_dir):
        assert isinstance(build_store(Settings(store_dir=store_dir)), FileScheduleStore)

    def test_http_store_when_url_configured(self):
        assert isinstance(build_store(Settings(store_url="http://config.test")), HttpScheduleStore)
