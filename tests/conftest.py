"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import pytest

from tee_schedule.defaults import create_default_base_schedule
from tee_schedule.models import BaseSchedule


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep developer environment variables out of Settings()."""
    for name in (
        "TEE_SCHEDULE_STORE_DIR",
        "TEE_SCHEDULE_STORE_URL",
        "TEE_SCHEDULE_STORE_TOKEN",
        "TEE_SCHEDULE_AUTO_CREATE",
        "TEE_SCHEDULE_LOG_LEVEL",
        "TEE_SCHEDULE_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def default_config() -> BaseSchedule:
    return create_default_base_schedule("north-course")


@pytest.fixture
def store_dir(tmp_path):
    directory = tmp_path / "schedules"
    directory.mkdir()
    return directory
