"""Runtime settings for the schedule tooling."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, HttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    store_dir: Path = Field(Path("schedules"))
    store_url: Optional[HttpUrl] = Field(None)
    store_token: Optional[SecretStr] = Field(None)
    timeout_seconds: float = Field(15.0, gt=0)
    auto_create: bool = Field(False)
    log_level: str = Field("INFO")
    log_json: bool = Field(False)

    model_config = SettingsConfigDict(
        env_prefix="TEE_SCHEDULE_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, value: object) -> str:
        return str(value or "INFO").upper()

    @property
    def uses_remote_store(self) -> bool:
        return self.store_url is not None

    def schedule_url(self, course_id: str) -> str:
        """Endpoint serving the schedule document for a course."""
        return f"{str(self.store_url).rstrip('/')}/courses/{course_id}/schedule-config"
