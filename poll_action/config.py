"""Pydantic-based configuration helpers for the poll action service."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Iterable, List

from pydantic import BaseModel, Field, ValidationError, field_validator


DEFAULT_SUPPORTED_ENVS = ["poll", "qa", "staging"]
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseModel):
    """Settings required to serve interactions and reach the polls API."""

    signing_secret: str | None = Field(None, alias="ACTION_SIGNING_SECRET")
    interaction_retention_seconds: int = Field(900, alias="INTERACTION_RETENTION_SECONDS")
    supported_envs: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SUPPORTED_ENVS), alias="SUPPORTED_ENVS"
    )
    polls_api_key: str | None = Field(None, alias="POLLS_API_KEY")
    polls_api_base_url: str = Field("https://api.pollsapi.com/v1", alias="POLLS_API_BASE_URL")
    polls_api_timeout: float = Field(10.0, alias="POLLS_API_TIMEOUT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    background_workers: int = Field(4, alias="BACKGROUND_WORKERS")

    @field_validator("signing_secret", "polls_api_key", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None

    @field_validator("supported_envs", mode="before")
    @classmethod
    def _split_envs(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, list):
            return [item.strip() for item in value if item.strip()]
        return [item.strip() for item in value.split(",") if item.strip()]

    @field_validator("interaction_retention_seconds", "polls_api_timeout")
    @classmethod
    def _ensure_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Retention and timeout values must be greater than zero")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("background_workers")
    @classmethod
    def _ensure_workers(cls, value: int) -> int:
        if value < 1:
            raise ValueError("At least one background worker is required")
        return value


def _format_fields(fields: Iterable[str]) -> str:
    """Return a human-friendly comma-separated list of env vars."""

    unique: List[str] = []
    for field in fields:
        if field not in unique:
            unique.append(field)
    return ", ".join(unique)


@lru_cache()
def get_settings() -> AppSettings:
    """Fetch and cache settings from environment variables."""

    try:
        return AppSettings.model_validate(dict(os.environ))
    except ValidationError as exc:
        invalid = [str(error["loc"][0]) for error in exc.errors()]
        message = (
            "Invalid environment variables: "
            f"{_format_fields(invalid)}"
        )
        raise RuntimeError(message) from exc
