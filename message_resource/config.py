"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from message_resource.i18n.locale import DEFAULT_LOCALE, normalize_locale

DEFAULT_EXTENSION = ".properties"


class ResourceSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MESSAGE_RESOURCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    file_path: str = Field(default="", description="Directory or URL prefix of the resource files.")
    file_extension: str = DEFAULT_EXTENSION
    default_locale: str = DEFAULT_LOCALE
    debug_mode: bool = False

    transport: Literal["http", "file"] = "http"
    base_url: str | None = Field(default=None, description="Base URL for the default HTTP client.")
    request_timeout_seconds: float = Field(default=10.0, gt=0, le=120)
    retry_attempts: int = Field(default=1, ge=1, le=5)

    @field_validator("file_path", mode="before")
    @classmethod
    def _ensure_trailing_separator(cls, value):
        value = value or ""
        if isinstance(value, str) and value and not value.endswith("/"):
            return f"{value}/"
        return value

    @field_validator("file_extension", mode="before")
    @classmethod
    def _ensure_leading_dot(cls, value):
        value = value or DEFAULT_EXTENSION
        if isinstance(value, str) and not value.startswith("."):
            return f".{value}"
        return value

    @field_validator("default_locale", mode="before")
    @classmethod
    def _normalize_default_locale(cls, value):
        return normalize_locale(value, DEFAULT_LOCALE)


@lru_cache
def get_settings() -> ResourceSettings:
    """Return cached settings instance."""

    return ResourceSettings()


__all__ = ["DEFAULT_EXTENSION", "ResourceSettings", "get_settings"]
