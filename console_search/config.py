"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

IntentMode = Literal["strict", "prefilter", "mixed"]


class EndpointSettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="http://localhost:8080/console",
        description="Console root serving the search endpoint.",
    )
    search_path: str = Field(default="/search", min_length=1)
    request_timeout_seconds: int = Field(default=10, ge=1, le=60)

    @field_validator("search_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"

    def search_url(self) -> str:
        return f"{str(self.base_url).rstrip('/')}{self.search_path}"

    def page_url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{str(self.base_url).rstrip('/')}{path}"


class InteractionSettings(BaseModel):
    debounce_ms: int = Field(default=150, ge=0, le=2000)
    no_results_flash_ms: int = Field(default=500, ge=0, le=10_000)
    intent_mode: IntentMode = Field(
        default="strict",
        description="strict keeps results as returned, prefilter narrows them to the "
        "query intent, mixed reports the All intent for multi-type results.",
    )


class SearchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"

    endpoint: EndpointSettings = Field(default_factory=EndpointSettings)
    interaction: InteractionSettings = Field(default_factory=InteractionSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value):
        if isinstance(value, str) and value.strip():
            return value.strip().upper()
        return "INFO"


@lru_cache
def get_settings() -> SearchSettings:
    """Return cached settings instance."""

    return SearchSettings()


__all__ = [
    "EndpointSettings",
    "IntentMode",
    "InteractionSettings",
    "SearchSettings",
    "get_settings",
]
