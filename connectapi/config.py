"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseModel):
    base_url: HttpUrl = Field(
        default="http://localhost:5000/api",
        description="Root of the directory backend; endpoint paths are appended to it.",
    )
    search_path: str = "/user/search"
    trending_path: str = "/user/trending"
    request_timeout_seconds: int = Field(default=15, ge=1, le=120)

    @field_validator("search_path", "trending_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        value = value.strip()
        return value if value.startswith("/") else f"/{value}"


class CredentialSettings(BaseModel):
    token_key: str = Field(default="userToken", min_length=1)
    store_path: Path | None = Field(
        default=None,
        description="Optional JSON file standing in for the browser's local storage.",
    )


class SearchSettings(BaseModel):
    default_empty_message: str = "No APIs found."
    default_error_message: str = "Search failed"
    discard_stale_responses: bool = False


class TrendingSettings(BaseModel):
    display_limit: int = Field(default=5, ge=1)


class IdentitySettings(BaseModel):
    default_display_name: str = Field(default="User", min_length=1)
    verify_expiry: bool = True


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CONNECTAPI_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    api: ApiSettings = Field(default_factory=ApiSettings)
    credentials: CredentialSettings = Field(default_factory=CredentialSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    trending: TrendingSettings = Field(default_factory=TrendingSettings)
    identity: IdentitySettings = Field(default_factory=IdentitySettings)

    def endpoint(self, path: str) -> str:
        return f"{str(self.api.base_url).rstrip('/')}{path}"


@lru_cache
def get_settings() -> AppSettings:
    """Return cached settings instance."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "ApiSettings",
    "CredentialSettings",
    "SearchSettings",
    "TrendingSettings",
    "IdentitySettings",
    "get_settings",
]
