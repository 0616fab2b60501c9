"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SearchProviderSettings(BaseModel):
    api_key: SecretStr | None = Field(
        default=None,
        description="Brave Search subscription token sent as X-Subscription-Token.",
    )
    base_url: AnyHttpUrl = Field(default="https://api.search.brave.com/res/v1/web/search")
    result_count: int = Field(default=3, ge=1, le=20)
    timeout_seconds: float = Field(default=5.0, gt=0, le=60)
    combine_domain_into_query: bool = False


class RequestLimitSettings(BaseModel):
    max_requests: int = Field(default=60, ge=0)
    interval_seconds: int = Field(default=60, ge=1)


class CorsSettings(BaseModel):
    allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    allow_methods: list[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    allow_headers: list[str] = Field(default_factory=lambda: ["Content-Type", "Authorization"])

    @field_validator("allow_origins", "allow_methods", "allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, value):
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)


class ProxySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PROXY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__"
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    search: SearchProviderSettings = Field(default_factory=SearchProviderSettings)
    request_limit: RequestLimitSettings = Field(default_factory=RequestLimitSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


@lru_cache
def get_settings() -> ProxySettings:
    """Return cached settings instance."""

    return ProxySettings()


__all__ = [
    "CorsSettings",
    "ProxySettings",
    "RequestLimitSettings",
    "SearchProviderSettings",
    "ServerSettings",
    "get_settings",
]
