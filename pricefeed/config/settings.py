from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_TOKEN_ADDRESS = (
    "0x84604526d71bbe7738c3c02d3c8a48778955718289c03d814d8468b58ae9a898"
    "::skelsui::SKELSUI"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PRICEFEED_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    provider_base_url: HttpUrl = HttpUrl("https://api.dexscreener.com")
    token_address: str = DEFAULT_TOKEN_ADDRESS
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    poll_interval_seconds: float = Field(default=30.0, gt=0)

    prices_file: Path = Path("prices.json")

    api_host: str = "0.0.0.0"
    api_port: int = Field(default=3000, ge=0, le=65535)
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
