"""Runtime settings for the HTTP adapter and CLI."""
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HNEFATAFL_", env_file=".env", env_file_encoding="utf-8")

    host: str = Field(default="127.0.0.1", description="Interface the API server binds to")
    port: int = Field(default=8000, ge=1, le=65535, description="Port the API server listens on")
    log_level: str = Field(default="INFO", description="Root logging level used by the CLI")
    cors_origins: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()
