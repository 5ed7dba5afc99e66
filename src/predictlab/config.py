"""Environment-driven configuration helpers for PredictLab."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    predictlab_api_key: str = Field(default="", validation_alias="PREDICTLAB_API_KEY")
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    notify_on_new_prediction: bool = Field(default=True)
    success_message: str = Field(default="Prediction saved successfully!")

    max_goals: int = Field(default=10, ge=1, le=20)
    home_advantage: float = Field(default=1.1, ge=0.5, le=2.0)
    high_scoring_threshold: float = Field(default=2.5, ge=0.0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]


def get_api_access_key() -> str:
    key = os.getenv("PREDICTLAB_API_KEY") or get_settings().predictlab_api_key
    if not key:
        raise RuntimeError(
            "PREDICTLAB_API_KEY is not configured. Set it in your environment or .env file."
        )
    return key
