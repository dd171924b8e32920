"""Application configuration utilities.

This module defines application settings loaded from environment variables.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application settings loaded from the environment.

    Notes
    -----
    - Environment variables are read with the ``YTM_`` prefix (e.g., ``YTM_PROVIDER_TIMEOUT``).
    - ``port`` also honours a bare ``PORT`` variable, as most PaaS hosts inject it.
    - ``cors_origins`` accepts a comma-separated string or a JSON list.
    """

    model_config = SettingsConfigDict(env_prefix="YTM_", env_file=".env", extra="ignore")

    app_name: str = Field(default="YouTube API Service", description="Application display name")
    debug: bool = Field(default=False, description="Enable debug mode")
    service_name: str = Field(default="YouTube", description="Value of ``api.service`` in responses")
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        description="Allowed CORS origins",
    )
    provider_timeout: float = Field(
        default=30.0,
        description="Socket timeout in seconds for the video-info provider",
    )
    host: str = Field(default="127.0.0.1", description="Bind address when run as a script")
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("YTM_PORT", "PORT"),
        description="Bind port when run as a script",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache application settings.

    Notes
    -----
    - Cached with ``functools.lru_cache(maxsize=1)`` to provide a single settings instance
      across the process. Tests call ``get_settings.cache_clear()`` after changing the env.

    Returns
    -------
    Settings
        The application settings instance.
    """

    return Settings()
