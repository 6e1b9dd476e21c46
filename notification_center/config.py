"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notification_center.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Shared secret used to verify bearer tokens issued by the identity service",
        min_length=1,
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="Signing algorithm expected on bearer tokens",
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to stamp and render notification timestamps",
    )
    default_page_size: int = Field(
        default=20,
        description="Number of notifications returned when no limit is provided",
        gt=0,
    )
    max_page_size: int = Field(
        default=100,
        description="Upper bound accepted for the ``limit`` query parameter",
        gt=0,
    )
    settings_update_retries: int = Field(
        default=3,
        description="Attempts made when a settings update loses an optimistic lock",
        gt=0,
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: str = Field(
        default="",
        description="Comma separated origins allowed to call the API from a browser",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Return ``cors_origins`` split into individual origins."""

        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
