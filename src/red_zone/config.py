"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from red_zone.domain.zones import DEFAULT_DURATION, DEFAULT_INTERVAL

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    profile_table: str = "redzone_user"
    zone_table: str = "redzone_zone"
    zone_floor_date: str = "2000-01-01"
    default_duration: int = DEFAULT_DURATION
    default_interval: int = DEFAULT_INTERVAL
    nearest_zone_search: bool = False
    zone_update_detection: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
