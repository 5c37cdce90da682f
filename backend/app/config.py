"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./trip_planner.db"

    # Cache
    redis_url: str | None = None

    # External APIs
    google_maps_api_key: str = ""
    geocode_base_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    directions_base_url: str = "https://maps.googleapis.com/maps/api/directions/json"

    # Timeouts (seconds)
    http_timeout_s: float = 4.0

    # Delay between calls in the historical geocoding backfill (milliseconds)
    backfill_delay_ms: int = 100

    # Recompute the predecessor's outbound edge when an activity is deleted
    recompute_on_delete: bool = False

    # Activity defaults
    default_activity_duration_min: int = 60

    # Rate limiting (requests per minute)
    crud_ops_per_min: int = 60
    recompute_ops_per_min: int = 10


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
