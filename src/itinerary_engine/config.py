"""Application configuration and settings management."""

from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ITINERARY_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Itinerary Scheduling Engine"
    api_prefix: str = "/api"
    fallback_travel_minutes: int = Field(
        default=30,
        ge=0,
        description="Travel time assumed between activities when coordinates are missing.",
    )
    road_factor: float = Field(
        default=1.4,
        ge=1.0,
        description="Multiplier applied to great-circle distance to approximate road distance.",
    )
    min_driving_minutes: int = Field(default=10, ge=0)
    default_fuel_consumption_per_100km: float = Field(default=9.0, ge=0.0)
    default_fuel_price_per_unit: float = Field(default=1.65, ge=0.0)
    default_max_daily_hours: int = Field(default=10, ge=1, le=24)
    parallel_day_threshold: int = Field(
        default=14,
        ge=1,
        description="Trips with at least this many days are processed on a worker pool.",
    )
    max_parallel_days: int = Field(default=4, ge=1)
    report_cache_size: int = Field(default=32, ge=0)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
