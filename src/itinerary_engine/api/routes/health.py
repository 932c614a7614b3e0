"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/config", status_code=status.HTTP_200_OK)
def health_config() -> dict:
    """Report the estimation constants the engine is running with."""
    return {
        "fallback_travel_minutes": settings.fallback_travel_minutes,
        "road_factor": settings.road_factor,
        "min_driving_minutes": settings.min_driving_minutes,
        "default_max_daily_hours": settings.default_max_daily_hours,
        "default_fuel_consumption_per_100km": settings.default_fuel_consumption_per_100km,
        "default_fuel_price_per_unit": settings.default_fuel_price_per_unit,
    }
