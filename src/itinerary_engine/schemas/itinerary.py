"""Itinerary request/response schemas."""

from __future__ import annotations

from datetime import time
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import ActivityCategory, Impact, SuggestionKind


class CoordinatesModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class ActivityModel(BaseModel):
    id: str
    name: str
    location: str = ""
    coordinates: Optional[CoordinatesModel] = None
    category: ActivityCategory = ActivityCategory.OTHER
    start_date: str = Field(..., description="ISO calendar date (YYYY-MM-DD).")
    end_date: Optional[str] = Field(default=None, description="Inclusive end date; defaults to start_date.")
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    duration_minutes: int = Field(default=0, ge=0)
    priority: int = Field(default=3, ge=1, le=5)


class OptimizationSettingsModel(BaseModel):
    prioritize_proximity: bool = True
    minimize_backtracking: bool = True
    respect_opening_hours: bool = True
    add_travel_buffers: bool = True
    prefer_morning_start: bool = True
    max_daily_hours: Optional[int] = Field(default=None, ge=1, le=24)


class VehicleConfigModel(BaseModel):
    fuel_consumption_per_100km: Optional[float] = Field(default=None, ge=0)
    fuel_price_per_unit: Optional[float] = Field(default=None, ge=0)


class OptimizeRequest(BaseModel):
    activities: List[ActivityModel] = Field(default_factory=list)
    settings: Optional[OptimizationSettingsModel] = None
    vehicle_config: Optional[VehicleConfigModel] = None


class TimelineRequest(BaseModel):
    activities: List[ActivityModel] = Field(default_factory=list)
    vehicle_config: Optional[VehicleConfigModel] = None


class TravelCompareRequest(BaseModel):
    origin: ActivityModel
    destination: ActivityModel


class SuggestionModel(BaseModel):
    kind: SuggestionKind
    title: str
    description: str
    affected_activity_ids: List[str]
    impact: Impact
    date: str
    time_saved_minutes: Optional[int] = None


class ImprovementsModel(BaseModel):
    total_travel_time_reduced: int
    conflicts_resolved: int
    efficiency_gain: float


class ConflictModel(BaseModel):
    date: str
    first_id: str
    second_id: str
    overlap_minutes: int


class DayMetricsModel(BaseModel):
    date: str
    distance_km: float
    travel_minutes: int
    travel_cost: float
    activity_minutes: int
    activity_count: int


class TripMetricsModel(BaseModel):
    days: List[DayMetricsModel]
    distance_km: float
    travel_minutes: int
    travel_cost: float
    activity_minutes: int
    day_count: int


class OptimizationReportModel(BaseModel):
    original_order: List[str]
    optimized_order: List[str]
    improvements: ImprovementsModel
    suggestions: List[SuggestionModel]
    conflicts: List[ConflictModel]
    metrics: Optional[TripMetricsModel] = None


class TimelineDayModel(BaseModel):
    date: str
    activities: List[ActivityModel]
    metrics: DayMetricsModel


class TimelineModel(BaseModel):
    days: List[TimelineDayModel]
    totals: TripMetricsModel


class RouteDescriptorModel(BaseModel):
    type: str
    description: str
    steps: List[str]


class TravelComparisonModel(BaseModel):
    from_id: str
    to_id: str
    distance_km: float
    driving_minutes: int
    walking_minutes: int
    transit_minutes: int
    flight_minutes: Optional[int] = None
    routes: Dict[str, RouteDescriptorModel]
