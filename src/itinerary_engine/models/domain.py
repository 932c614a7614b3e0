"""Domain models for activities, day buckets and optimization results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import List, Optional


class ActivityCategory(str, Enum):
    MUSEUM = "museum"
    RESTAURANT = "restaurant"
    ATTRACTION = "attraction"
    ACCOMMODATION = "accommodation"
    TRANSPORT = "transport"
    NATURE = "nature"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    CULTURAL = "cultural"
    SPORTS = "sports"
    OTHER = "other"


class TravelMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    TRANSIT = "transit"
    FLIGHT = "flight"


class SuggestionKind(str, Enum):
    REORDER = "reorder"
    TIME_ADJUSTMENT = "time_adjustment"
    SPLIT_DAY = "split_day"


class Impact(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(slots=True, frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(slots=True, frozen=True)
class Activity:
    """A geolocated, time-boxed item of a trip.

    ``end_date`` defaults to ``start_date``. Times are optional; an activity
    without both times is unscheduled and skipped by conflict checks.
    """

    id: str
    name: str
    start_date: str
    end_date: Optional[str] = None
    location: str = ""
    coordinates: Optional[Coordinates] = None
    category: ActivityCategory = ActivityCategory.OTHER
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    duration_minutes: int = 0
    priority: int = 3

    @property
    def last_date(self) -> str:
        return self.end_date or self.start_date

    @property
    def is_accommodation(self) -> bool:
        return self.category == ActivityCategory.ACCOMMODATION

    @property
    def is_multi_day(self) -> bool:
        return self.last_date != self.start_date

    @property
    def is_scheduled(self) -> bool:
        """True when the activity has both times and is not a stay expanded over several days."""
        if self.is_accommodation and self.is_multi_day:
            return False
        return self.start_time is not None and self.end_time is not None


@dataclass(slots=True)
class DayBucket:
    date: str
    activities: List[Activity] = field(default_factory=list)

    def ids(self) -> list[str]:
        return [activity.id for activity in self.activities]


@dataclass(slots=True, frozen=True)
class ConflictRecord:
    date: str
    first_id: str
    second_id: str
    overlap_minutes: int


@dataclass(slots=True)
class Suggestion:
    kind: SuggestionKind
    title: str
    description: str
    affected_activity_ids: List[str]
    impact: Impact
    date: str
    time_saved_minutes: Optional[int] = None


@dataclass(slots=True)
class Improvements:
    total_travel_time_reduced: int = 0
    conflicts_resolved: int = 0
    efficiency_gain: float = 0.0


@dataclass(slots=True)
class OptimizationReport:
    original_order: List[Activity]
    optimized_order: List[Activity]
    improvements: Improvements
    suggestions: List[Suggestion]
    conflicts: List[ConflictRecord] = field(default_factory=list)
    metrics: Optional[TripMetrics] = None


@dataclass(slots=True)
class OptimizationSettings:
    """Trip-level optimization toggles.

    Only ``prioritize_proximity`` and ``max_daily_hours`` influence the
    computation; the remaining flags are carried for callers.
    """

    prioritize_proximity: bool = True
    minimize_backtracking: bool = True
    respect_opening_hours: bool = True
    add_travel_buffers: bool = True
    prefer_morning_start: bool = True
    max_daily_hours: int = 10


@dataclass(slots=True)
class VehicleConfig:
    fuel_consumption_per_100km: float = 9.0
    fuel_price_per_unit: float = 1.65

    @property
    def cost_per_100km(self) -> float:
        return self.fuel_consumption_per_100km * self.fuel_price_per_unit


@dataclass(slots=True)
class DayMetrics:
    date: str
    distance_km: float = 0.0
    travel_minutes: int = 0
    travel_cost: float = 0.0
    activity_minutes: int = 0
    activity_count: int = 0


@dataclass(slots=True)
class TripMetrics:
    days: List[DayMetrics] = field(default_factory=list)
    distance_km: float = 0.0
    travel_minutes: int = 0
    travel_cost: float = 0.0
    activity_minutes: int = 0
    day_count: int = 0


@dataclass(slots=True)
class TimelineDay:
    bucket: DayBucket
    metrics: DayMetrics


@dataclass(slots=True)
class Timeline:
    days: List[TimelineDay]
    totals: TripMetrics


@dataclass(slots=True)
class RouteDescriptor:
    type: str
    description: str
    steps: List[str] = field(default_factory=list)


@dataclass(slots=True)
class TravelComparison:
    from_id: str
    to_id: str
    distance_km: float
    driving_minutes: int
    walking_minutes: int
    transit_minutes: int
    flight_minutes: Optional[int]
    routes: dict[str, RouteDescriptor]
