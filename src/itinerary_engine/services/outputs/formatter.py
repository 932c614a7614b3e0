"""Conversions between API schemas and planner domain objects."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import (
    Activity,
    Coordinates,
    DayMetrics,
    OptimizationReport,
    OptimizationSettings,
    Timeline,
    TravelComparison,
    TripMetrics,
    VehicleConfig,
)
from ...schemas.itinerary import (
    ActivityModel,
    ConflictModel,
    CoordinatesModel,
    DayMetricsModel,
    ImprovementsModel,
    OptimizationReportModel,
    OptimizationSettingsModel,
    RouteDescriptorModel,
    SuggestionModel,
    TimelineDayModel,
    TimelineModel,
    TravelComparisonModel,
    TripMetricsModel,
    VehicleConfigModel,
)


def activity_from_model(model: ActivityModel) -> Activity:
    coordinates = None
    if model.coordinates is not None:
        coordinates = Coordinates(lat=model.coordinates.lat, lng=model.coordinates.lng)
    return Activity(
        id=model.id,
        name=model.name,
        start_date=model.start_date,
        end_date=model.end_date,
        location=model.location,
        coordinates=coordinates,
        category=model.category,
        start_time=model.start_time,
        end_time=model.end_time,
        duration_minutes=model.duration_minutes,
        priority=model.priority,
    )


def activities_from_models(models: Sequence[ActivityModel]) -> list[Activity]:
    seen: set[str] = set()
    activities: list[Activity] = []
    for model in models:
        if model.id in seen:
            raise ValueError(f"Duplicate activity id '{model.id}'.")
        seen.add(model.id)
        activities.append(activity_from_model(model))
    return activities


def activity_to_model(activity: Activity) -> ActivityModel:
    coordinates = None
    if activity.coordinates is not None:
        coordinates = CoordinatesModel(lat=activity.coordinates.lat, lng=activity.coordinates.lng)
    return ActivityModel(
        id=activity.id,
        name=activity.name,
        location=activity.location,
        coordinates=coordinates,
        category=activity.category,
        start_date=activity.start_date,
        end_date=activity.end_date,
        start_time=activity.start_time,
        end_time=activity.end_time,
        duration_minutes=activity.duration_minutes,
        priority=activity.priority,
    )


def settings_from_model(model: Optional[OptimizationSettingsModel]) -> OptimizationSettings:
    base = OptimizationSettings(max_daily_hours=settings.default_max_daily_hours)
    if model is None:
        return base
    return OptimizationSettings(
        prioritize_proximity=model.prioritize_proximity,
        minimize_backtracking=model.minimize_backtracking,
        respect_opening_hours=model.respect_opening_hours,
        add_travel_buffers=model.add_travel_buffers,
        prefer_morning_start=model.prefer_morning_start,
        max_daily_hours=model.max_daily_hours
        if model.max_daily_hours is not None
        else base.max_daily_hours,
    )


def vehicle_from_model(model: Optional[VehicleConfigModel]) -> Optional[VehicleConfig]:
    if model is None:
        return None
    return VehicleConfig(
        fuel_consumption_per_100km=model.fuel_consumption_per_100km
        if model.fuel_consumption_per_100km is not None
        else settings.default_fuel_consumption_per_100km,
        fuel_price_per_unit=model.fuel_price_per_unit
        if model.fuel_price_per_unit is not None
        else settings.default_fuel_price_per_unit,
    )


def _day_metrics_model(metrics: DayMetrics) -> DayMetricsModel:
    return DayMetricsModel(
        date=metrics.date,
        distance_km=round(metrics.distance_km, 2),
        travel_minutes=metrics.travel_minutes,
        travel_cost=round(metrics.travel_cost, 2),
        activity_minutes=metrics.activity_minutes,
        activity_count=metrics.activity_count,
    )


def trip_metrics_to_model(metrics: TripMetrics) -> TripMetricsModel:
    return TripMetricsModel(
        days=[_day_metrics_model(day) for day in metrics.days],
        distance_km=round(metrics.distance_km, 2),
        travel_minutes=metrics.travel_minutes,
        travel_cost=round(metrics.travel_cost, 2),
        activity_minutes=metrics.activity_minutes,
        day_count=metrics.day_count,
    )


def report_to_model(report: OptimizationReport) -> OptimizationReportModel:
    return OptimizationReportModel(
        original_order=[activity.id for activity in report.original_order],
        optimized_order=[activity.id for activity in report.optimized_order],
        improvements=ImprovementsModel(**asdict(report.improvements)),
        suggestions=[SuggestionModel(**asdict(suggestion)) for suggestion in report.suggestions],
        conflicts=[ConflictModel(**asdict(record)) for record in report.conflicts],
        metrics=trip_metrics_to_model(report.metrics) if report.metrics else None,
    )


def timeline_to_model(timeline: Timeline) -> TimelineModel:
    return TimelineModel(
        days=[
            TimelineDayModel(
                date=day.bucket.date,
                activities=[activity_to_model(activity) for activity in day.bucket.activities],
                metrics=_day_metrics_model(day.metrics),
            )
            for day in timeline.days
        ],
        totals=trip_metrics_to_model(timeline.totals),
    )


def comparison_to_model(comparison: TravelComparison) -> TravelComparisonModel:
    return TravelComparisonModel(
        from_id=comparison.from_id,
        to_id=comparison.to_id,
        distance_km=comparison.distance_km,
        driving_minutes=comparison.driving_minutes,
        walking_minutes=comparison.walking_minutes,
        transit_minutes=comparison.transit_minutes,
        flight_minutes=comparison.flight_minutes,
        routes={
            mode: RouteDescriptorModel(**asdict(route)) for mode, route in comparison.routes.items()
        },
    )
