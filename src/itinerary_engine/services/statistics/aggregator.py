"""Per-day and trip-wide travel statistics."""

from __future__ import annotations

from typing import Optional, Sequence

from ...config import settings
from ...models.domain import Activity, DayBucket, DayMetrics, TripMetrics, VehicleConfig
from ..travel.estimator import GeoTravelEstimator


def default_vehicle() -> VehicleConfig:
    return VehicleConfig(
        fuel_consumption_per_100km=settings.default_fuel_consumption_per_100km,
        fuel_price_per_unit=settings.default_fuel_price_per_unit,
    )


def travel_cost(distance_km: float, vehicle: VehicleConfig) -> float:
    return (distance_km / 100) * vehicle.fuel_consumption_per_100km * vehicle.fuel_price_per_unit


def day_metrics(
    bucket: DayBucket,
    estimator: GeoTravelEstimator,
    vehicle: VehicleConfig,
    previous_stop: Optional[Activity] = None,
) -> DayMetrics:
    """Travel totals for one bucket.

    ``previous_stop`` is the last activity of the preceding bucket; the leg
    from it to this bucket's first activity is charged to this day.
    """
    legs: list[tuple[Activity, Activity]] = list(zip(bucket.activities, bucket.activities[1:]))
    if previous_stop is not None and bucket.activities:
        legs.insert(0, (previous_stop, bucket.activities[0]))

    distance = 0.0
    minutes = 0
    for origin, target in legs:
        distance += estimator.road_distance_km(origin, target)
        minutes += estimator.travel_minutes(origin, target)

    return DayMetrics(
        date=bucket.date,
        distance_km=distance,
        travel_minutes=minutes,
        travel_cost=travel_cost(distance, vehicle),
        activity_minutes=sum(activity.duration_minutes for activity in bucket.activities),
        activity_count=len(bucket.activities),
    )


def aggregate(
    buckets: Sequence[DayBucket],
    estimator: GeoTravelEstimator,
    vehicle_config: Optional[VehicleConfig] = None,
) -> TripMetrics:
    vehicle = vehicle_config or default_vehicle()
    days: list[DayMetrics] = []
    previous_stop: Optional[Activity] = None
    for bucket in buckets:
        days.append(day_metrics(bucket, estimator, vehicle, previous_stop))
        if bucket.activities:
            previous_stop = bucket.activities[-1]
    return summarize(days)


def summarize(days: Sequence[DayMetrics]) -> TripMetrics:
    return TripMetrics(
        days=list(days),
        distance_km=sum(day.distance_km for day in days),
        travel_minutes=sum(day.travel_minutes for day in days),
        travel_cost=sum(day.travel_cost for day in days),
        activity_minutes=sum(day.activity_minutes for day in days),
        day_count=len(days),
    )
