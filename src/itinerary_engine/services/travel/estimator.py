"""Coordinate-based travel time and distance estimation.

Everything here is a pure function of the great-circle distance between two
activities. No routing service is consulted; road distance is approximated
with a fixed road factor and driving time with tiered average speeds.
"""

from __future__ import annotations

import math
from typing import Optional

from ...config import settings
from ...models.domain import Activity, RouteDescriptor, TravelComparison, TravelMode
from ..geospatial import coordinates_distance_km

WALKING_SPEED_KMH = 5.0
TRANSIT_SPEED_KMH = 25.0
TRANSIT_WAIT_MINUTES = 15
FLIGHT_SPEED_KMH = 800.0
FLIGHT_OVERHEAD_MINUTES = 120
FLIGHT_MIN_DISTANCE_KM = 100.0

# (upper bound km, average speed km/h); the last tier is open-ended
DRIVING_SPEED_TIERS: tuple[tuple[float, float], ...] = (
    (5.0, 30.0),
    (50.0, 60.0),
    (200.0, 80.0),
    (math.inf, 90.0),
)


def round_minutes(value: float) -> int:
    return int(math.floor(value + 0.5))


def driving_speed_kmh(distance_km: float) -> float:
    for upper_bound, speed in DRIVING_SPEED_TIERS:
        if distance_km < upper_bound:
            return speed
    return DRIVING_SPEED_TIERS[-1][1]


def driving_minutes(distance_km: float, minimum: int | None = None) -> int:
    minimum = settings.min_driving_minutes if minimum is None else minimum
    minutes = round_minutes(distance_km / driving_speed_kmh(distance_km) * 60)
    return max(minimum, minutes)


def walking_minutes(distance_km: float) -> int:
    return round_minutes(distance_km / WALKING_SPEED_KMH * 60)


def transit_minutes(distance_km: float) -> int:
    return round_minutes(distance_km / TRANSIT_SPEED_KMH * 60 + TRANSIT_WAIT_MINUTES)


def flight_minutes(distance_km: float) -> Optional[int]:
    """Flight time including airport procedures; ``None`` for short hops."""
    if distance_km <= FLIGHT_MIN_DISTANCE_KM:
        return None
    return round_minutes(distance_km / FLIGHT_SPEED_KMH * 60 + FLIGHT_OVERHEAD_MINUTES)


class GeoTravelEstimator:
    """Estimates distance and travel minutes between two activities."""

    def __init__(
        self,
        fallback_minutes: int | None = None,
        road_factor: float | None = None,
        min_driving_minutes: int | None = None,
    ) -> None:
        self.fallback_minutes = (
            fallback_minutes if fallback_minutes is not None else settings.fallback_travel_minutes
        )
        self.road_factor = road_factor if road_factor is not None else settings.road_factor
        self.min_driving_minutes = (
            min_driving_minutes if min_driving_minutes is not None else settings.min_driving_minutes
        )

    def distance_km(self, a: Activity, b: Activity) -> float:
        """Raw great-circle distance; 0 when either side has no coordinates."""
        distance = coordinates_distance_km(a.coordinates, b.coordinates)
        return distance if distance is not None else 0.0

    def road_distance_km(self, a: Activity, b: Activity) -> float:
        return self.distance_km(a, b) * self.road_factor

    def travel_minutes(
        self,
        a: Activity,
        b: Activity,
        mode: TravelMode | str = TravelMode.DRIVING,
        *,
        road_factor: bool = True,
    ) -> int:
        if a.id == b.id:
            return 0
        raw = coordinates_distance_km(a.coordinates, b.coordinates)
        if raw is None:
            return self.fallback_minutes

        mode = TravelMode(mode)
        if mode is TravelMode.DRIVING:
            distance = raw * self.road_factor if road_factor else raw
            return driving_minutes(distance, self.min_driving_minutes)
        if mode is TravelMode.WALKING:
            return walking_minutes(raw)
        if mode is TravelMode.TRANSIT:
            return transit_minutes(raw)
        flight = flight_minutes(raw)
        # Short hops have no flight option; fall back to the driving estimate.
        if flight is None:
            return driving_minutes(raw * self.road_factor, self.min_driving_minutes)
        return flight

    def comparison_minutes(self, a: Activity, b: Activity) -> float:
        """Unrounded driving minutes over the raw distance, without the minimum.

        Used to rank candidates, so short city legs keep their relative order
        instead of all collapsing onto the driving minimum.
        """
        if a.id == b.id:
            return 0.0
        raw = coordinates_distance_km(a.coordinates, b.coordinates)
        if raw is None:
            return float(self.fallback_minutes)
        return raw / driving_speed_kmh(raw) * 60

    def compare_travel_methods(self, a: Activity, b: Activity) -> Optional[TravelComparison]:
        """Side-by-side estimates for every travel mode between two located activities."""
        raw = coordinates_distance_km(a.coordinates, b.coordinates)
        if raw is None:
            return None

        flight = flight_minutes(raw)
        routes = {
            TravelMode.DRIVING.value: describe_route(a, b, TravelMode.DRIVING, raw),
            TravelMode.WALKING.value: describe_route(a, b, TravelMode.WALKING, raw),
            TravelMode.TRANSIT.value: describe_route(a, b, TravelMode.TRANSIT, raw),
        }
        if flight is not None:
            routes[TravelMode.FLIGHT.value] = describe_route(a, b, TravelMode.FLIGHT, raw)

        return TravelComparison(
            from_id=a.id,
            to_id=b.id,
            distance_km=round(raw, 1),
            driving_minutes=driving_minutes(raw * self.road_factor, self.min_driving_minutes),
            walking_minutes=walking_minutes(raw),
            transit_minutes=transit_minutes(raw),
            flight_minutes=flight,
            routes=routes,
        )


def describe_route(a: Activity, b: Activity, mode: TravelMode, distance_km: float) -> RouteDescriptor:
    origin = a.location or a.name
    target = b.location or b.name
    if mode is TravelMode.DRIVING:
        return RouteDescriptor(
            type="direct",
            description=f"Drive from {a.name} to {b.name}",
            steps=[
                f"Start: {origin}",
                "City traffic" if distance_km < 5 else "Cross-country drive",
                f"Arrive: {target}",
            ],
        )
    if mode is TravelMode.WALKING:
        if distance_km < 2:
            leg = "Short walk"
        elif distance_km < 10:
            leg = "Longer walk"
        else:
            leg = "Very long distance on foot"
        return RouteDescriptor(
            type="direct",
            description=f"Walk from {a.name} to {b.name}",
            steps=[f"Start: {origin}", leg, f"Arrive: {target}"],
        )
    if mode is TravelMode.TRANSIT:
        if distance_km < 5:
            leg = "Bus or tram"
        elif distance_km < 50:
            leg = "Bus, metro or suburban rail"
        else:
            leg = "Regional or long-distance rail"
        return RouteDescriptor(
            type="via_transit",
            description=f"Public transport from {a.name} to {b.name}",
            steps=[f"Start: {origin}", "Walk to the nearest stop", leg, f"Arrive: {target}"],
        )
    return RouteDescriptor(
        type="via_airport",
        description=f"Fly from {a.name} to {b.name}",
        steps=[
            f"Start: {origin}",
            "Travel to the airport (1h)",
            "Check-in and security (1h)",
            f"Flight time: {round_minutes(distance_km / FLIGHT_SPEED_KMH * 60)} min",
            "Deplaning and baggage (30 min)",
            f"Arrive: {target}",
        ],
    )
