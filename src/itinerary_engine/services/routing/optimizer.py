"""Greedy nearest-neighbor ordering of a day's activities.

The optimizer is a heuristic. It builds the route one stop at a time, always
moving to the closest unvisited activity, and makes no attempt to find the
globally shortest tour. It can end with a long return leg that an exact
solver would avoid. Callers must not treat its output as optimal.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import Activity, DayBucket
from ..scheduling.conflicts import detect_conflicts
from ..travel.estimator import GeoTravelEstimator, round_minutes
from .models import DayRoute

logger = logging.getLogger(__name__)

MIN_ACTIVITIES_TO_OPTIMIZE = 3


def comparison_minutes(estimator: GeoTravelEstimator, a: Activity, b: Activity) -> float:
    """Travel metric used to rank candidates; only relative order matters."""
    return estimator.comparison_minutes(a, b)


def route_minutes(route: Sequence[Activity], estimator: GeoTravelEstimator) -> int:
    """Travel along the route, rounded once so short legs still count."""
    return round_minutes(
        sum(comparison_minutes(estimator, previous, current) for previous, current in zip(route, route[1:]))
    )


def optimize_day(
    bucket: DayBucket,
    estimator: GeoTravelEstimator,
    *,
    prioritize_proximity: bool = True,
) -> list[Activity]:
    """Return a permutation of the bucket's activities built by nearest neighbor.

    The route is seeded with the bucket's first activity (accommodation comes
    first after grouping). Ties go to the activity that appears earlier in the
    bucket. Buckets with fewer than three activities, or calls with
    ``prioritize_proximity`` disabled, return the bucket order unchanged.
    """
    activities = list(bucket.activities)
    if not prioritize_proximity or len(activities) < MIN_ACTIVITIES_TO_OPTIMIZE:
        return activities

    route = [activities[0]]
    remaining = list(enumerate(activities[1:], start=1))

    while remaining:
        current = route[-1]
        best_position = min(
            range(len(remaining)),
            key=lambda position: (
                comparison_minutes(estimator, current, remaining[position][1]),
                remaining[position][0],
            ),
        )
        _, chosen = remaining.pop(best_position)
        route.append(chosen)

    return route


def plan_day(
    bucket: DayBucket,
    estimator: GeoTravelEstimator,
    *,
    prioritize_proximity: bool = True,
) -> DayRoute:
    """Optimize one bucket and collect what the suggestion engine needs about it."""
    original = list(bucket.activities)
    optimized = optimize_day(bucket, estimator, prioritize_proximity=prioritize_proximity)
    day_route = DayRoute(
        date=bucket.date,
        original=original,
        optimized=optimized,
        original_minutes=route_minutes(original, estimator),
        optimized_minutes=route_minutes(optimized, estimator),
        conflicts=detect_conflicts(bucket),
    )
    logger.debug(
        f"Day {bucket.date}: {len(original)} activities, "
        f"travel {day_route.original_minutes} -> {day_route.optimized_minutes} min, "
        f"{len(day_route.conflicts)} conflicts"
    )
    return day_route
