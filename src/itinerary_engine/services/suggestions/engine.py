"""Improvement suggestions derived from day routes and scheduled times."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ...models.domain import (
    Activity,
    ConflictRecord,
    Impact,
    OptimizationSettings,
    Suggestion,
    SuggestionKind,
)
from ..routing.models import DayRoute
from ..scheduling.conflicts import minutes_of_day
from ..travel.estimator import GeoTravelEstimator


def reorder_suggestion(day: DayRoute) -> Optional[Suggestion]:
    if not day.improved:
        return None
    saved = day.original_minutes - day.optimized_minutes
    return Suggestion(
        kind=SuggestionKind.REORDER,
        title=f"Optimized order for {day.date}",
        description=f"Travel time reduced by {saved} minutes",
        affected_activity_ids=[activity.id for activity in day.optimized],
        impact=Impact.HIGH,
        date=day.date,
        time_saved_minutes=saved,
    )


def _conflict_lookup(conflicts: Iterable[ConflictRecord]) -> dict[tuple[str, str], int]:
    return {(record.first_id, record.second_id): record.overlap_minutes for record in conflicts}


def time_adjustment_suggestions(
    date: str,
    activities: Sequence[Activity],
    conflicts: Sequence[ConflictRecord],
    estimator: GeoTravelEstimator,
) -> list[Suggestion]:
    """Flag consecutive scheduled activities that cannot be reached in time.

    Uses the scheduled clock times, not the route order: activities are
    walked in start-time order and a pair is flagged when the first one's end
    plus the driving estimate to the second passes the second's start.
    """
    indexed = [(index, activity) for index, activity in enumerate(activities) if activity.is_scheduled]
    timed = [
        activity
        for _, activity in sorted(indexed, key=lambda item: (minutes_of_day(item[1].start_time), item[0]))
    ]
    overlaps = _conflict_lookup(conflicts)

    suggestions: list[Suggestion] = []
    for previous, following in zip(timed, timed[1:]):
        travel = estimator.travel_minutes(previous, following)
        arrival = minutes_of_day(previous.end_time) + travel
        if arrival <= minutes_of_day(following.start_time):
            continue
        description = f"{previous.name} should end earlier or {following.name} should start later"
        overlap = overlaps.get(tuple(sorted((previous.id, following.id))))
        if overlap:
            description += f" (the two overlap by {overlap} minutes)"
        else:
            description += f" ({travel} minutes of travel between them)"
        suggestions.append(
            Suggestion(
                kind=SuggestionKind.TIME_ADJUSTMENT,
                title="Time adjustment needed",
                description=description,
                affected_activity_ids=[previous.id, following.id],
                impact=Impact.MEDIUM,
                date=date,
            )
        )
    return suggestions


def split_day_suggestion(
    date: str,
    activities: Sequence[Activity],
    max_daily_hours: int,
) -> Optional[Suggestion]:
    planned = sum(activity.duration_minutes for activity in activities)
    if planned <= max_daily_hours * 60:
        return None
    return Suggestion(
        kind=SuggestionKind.SPLIT_DAY,
        title="Day is overbooked",
        description=f"{round(planned / 60)}h planned, at most {max_daily_hours}h recommended",
        affected_activity_ids=[activity.id for activity in activities],
        impact=Impact.HIGH,
        date=date,
    )


def suggest_for_day(
    day: DayRoute,
    settings: OptimizationSettings,
    estimator: GeoTravelEstimator,
) -> list[Suggestion]:
    suggestions: list[Suggestion] = []
    reorder = reorder_suggestion(day)
    if reorder:
        suggestions.append(reorder)
    suggestions.extend(time_adjustment_suggestions(day.date, day.original, day.conflicts, estimator))
    split = split_day_suggestion(day.date, day.original, settings.max_daily_hours)
    if split:
        suggestions.append(split)
    return suggestions


def suggest(
    days: Sequence[DayRoute],
    settings: OptimizationSettings,
    estimator: GeoTravelEstimator,
) -> list[Suggestion]:
    """Suggestions for every day, concatenated in date order."""
    suggestions: list[Suggestion] = []
    for day in sorted(days, key=lambda item: item.date):
        suggestions.extend(suggest_for_day(day, settings, estimator))
    return suggestions
