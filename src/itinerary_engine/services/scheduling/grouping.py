"""Partition a flat activity list into calendar-day buckets."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ...models.domain import Activity, DayBucket

logger = logging.getLogger(__name__)


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def stay_dates(activity: Activity) -> list[str]:
    """Dates an activity occupies in the itinerary.

    Multi-day accommodation expands to every date of its inclusive range.
    Anything else, including stays with unparseable or reversed dates, stays
    on its start date.
    """
    if not (activity.is_accommodation and activity.is_multi_day):
        return [activity.start_date]

    start = _parse_date(activity.start_date)
    end = _parse_date(activity.last_date)
    if start is None or end is None:
        logger.debug(f"Stay {activity.id} has malformed dates, keeping it on '{activity.start_date}'")
        return [activity.start_date]
    if end < start:
        return [activity.start_date]

    return [(start + timedelta(days=offset)).isoformat() for offset in range((end - start).days + 1)]


def _bucket_sort_key(activity: Activity) -> tuple[int, str]:
    return (0 if activity.is_accommodation else 1, activity.name.casefold())


def group_by_day(activities: Iterable[Activity]) -> list[DayBucket]:
    """Group activities into buckets sorted by date.

    Within a bucket accommodation comes first, then activities by name. An
    activity is never added twice to the same bucket, so regrouping an
    already flattened itinerary yields the same buckets.
    """
    grouped: dict[str, list[Activity]] = {}
    seen: dict[str, set[str]] = {}

    for activity in activities:
        for day in stay_dates(activity):
            members = grouped.setdefault(day, [])
            member_ids = seen.setdefault(day, set())
            if activity.is_accommodation and activity.id in member_ids:
                continue
            members.append(activity)
            member_ids.add(activity.id)

    return [
        DayBucket(date=day, activities=sorted(grouped[day], key=_bucket_sort_key))
        for day in sorted(grouped)
    ]


def flatten(buckets: Sequence[DayBucket]) -> list[Activity]:
    """Distinct activities in bucket order; stays spanning days appear once."""
    seen: set[str] = set()
    ordered: list[Activity] = []
    for bucket in buckets:
        for activity in bucket.activities:
            if activity.id in seen:
                continue
            seen.add(activity.id)
            ordered.append(activity)
    return ordered
