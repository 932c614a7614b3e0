"""Temporal conflict detection within a day."""

from __future__ import annotations

from datetime import time
from itertools import combinations
from typing import Sequence

from ...models.domain import Activity, ConflictRecord, DayBucket


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def overlap_minutes(first: Activity, second: Activity) -> int:
    """Length of the intersection of two half-open ``[start, end)`` windows."""
    start = max(minutes_of_day(first.start_time), minutes_of_day(second.start_time))
    end = min(minutes_of_day(first.end_time), minutes_of_day(second.end_time))
    return max(0, end - start)


def detect_conflicts(bucket: DayBucket) -> list[ConflictRecord]:
    """Find every overlapping pair of scheduled activities in a bucket.

    Unscheduled activities (missing a start or end time) and stays spanning
    several days are ignored. Records carry their id pair in sorted order and
    are returned sorted, so the result does not depend on bucket order.
    """
    scheduled = [activity for activity in bucket.activities if activity.is_scheduled]
    records: list[ConflictRecord] = []
    for first, second in combinations(scheduled, 2):
        if first.id == second.id:
            continue
        overlap = overlap_minutes(first, second)
        if overlap <= 0:
            continue
        low, high = sorted((first.id, second.id))
        records.append(
            ConflictRecord(date=bucket.date, first_id=low, second_id=high, overlap_minutes=overlap)
        )
    records.sort(key=lambda record: (record.first_id, record.second_id))
    return records


def count_conflicts(buckets: Sequence[DayBucket]) -> int:
    return sum(len(detect_conflicts(bucket)) for bucket in buckets)
