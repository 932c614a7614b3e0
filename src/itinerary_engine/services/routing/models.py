"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...models.domain import Activity, ConflictRecord


@dataclass(slots=True)
class DayRoute:
    """Stored and greedy orderings of one day with their travel sums."""

    date: str
    original: List[Activity]
    optimized: List[Activity]
    original_minutes: int
    optimized_minutes: int
    conflicts: List[ConflictRecord] = field(default_factory=list)

    @property
    def improved(self) -> bool:
        return self.optimized_minutes < self.original_minutes

    @property
    def time_saved(self) -> int:
        return self.original_minutes - self.optimized_minutes if self.improved else 0

    @property
    def applied(self) -> List[Activity]:
        """Order to keep for the day: the greedy route only when it is strictly shorter."""
        return self.optimized if self.improved else self.original
