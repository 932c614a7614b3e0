"""Caller-side memoization and request scheduling for planner runs.

The planner itself keeps no state. Interactive callers that re-run an
optimization on every settings toggle can put these helpers in front of it:
``ReportCache`` memoizes by input fingerprint and ``LatestRequestGate`` keeps
only the result of the most recent request.
"""

from __future__ import annotations

import hashlib
import json
import threading
from collections import OrderedDict
from dataclasses import asdict
from typing import Callable, Generic, Optional, Sequence, TypeVar

from ...config import settings as app_settings
from ...models.domain import Activity, OptimizationSettings, VehicleConfig

T = TypeVar("T")


def fingerprint(
    activities: Sequence[Activity],
    settings: Optional[OptimizationSettings] = None,
    vehicle_config: Optional[VehicleConfig] = None,
) -> str:
    """Stable key for a planner input snapshot; activity order is significant."""
    payload = {
        "activities": [asdict(activity) for activity in activities],
        "settings": asdict(settings) if settings else None,
        "vehicle": asdict(vehicle_config) if vehicle_config else None,
    }
    encoded = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


class ReportCache(Generic[T]):
    """Thread-safe LRU cache of planner results keyed by fingerprint."""

    def __init__(self, max_size: int | None = None) -> None:
        self.max_size = app_settings.report_cache_size if max_size is None else max_size
        self._entries: OrderedDict[str, T] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                return self._entries[key]
            self.misses += 1

        result = compute()
        if self.max_size <= 0:
            return result

        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


class LatestRequestGate(Generic[T]):
    """Keeps the result of the newest request only.

    Each request takes a token from :meth:`begin`. A computation that finishes
    after a newer request has begun is discarded by :meth:`publish` instead of
    being aborted mid-run.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest = 0
        self._result: Optional[T] = None

    def begin(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest

    def publish(self, token: int, result: T) -> bool:
        with self._lock:
            if token != self._latest:
                return False
            self._result = result
            return True

    @property
    def result(self) -> Optional[T]:
        with self._lock:
            return self._result
