"""Planner entry points and caller-side caching."""

from .cache import LatestRequestGate, ReportCache, fingerprint
from .service import build_timeline, find_conflicts, optimize

__all__ = [
    "optimize",
    "build_timeline",
    "find_conflicts",
    "fingerprint",
    "ReportCache",
    "LatestRequestGate",
]
