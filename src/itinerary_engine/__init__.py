"""Itinerary scheduling and travel-analysis engine."""

from .services.planner.service import build_timeline, find_conflicts, optimize

__all__ = ["optimize", "build_timeline", "find_conflicts"]
