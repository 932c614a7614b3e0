"""Day grouping and conflict detection."""

from .conflicts import count_conflicts, detect_conflicts
from .grouping import flatten, group_by_day

__all__ = ["group_by_day", "flatten", "detect_conflicts", "count_conflicts"]
