from __future__ import annotations

from .engine import allocate, assign_duties
from .overview import assignment_stats, build_overview
from .rooms import chunk_rooms
from .selection import select_faculty
from .state import AllocationState, initialize_duty_counts

__all__ = [
    "allocate",
    "assign_duties",
    "assignment_stats",
    "build_overview",
    "chunk_rooms",
    "select_faculty",
    "AllocationState",
    "initialize_duty_counts",
]
