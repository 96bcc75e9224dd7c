# invigilation/allocation/state.py
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from invigilation.models import (
    Assignment,
    ExamStructure,
    Faculty,
    FacultyDutyCount,
    UnavailableFaculty,
    sort_faculty,
)


def initialize_duty_counts(
    faculty: Iterable[Faculty], structure: ExamStructure
) -> dict[str, FacultyDutyCount]:
    """
    Zeroed counters with per-role targets looked up from the designation maps
    (0 when a designation is missing). Keyed and ordered by facultyId.
    """
    counts: dict[str, FacultyDutyCount] = {}
    for f in sorted(faculty, key=lambda m: m.faculty_id):
        counts[f.faculty_id] = FacultyDutyCount(
            faculty_id=f.faculty_id,
            regular_target=structure.target_for(f.designation, "regular"),
            reliever_target=structure.target_for(f.designation, "reliever"),
            squad_target=structure.target_for(f.designation, "squad"),
        )
    return counts


def build_unavailability_map(
    unavailability: Iterable[UnavailableFaculty],
) -> dict[str, set[str]]:
    """ISO date -> set of facultyIds unavailable that day."""
    out: dict[str, set[str]] = defaultdict(set)
    for u in unavailability:
        out[u.date].add(u.faculty_id)
    return dict(out)


def unavailable_day_counts(
    unavailability: Iterable[UnavailableFaculty],
) -> dict[str, int]:
    """
    facultyId -> number of distinct unavailable dates. Duplicate entries for
    the same date count once.
    """
    dates: dict[str, set[str]] = defaultdict(set)
    for u in unavailability:
        dates[u.faculty_id].add(u.date)
    return {fid: len(ds) for fid, ds in dates.items()}


@dataclass
class AllocationState:
    """
    Everything a single allocation run mutates. Created per call to
    `allocate` and dropped afterwards.
    """

    structure: ExamStructure
    faculty: list[Faculty]
    counts: dict[str, FacultyDutyCount]
    unavailability_map: dict[str, set[str]]
    unavailable_days: dict[str, int]
    assignments: list[Assignment] = field(default_factory=list)
    _regular_index: dict[tuple[str, int], set[int]] = field(
        default_factory=lambda: defaultdict(set)
    )

    @classmethod
    def create(
        cls,
        faculty: Sequence[Faculty],
        structure: ExamStructure,
        unavailability: Sequence[UnavailableFaculty],
    ) -> "AllocationState":
        return cls(
            structure=structure,
            faculty=sort_faculty(faculty),
            counts=initialize_duty_counts(faculty, structure),
            unavailability_map=build_unavailability_map(unavailability),
            unavailable_days=unavailable_day_counts(unavailability),
        )

    def unavailable_on(self, iso_date: str) -> set[str]:
        return self.unavailability_map.get(iso_date, set())

    def available_for(self, iso_date: str) -> list[Faculty]:
        blocked = self.unavailable_on(iso_date)
        return [f for f in self.faculty if f.faculty_id not in blocked]

    def regular_slots_on(self, faculty_id: str, day: int) -> set[int]:
        return self._regular_index.get((faculty_id, day), set())

    def record(self, assignment: Assignment) -> None:
        """Append the assignment and bump the chosen faculty's counter."""
        self.assignments.append(assignment)
        self.counts[assignment.faculty_id].increment(assignment.role)
        if assignment.role == "regular":
            self._regular_index[(assignment.faculty_id, assignment.day)].add(
                assignment.slot
            )
