from __future__ import annotations

from typing import Sequence

from invigilation.models import Assignment, Faculty, FacultyOverview


def coverage_key(day: int, slot: int) -> str:
    return f"d{day}-s{slot}"


def build_overview(
    assignments: Sequence[Assignment], faculty: Sequence[Faculty]
) -> list[FacultyOverview]:
    """
    Per-faculty duty totals derived from the final assignment list. Every
    roster member appears, zero-filled if unassigned; sorted by facultyId.
    """
    rows: dict[str, FacultyOverview] = {
        f.faculty_id: FacultyOverview(
            faculty_id=f.faculty_id, name=f.name, designation=f.designation
        )
        for f in faculty
    }
    for a in assignments:
        row = rows.setdefault(a.faculty_id, FacultyOverview(faculty_id=a.faculty_id))
        setattr(row, a.role, getattr(row, a.role) + 1)
        row.total += 1
        if a.role in ("reliever", "squad"):
            row.coverage[coverage_key(a.day, a.slot)] = list(a.rooms or ())
    return [rows[k] for k in sorted(rows)]


def assignment_stats(
    assignments: Sequence[Assignment], faculty: Sequence[Faculty]
) -> dict[str, dict[str, int]]:
    """Compact {facultyId: {role: n, ..., total: n}} view of the overview."""
    return {
        o.faculty_id: {
            "regular": o.regular,
            "reliever": o.reliever,
            "squad": o.squad,
            "buffer": o.buffer,
            "total": o.total,
        }
        for o in build_overview(assignments, faculty)
    }
