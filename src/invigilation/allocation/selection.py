from __future__ import annotations

from typing import Mapping, Sequence

from invigilation.models import Faculty, FacultyDutyCount, Role


def selection_key(
    member: Faculty,
    role: Role,
    counts: Mapping[str, FacultyDutyCount],
    unavailable_days: Mapping[str, int],
) -> tuple:
    """
    Ascending sort key; the smallest key wins.

    Target roles: largest role deficit, then most unavailable days, then
    fewest target-based duties, then facultyId.
    Buffer: fewest buffer duties, then fewest target-based duties, then
    most unavailable days, then facultyId.
    """
    c = counts[member.faculty_id]
    away = unavailable_days.get(member.faculty_id, 0)
    if role == "buffer":
        return (c.buffer, c.total_target_based, -away, member.faculty_id)
    return (-c.deficit(role), -away, c.total_target_based, member.faculty_id)


def select_faculty(
    eligible: Sequence[Faculty],
    role: Role,
    counts: Mapping[str, FacultyDutyCount],
    unavailable_days: Mapping[str, int],
) -> Faculty:
    """Pick exactly one member of a non-empty eligible set. Deterministic."""
    if not eligible:
        raise ValueError("select_faculty requires at least one eligible faculty.")
    return min(
        eligible, key=lambda f: selection_key(f, role, counts, unavailable_days)
    )
