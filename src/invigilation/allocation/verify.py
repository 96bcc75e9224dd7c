from __future__ import annotations

from collections import defaultdict
from typing import Mapping, Sequence

from invigilation.models import AllocationWarning, Assignment, ExamStructure


def find_unavailability_breaches(
    assignments: Sequence[Assignment],
    structure: ExamStructure,
    unavailability_map: Mapping[str, set[str]],
) -> list[AllocationWarning]:
    """
    Assignments that land on a date their faculty member marked unavailable.
    Any hit here means the eligibility filter let someone through it should not.
    """
    dates = {(s.day, s.slot): s.iso_date for s in structure.duty_slots}
    out: list[AllocationWarning] = []
    for a in assignments:
        iso = dates.get((a.day, a.slot))
        if iso is None or a.faculty_id not in unavailability_map.get(iso, set()):
            continue
        out.append(
            AllocationWarning(
                kind="CRITICAL",
                message=(
                    f"CRITICAL: Faculty {a.faculty_id} assigned {a.role} on "
                    f"Day {a.day + 1} Slot {a.slot + 1} ({iso}) but is unavailable "
                    "that date"
                ),
                day=a.day,
                slot=a.slot,
                role=a.role,
                faculty_id=a.faculty_id,
            )
        )
    return out


def find_consecutive_regulars(
    assignments: Sequence[Assignment],
) -> list[AllocationWarning]:
    """Pairs of regular duties in adjacent slots on the same day, per faculty."""
    by_faculty_day: dict[tuple[str, int], list[int]] = defaultdict(list)
    for a in assignments:
        if a.role == "regular":
            by_faculty_day[(a.faculty_id, a.day)].append(a.slot)

    out: list[AllocationWarning] = []
    for (fid, day), slots in sorted(by_faculty_day.items()):
        slots.sort()
        for prev, nxt in zip(slots, slots[1:]):
            if nxt - prev != 1:
                continue
            out.append(
                AllocationWarning(
                    kind="CONSECUTIVE_REGULAR",
                    message=(
                        f"Faculty {fid} has consecutive regular duties in slots "
                        f"{prev + 1} and {nxt + 1} on day {day + 1}"
                    ),
                    day=day,
                    slot=nxt,
                    role="regular",
                    faculty_id=fid,
                )
            )
    return out


def verify_assignments(
    assignments: Sequence[Assignment],
    structure: ExamStructure,
    unavailability_map: Mapping[str, set[str]],
) -> list[AllocationWarning]:
    return find_unavailability_breaches(
        assignments, structure, unavailability_map
    ) + find_consecutive_regulars(assignments)
