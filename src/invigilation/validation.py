from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from invigilation.models import Assignment, DutySlot, Faculty


@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _same_slot(a: Assignment, b: Assignment) -> bool:
    return a.day == b.day and a.slot == b.slot


def _name_of(faculty: Sequence[Faculty], faculty_id: str) -> str:
    member = next((f for f in faculty if f.faculty_id == faculty_id), None)
    return member.name if member is not None and member.name else faculty_id


def _room_errors(
    new: Assignment,
    others: Sequence[Assignment],
    slot: DutySlot,
    faculty: Sequence[Faculty],
) -> list[str]:
    if new.role != "regular" or not new.room_number:
        return []
    errors: list[str] = []
    taken = next(
        (
            a
            for a in others
            if _same_slot(a, new)
            and a.role == "regular"
            and a.room_number == new.room_number
        ),
        None,
    )
    if taken is not None:
        errors.append(
            f"Room {new.room_number} is already assigned to "
            f"{_name_of(faculty, taken.faculty_id)}"
        )
    if new.room_number not in slot.rooms:
        errors.append(f"Room {new.room_number} is not available in this slot")
    return errors


def validate_assignment_add(
    new: Assignment,
    assignments: Sequence[Assignment],
    slot: DutySlot,
    faculty: Sequence[Faculty],
) -> ValidationResult:
    """Check a manually added duty against the current assignment list."""
    errors: list[str] = []
    warnings: list[str] = []

    existing = next(
        (
            a
            for a in assignments
            if _same_slot(a, new) and a.faculty_id == new.faculty_id
        ),
        None,
    )
    if existing is not None:
        errors.append(
            f"Faculty is already assigned as {existing.role.upper()} in this slot"
        )

    errors.extend(_room_errors(new, assignments, slot, faculty))

    current = sum(1 for a in assignments if _same_slot(a, new) and a.role == new.role)
    needed = slot.needed(new.role)
    if current >= needed:
        warnings.append(
            "Adding this duty will exceed slot capacity "
            f"({current + 1}/{needed} {new.role})"
        )

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def validate_assignment_update(
    old: Assignment,
    new: Assignment,
    assignments: Sequence[Assignment],
    slot: DutySlot,
    faculty: Sequence[Faculty],
) -> ValidationResult:
    """Check replacing `old` with `new`; `old` itself is ignored for conflicts."""
    others = [
        a
        for a in assignments
        if not (_same_slot(a, old) and a.faculty_id == old.faculty_id)
    ]
    errors: list[str] = []
    existing = next(
        (a for a in others if _same_slot(a, new) and a.faculty_id == new.faculty_id),
        None,
    )
    if existing is not None:
        errors.append(
            f"Faculty already has {existing.role.upper()} duty in this slot"
        )
    errors.extend(_room_errors(new, others, slot, faculty))
    return ValidationResult(valid=not errors, errors=errors)


def validate_swap(
    first: Assignment, second: Assignment, assignments: Sequence[Assignment]
) -> ValidationResult:
    errors: list[str] = []
    warnings: list[str] = []
    if not _same_slot(first, second):
        errors.append("Can only swap duties within the same slot")

    def _duties(a: Assignment) -> int:
        return sum(
            1 for x in assignments if _same_slot(x, a) and x.faculty_id == a.faculty_id
        )

    if _duties(first) > 1 or _duties(second) > 1:
        warnings.append(
            "One or both faculty have multiple duties in this slot. "
            "Only selected duties will be swapped."
        )
    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
