from __future__ import annotations

from invigilation.models import Assignment, DutySlot, Faculty
from invigilation.validation import (
    validate_assignment_add,
    validate_assignment_update,
    validate_swap,
)

SLOT = DutySlot(
    day=0,
    slot=0,
    date="2025-01-01",
    rooms=["R1", "R2"],
    regular_duties=2,
    reliever_duties=1,
)
ROSTER = [
    Faculty("F1", "Asha", "Professor"),
    Faculty("F2", "Bala", "Professor"),
    Faculty("F3", "Chitra", "Professor"),
]
CURRENT = [
    Assignment(0, 0, "F1", "regular", room_number="R1"),
    Assignment(0, 0, "F2", "reliever", rooms=("R1", "R2")),
]


def test_add_rejects_second_role_in_slot():
    res = validate_assignment_add(
        Assignment(0, 0, "F1", "squad", rooms=("R1",)), CURRENT, SLOT, ROSTER
    )
    assert not res.valid
    assert res.errors == ["Faculty is already assigned as REGULAR in this slot"]


def test_add_rejects_taken_and_unknown_rooms():
    res = validate_assignment_add(
        Assignment(0, 0, "F3", "regular", room_number="R1"), CURRENT, SLOT, ROSTER
    )
    assert res.errors == ["Room R1 is already assigned to Asha"]

    res = validate_assignment_add(
        Assignment(0, 0, "F3", "regular", room_number="R9"), CURRENT, SLOT, ROSTER
    )
    assert res.errors == ["Room R9 is not available in this slot"]


def test_add_over_capacity_is_only_a_warning():
    res = validate_assignment_add(
        Assignment(0, 0, "F3", "reliever", rooms=("R2",)), CURRENT, SLOT, ROSTER
    )
    assert res.valid
    assert res.warnings == [
        "Adding this duty will exceed slot capacity (2/1 reliever)"
    ]


def test_add_into_free_room_is_clean():
    res = validate_assignment_add(
        Assignment(0, 0, "F3", "regular", room_number="R2"), CURRENT, SLOT, ROSTER
    )
    assert res.valid
    assert res.warnings == []


def test_update_ignores_the_replaced_assignment():
    old = CURRENT[0]
    res = validate_assignment_update(
        old,
        Assignment(0, 0, "F1", "regular", room_number="R1"),
        CURRENT,
        SLOT,
        ROSTER,
    )
    assert res.valid

    res = validate_assignment_update(
        old,
        Assignment(0, 0, "F2", "regular", room_number="R1"),
        CURRENT,
        SLOT,
        ROSTER,
    )
    assert res.errors == ["Faculty already has RELIEVER duty in this slot"]


def test_swap_must_stay_in_slot():
    other = Assignment(1, 0, "F3", "regular", room_number="R1")
    res = validate_swap(CURRENT[0], other, CURRENT + [other])
    assert res.errors == ["Can only swap duties within the same slot"]


def test_swap_warns_about_multiple_duties():
    extra = Assignment(0, 0, "F1", "buffer")
    res = validate_swap(CURRENT[0], CURRENT[1], CURRENT + [extra])
    assert res.valid
    assert len(res.warnings) == 1
