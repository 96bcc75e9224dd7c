from __future__ import annotations

from datetime import date, datetime

import pytest

from invigilation.models import (
    DutySlot,
    ExamStructure,
    Faculty,
    FacultyDutyCount,
    IncompleteSlot,
    UnavailableFaculty,
    sort_faculty,
    to_date,
)


def test_to_date_accepts_strings_dates_and_datetimes():
    assert to_date("2025-01-02") == date(2025, 1, 2)
    assert to_date("2025-01-02T10:30:00") == date(2025, 1, 2)
    assert to_date(datetime(2025, 1, 2, 9)) == date(2025, 1, 2)
    assert to_date(date(2025, 1, 2)) == date(2025, 1, 2)


def test_to_date_rejects_garbage():
    with pytest.raises(ValueError):
        to_date("not-a-date")
    with pytest.raises(TypeError):
        to_date(20250102)


def test_sort_faculty_orders_by_designation_then_name_then_id():
    roster = [
        Faculty("F3", "Zed", "Assistant Professor"),
        Faculty("F2", "Amy", "Professor"),
        Faculty("F1", "Amy", "Professor"),
        Faculty("F4", "Ben", "Assistant Professor"),
    ]
    ordered = [f.faculty_id for f in sort_faculty(roster)]
    assert ordered == ["F4", "F3", "F1", "F2"]


def test_duty_slot_normalises_date_and_rejects_negative_counts():
    s = DutySlot(day=0, slot=1, date="2025-03-04", rooms=[101, 102], regular_duties=2)
    assert s.iso_date == "2025-03-04"
    assert s.rooms == ["101", "102"]
    assert not s.has_room_mismatch
    assert s.label() == "Day 1 Slot 2"

    with pytest.raises(ValueError):
        DutySlot(day=0, slot=0, date="2025-03-04", squad_duties=-1)


def test_exam_structure_targets_and_buffer_defaults():
    structure = ExamStructure(
        duty_slots=[
            DutySlot(day=2, slot=0, date="2025-01-03"),
            DutySlot(day=0, slot=1, date="2025-01-01"),
        ],
        designation_duty_counts={"Professor": 2},
        designation_reliever_counts={"Professor": 1},
        designation_buffer_eligibility={"Assistant Professor": True},
    )
    assert structure.days == 3
    assert structure.target_for("Professor", "regular") == 2
    assert structure.target_for("Professor", "squad") == 0
    assert structure.target_for("Unknown", "regular") == 0
    assert structure.target_for("Professor", "buffer") == 0
    assert structure.buffer_eligible("Assistant Professor")
    assert not structure.buffer_eligible("Professor")
    assert [(s.day, s.slot) for s in structure.sorted_slots()] == [(0, 1), (2, 0)]
    assert structure.find_slot(2, 0) is not None
    assert structure.find_slot(1, 0) is None


def test_unavailable_faculty_stores_iso_date():
    u = UnavailableFaculty("F1", datetime(2025, 1, 5, 14))
    assert u.date == "2025-01-05"


def test_faculty_duty_count_deficit_and_increment():
    c = FacultyDutyCount("F1", regular_target=2, reliever_target=1)
    assert c.deficit("regular") == 2
    c.increment("regular")
    c.increment("buffer")
    assert c.deficit("regular") == 1
    assert c.below_target("reliever")
    assert c.target("buffer") == 0
    assert c.total_target_based == 1


def test_incomplete_slot_shortfall():
    rec = IncompleteSlot(
        day=0,
        slot=0,
        needed={"regular": 3, "reliever": 1, "squad": 0, "buffer": 2},
        assigned={"regular": 1, "reliever": 1},
    )
    assert rec.shortfall() == {"regular": 2, "reliever": 0, "squad": 0, "buffer": 2}
