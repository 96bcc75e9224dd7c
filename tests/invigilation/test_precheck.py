from __future__ import annotations

import io

from invigilation.models import DutySlot, ExamStructure
from invigilation.precheck import (
    precheck_allocation,
    structure_summary,
    validate_requirements,
)


def make_structure(regular: int = 2, reliever: int = 1, buffer: int = 0):
    return ExamStructure(
        duty_slots=[
            DutySlot(
                day=0,
                slot=0,
                date="2025-01-01",
                rooms=[f"R{i}" for i in range(regular)],
                regular_duties=regular,
                reliever_duties=reliever,
                buffer_duties=buffer,
            )
        ],
        designation_duty_counts={"Professor": 1},
        designation_reliever_counts={"Professor": 1},
    )


def test_empty_roster_is_rejected():
    res = validate_requirements([], make_structure())
    assert not res.valid
    assert res.errors == ["No faculty available"]


def test_empty_schedule_is_rejected(two_professors):
    res = validate_requirements(two_professors, ExamStructure(duty_slots=[]))
    assert not res.valid
    assert res.errors == ["No duty slots configured"]


def test_capacity_shortfall_names_every_role(two_professors):
    res = validate_requirements(two_professors, make_structure(regular=2, reliever=2))
    assert res.valid
    assert res.mandatory_demand == res.mandatory_capacity == 4

    res = validate_requirements(two_professors, make_structure(regular=4, reliever=1))
    assert not res.valid
    assert res.errors[0] == (
        "Insufficient faculty capacity for mandatory duties. "
        "Need 5 (4 regular + 1 reliever + 0 squad), but faculty can only handle 4"
    )


def test_buffer_demand_above_roster_is_only_a_warning(two_professors):
    res = validate_requirements(two_professors, make_structure(buffer=3))
    assert res.valid
    assert len(res.warnings) == 1
    assert "3 buffer duties needed" in res.warnings[0]


def test_structure_summary_flags_room_mismatch():
    structure = make_structure()
    structure.duty_slots.append(
        DutySlot(day=1, slot=0, date="2025-01-02", rooms=["X"], regular_duties=2)
    )
    df = structure_summary(structure)
    assert list(df["room_mismatch"]) == [False, True]
    assert list(df["total"]) == [3, 2]


def test_precheck_allocation_prints_report(two_professors):
    stream = io.StringIO()
    res = precheck_allocation(two_professors, make_structure(), stream=stream)
    out = stream.getvalue()
    assert res.valid
    assert "Pre-check" in out
    assert "✅ Capacity" in out
    assert "regular — requires 2" in out


def test_precheck_allocation_silent_when_not_verbose(two_professors, capsys):
    precheck_allocation(two_professors, make_structure(), verbose=False)
    assert capsys.readouterr().out == ""


def test_precheck_prints_errors_without_demand(capsys):
    precheck_allocation([], make_structure())
    out = capsys.readouterr().out
    assert "❌ No faculty available" in out
