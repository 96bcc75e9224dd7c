from __future__ import annotations

from invigilation.allocation.overview import (
    assignment_stats,
    build_overview,
    coverage_key,
)
from invigilation.allocation.state import (
    AllocationState,
    build_unavailability_map,
    initialize_duty_counts,
    unavailable_day_counts,
)
from invigilation.models import (
    Assignment,
    DutySlot,
    ExamStructure,
    Faculty,
    UnavailableFaculty,
)

ROSTER = [
    Faculty("F2", "Bea", "Professor"),
    Faculty("F1", "Abe", "Assistant Professor"),
    Faculty("F3", "Cy", "Professor"),
]


def test_overview_is_zero_filled_and_sorted_by_id():
    assignments = [
        Assignment(0, 0, "F2", "regular", room_number="R1"),
        Assignment(0, 0, "F1", "reliever", rooms=("R1", "R2")),
        Assignment(1, 2, "F1", "squad", rooms=("R9",)),
        Assignment(1, 2, "F2", "buffer"),
    ]
    rows = build_overview(assignments, ROSTER)
    assert [r.faculty_id for r in rows] == ["F1", "F2", "F3"]
    f1, f2, f3 = rows
    assert (f1.reliever, f1.squad, f1.total) == (1, 1, 2)
    assert f1.coverage == {"d0-s0": ["R1", "R2"], "d1-s2": ["R9"]}
    assert (f2.regular, f2.buffer, f2.total) == (1, 1, 2)
    assert f2.coverage == {}
    assert f3.total == 0
    assert f3.name == "Cy"


def test_assignment_stats_matches_overview():
    stats = assignment_stats([Assignment(0, 0, "F3", "regular", "R1")], ROSTER)
    assert stats["F3"] == {
        "regular": 1,
        "reliever": 0,
        "squad": 0,
        "buffer": 0,
        "total": 1,
    }
    assert stats["F1"]["total"] == 0


def test_coverage_key_format():
    assert coverage_key(2, 1) == "d2-s1"


def test_initial_counts_use_designation_targets():
    structure = ExamStructure(
        duty_slots=[],
        designation_duty_counts={"Professor": 2},
        designation_squad_counts={"Assistant Professor": 1},
    )
    counts = initialize_duty_counts(ROSTER, structure)
    assert list(counts) == ["F1", "F2", "F3"]
    assert counts["F2"].regular_target == 2
    assert counts["F1"].regular_target == 0
    assert counts["F1"].squad_target == 1


def test_unavailability_helpers_dedupe_dates():
    away = [
        UnavailableFaculty("F1", "2025-01-01"),
        UnavailableFaculty("F1", "2025-01-01"),
        UnavailableFaculty("F1", "2025-01-02"),
        UnavailableFaculty("F2", "2025-01-02"),
    ]
    assert build_unavailability_map(away) == {
        "2025-01-01": {"F1"},
        "2025-01-02": {"F1", "F2"},
    }
    assert unavailable_day_counts(away) == {"F1": 2, "F2": 1}


def test_state_tracks_regular_slots_per_day():
    structure = ExamStructure(
        duty_slots=[DutySlot(0, 0, "2025-01-01", rooms=["R1"], regular_duties=1)],
        designation_duty_counts={"Professor": 1},
    )
    state = AllocationState.create(
        ROSTER, structure, [UnavailableFaculty("F2", "2025-01-01")]
    )
    assert [f.faculty_id for f in state.available_for("2025-01-01")] == ["F1", "F3"]
    state.record(Assignment(0, 0, "F3", "regular", room_number="R1"))
    state.record(Assignment(0, 1, "F3", "squad", rooms=("R1",)))
    assert state.regular_slots_on("F3", 0) == {0}
    assert state.regular_slots_on("F3", 1) == set()
    assert state.counts["F3"].regular == 1
    assert state.counts["F3"].squad == 1
