from __future__ import annotations

import pytest

from invigilation.allocation.selection import select_faculty, selection_key
from invigilation.models import Faculty, FacultyDutyCount

A = Faculty("A", "Alice", "Professor")
B = Faculty("B", "Bob", "Professor")
C = Faculty("C", "Cara", "Professor")


def counts(**kw: dict) -> dict[str, FacultyDutyCount]:
    return {fid: FacultyDutyCount(fid, **fields) for fid, fields in kw.items()}


def test_largest_deficit_wins():
    c = counts(
        A=dict(regular_target=2, regular=1),
        B=dict(regular_target=3, regular=0),
        C=dict(regular_target=1, regular=0),
    )
    assert select_faculty([A, B, C], "regular", c, {}).faculty_id == "B"


def test_raising_a_deficit_never_lowers_rank():
    base = counts(
        A=dict(regular_target=2, regular=1),
        B=dict(regular_target=2, regular=1),
    )
    before = selection_key(B, "regular", base, {})
    base["B"].regular_target = 3
    after = selection_key(B, "regular", base, {})
    assert after < before
    assert select_faculty([A, B], "regular", base, {}).faculty_id == "B"


def test_unavailable_days_break_deficit_ties():
    c = counts(A=dict(squad_target=1), B=dict(squad_target=1))
    assert select_faculty([A, B], "squad", c, {"B": 2}).faculty_id == "B"


def test_fewer_target_duties_then_id_break_remaining_ties():
    c = counts(
        A=dict(reliever_target=1, regular=2),
        B=dict(reliever_target=1, regular=1),
        C=dict(reliever_target=1, regular=1),
    )
    assert select_faculty([A, B, C], "reliever", c, {}).faculty_id == "B"
    assert select_faculty([C, B], "reliever", c, {}).faculty_id == "B"


def test_buffer_prefers_fewest_buffers_then_lightest_load():
    c = counts(
        A=dict(buffer=1),
        B=dict(buffer=0, regular=3),
        C=dict(buffer=0, regular=1),
    )
    assert select_faculty([A, B, C], "buffer", c, {}).faculty_id == "C"
    assert selection_key(C, "buffer", c, {"C": 4}) == (0, 1, -4, "C")


def test_select_faculty_rejects_empty_set():
    with pytest.raises(ValueError):
        select_faculty([], "regular", {}, {})
