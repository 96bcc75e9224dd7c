from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)
from invigilation.allocation import allocate
from invigilation.models import AssignmentResult, DutySlot, ExamStructure, Faculty
from invigilation.reporting.adapters import PandasResultAdapter
from invigilation.reporting.text_report import (
    ReportDocument,
    _fmt_float,
    _log_print,
    get_active_report,
    render_text_report,
    set_active_report,
)


def make_data():
    faculty = [Faculty(f"F{i}", f"N{i}", "Professor") for i in range(3)]
    structure = ExamStructure(
        duty_slots=[
            DutySlot(
                day=0,
                slot=0,
                date="2025-01-01",
                rooms=["R1", "R2"],
                regular_duties=2,
                reliever_duties=1,
                squad_duties=1,
            )
        ],
        designation_duty_counts={"Professor": 1},
        designation_reliever_counts={"Professor": 1},
        designation_squad_counts={"Professor": 1},
    )
    return faculty, structure


def test_render_text_report_prints_summary(capsys):
    faculty, structure = make_data()
    res = allocate(faculty, structure, [])

    render_text_report(
        PandasResultAdapter(), res, faculty, structure, num_print_examples=1
    )
    out = capsys.readouterr().out
    assert "Allocation status: OK" in out
    assert "assigned=3 / needed=4" in out
    assert "NO_ELIGIBLE_SQUAD: 1" in out
    assert "Duty distribution" in out


def test_render_text_report_lists_errors_on_failure(capsys):
    faculty, structure = make_data()
    res = AssignmentResult(success=False, errors=["No faculty available"])

    render_text_report(PandasResultAdapter(), res, faculty, structure)
    out = capsys.readouterr().out
    assert "Allocation status: FAILED" in out
    assert "❌ No faculty available" in out
    assert "Summary" not in out


def test_log_print_mirrors_into_active_report(capsys, tmp_path: Path):
    doc = ReportDocument(tmp_path / "report.pdf")
    set_active_report(doc)
    try:
        _log_print("hello", "world")
        assert get_active_report() is doc
    finally:
        set_active_report(None)
    assert capsys.readouterr().out == "hello world\n"
    assert doc.lines == ["hello world"]

    doc.write()
    assert (tmp_path / "report.pdf").exists()


def test_empty_report_still_writes_a_page(tmp_path: Path):
    doc = ReportDocument(tmp_path / "nested" / "empty.pdf")
    doc.write()
    assert (tmp_path / "nested" / "empty.pdf").stat().st_size > 0


def test_fmt_float():
    assert _fmt_float(None) == "nan"
    assert _fmt_float(float("nan")) == "nan"
    assert _fmt_float(0.256, nd=1, as_pct=True) == "25.6%"
    assert _fmt_float(3) == "3.00"
