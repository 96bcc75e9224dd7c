from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg", force=True)
from invigilation.allocation import allocate
from invigilation.models import DutySlot, ExamStructure, Faculty
from invigilation.reporting.adapters import PandasResultAdapter
from invigilation.reporting.plots import (
    _save_and_show,
    show_duty_load_chart,
    show_slot_fill_heatmap,
)
from invigilation.reporting.text_report import ReportDocument, set_active_report


def make_case():
    faculty = [Faculty(f"F{i}", f"N{i}", "Professor") for i in range(4)]
    structure = ExamStructure(
        duty_slots=[
            DutySlot(
                day=d,
                slot=s,
                date=f"2025-01-0{d + 1}",
                rooms=["R1"],
                regular_duties=1,
                reliever_duties=1,
            )
            for d in range(2)
            for s in range(2)
        ],
        designation_duty_counts={"Professor": 1},
        designation_reliever_counts={"Professor": 1},
    )
    return structure, allocate(faculty, structure, [])


def test_duty_load_chart_saves(monkeypatch):
    saved = {}

    def fake_save(fig, name, out_dir=Path("outputs")):
        saved["name"] = name
        saved["out_dir"] = out_dir

    monkeypatch.setattr("invigilation.reporting.plots._save_and_show", fake_save)
    _, res = make_case()

    show_duty_load_chart(res, PandasResultAdapter(), out_dir=Path("elsewhere"))
    assert saved == {"name": "duty_load_bar_chart.png", "out_dir": Path("elsewhere")}


def test_heatmap_saves_and_attaches_to_report(monkeypatch, tmp_path: Path):
    saved = {}
    monkeypatch.setattr(
        "invigilation.reporting.plots._save_and_show",
        lambda fig, name, out_dir=None: saved.setdefault("name", name),
    )
    structure, res = make_case()
    doc = ReportDocument(tmp_path / "report.pdf")
    set_active_report(doc)
    try:
        show_slot_fill_heatmap(structure, res, PandasResultAdapter())
    finally:
        set_active_report(None)
    assert saved["name"] == "slot_fill_heatmap.png"
    assert len(doc.figures) == 1


def test_plots_are_skipped_when_disabled(monkeypatch):
    called = []
    monkeypatch.setattr(
        "invigilation.reporting.plots._save_and_show",
        lambda *a, **k: called.append(1),
    )
    structure, res = make_case()
    show_duty_load_chart(res, PandasResultAdapter(), enable_plot=False)
    show_slot_fill_heatmap(structure, res, PandasResultAdapter(), enable_plot=False)
    assert called == []


def test_save_and_show_writes_png(monkeypatch, tmp_path: Path):
    import matplotlib.pyplot as plt

    monkeypatch.setattr(plt, "show", lambda: None)
    fig, ax = plt.subplots()
    ax.plot([0, 1], [0, 1])
    _save_and_show(fig, "line.png", out_dir=tmp_path)
    plt.close(fig)
    assert (tmp_path / "line.png").exists()
