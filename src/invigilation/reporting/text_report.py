from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.backends.backend_pdf import PdfPages

from invigilation.models import ExamStructure, Faculty

from .adapters import ResultAdapter
from .metrics import compute_fill_metrics, compute_target_gaps, load_distribution


class ReportDocument:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.lines: list[str] = []
        self.figures: list[plt.Figure] = []

    def add_text(self, text: str) -> None:
        self.lines.append(text)

    def add_figure(self, fig: plt.Figure) -> None:
        self.figures.append(fig)

    def write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with PdfPages(self.path) as pdf:
            if self.lines:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                text = "\n".join(self.lines)
                ax.text(
                    0.01,
                    0.99,
                    text,
                    ha="left",
                    va="top",
                    fontsize=8,
                    family="monospace",
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            elif not self.figures:
                fig, ax = plt.subplots(figsize=(8.27, 11.69))
                ax.axis("off")
                ax.text(
                    0.5,
                    0.5,
                    "Report contains no data.",
                    ha="center",
                    va="center",
                    fontsize=12,
                )
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)
            for fig in self.figures:
                pdf.savefig(fig, bbox_inches="tight")
                plt.close(fig)


_ACTIVE_REPORT: Optional[ReportDocument] = None


def set_active_report(doc: Optional[ReportDocument]) -> None:
    global _ACTIVE_REPORT
    _ACTIVE_REPORT = doc


def get_active_report() -> Optional[ReportDocument]:
    return _ACTIVE_REPORT


def _log_print(*args, **kwargs) -> None:
    from io import StringIO

    buf = StringIO()
    kwargs_copy = kwargs.copy()
    kwargs_copy["file"] = buf
    print(*args, **kwargs_copy)
    print(*args, **kwargs)
    if _ACTIVE_REPORT is not None:
        _ACTIVE_REPORT.add_text(buf.getvalue().rstrip("\n"))


def _fmt_float(x: float | None, nd: int = 2, as_pct: bool = False) -> str:
    if x is None:
        return "nan"
    try:
        if pd.isna(x):
            return "nan"
        return f"{float(100 * x):.{nd}f}%" if as_pct else f"{float(x):.{nd}f}"
    except (TypeError, ValueError):
        return "nan"


def _print_duty_histogram(df_overview: pd.DataFrame) -> None:
    if df_overview.empty or "total" not in df_overview.columns:
        _log_print("\nDuty distribution: (no data)")
        return
    totals = pd.to_numeric(df_overview["total"], errors="coerce").dropna().astype(int)
    counts = totals.value_counts().sort_index()
    _log_print("\nDuty distribution — how many faculty at each total:")
    for n_duties, n_faculty in counts.items():
        bar = "█" * min(int(n_faculty), 50)
        _log_print(f"  {n_duties:>3} : {n_faculty:>4} faculty  {bar}")


def render_text_report(
    adapter: ResultAdapter,
    res: Any,
    faculty: Sequence[Faculty],
    structure: ExamStructure,
    *,
    num_print_examples: int = 6,
) -> None:
    if not adapter.success(res):
        _log_print("Allocation status: FAILED")
        for err in adapter.errors(res):
            _log_print(f"❌ {err}")
        return

    _log_print("Allocation status: OK")

    fill = compute_fill_metrics(structure, res, adapter)
    _log_print(
        f"\nSummary: assigned={fill.total_assigned:,} / needed={fill.total_needed:,} "
        f"duty units | incomplete slots={fill.incomplete_slots} | "
        f"skipped slots (room mismatch)={fill.skipped_slots}"
    )
    for role, rf in fill.per_role.items():
        _log_print(
            f"  {role:<9} {rf.assigned:>5,} / {rf.needed:<5,} "
            f"({_fmt_float(rf.fill_rate, nd=1, as_pct=True)})"
            + (f" | unfilled={rf.unfilled}" if rf.unfilled else "")
        )

    df_overview = adapter.df_overview(res)
    if not df_overview.empty:
        _log_print(f"\nPer-faculty duties (first {num_print_examples}):")
        _log_print(df_overview.head(num_print_examples).to_string(index=False))

        dist = load_distribution(df_overview)
        if dist:
            _log_print(
                "\nDuty load across faculty: "
                f"mean={_fmt_float(dist['mean'])} | std={_fmt_float(dist['std'])} | "
                f"p5={_fmt_float(dist['p5'])} | p95={_fmt_float(dist['p95'])} | "
                f"min={_fmt_float(dist['min'])} | max={_fmt_float(dist['max'])}"
            )

        _, df_gaps = compute_target_gaps(faculty, structure, res, adapter)
        short = df_gaps[df_gaps["gap"] < 0]
        over = df_gaps[df_gaps["gap"] > 0]
        if short.empty and over.empty:
            _log_print("\nEvery faculty member met their role targets exactly.")
        else:
            _log_print(
                f"\nTarget gaps: {len(short)} below target, {len(over)} above target"
            )
            if not over.empty:
                _log_print(
                    over.sort_values(["gap", "faculty_id"], ascending=[False, True])
                    .head(num_print_examples)
                    .to_string(index=False)
                )

    df_viol = adapter.df_violations(res)
    if df_viol.empty:
        _log_print("\nViolations: none — every duty unit was filled.")
    else:
        by_id = df_viol.groupby("id").size().sort_values(ascending=False)
        _log_print("\nViolations grouped by type:")
        for vid, n in by_id.items():
            _log_print(f"- {vid}: {n}")
        for msg in df_viol["message"].head(num_print_examples):
            _log_print(f"    • {msg}")
        if len(df_viol) > num_print_examples:
            _log_print(f"    • … {len(df_viol) - num_print_examples} more")

    warnings = adapter.warnings(res)
    if warnings:
        _log_print(f"\n⚠️ {len(warnings)} warning(s):")
        for w in warnings[:num_print_examples]:
            _log_print(f"    • {w}")
        if len(warnings) > num_print_examples:
            _log_print(f"    • … {len(warnings) - num_print_examples} more")

    _print_duty_histogram(df_overview)
