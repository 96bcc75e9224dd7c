from __future__ import annotations

from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np

from invigilation.models import ROLES, ExamStructure

from .adapters import ResultAdapter
from .metrics import slot_fill_matrix
from .text_report import get_active_report

ROLE_COLORS = {
    "regular": "#3B82F6",
    "reliever": "#34D399",
    "squad": "#6366F1",
    "buffer": "#C4B5FD",
}


def _save_and_show(
    fig: plt.Figure, filename: str, out_dir: Path = Path("outputs")
) -> None:
    """Persist the plot under the output directory and show it."""
    out_dir.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_dir / filename, dpi=fig.dpi, bbox_inches="tight")
    plt.show()


def show_duty_load_chart(
    res: Any,
    adapter: ResultAdapter,
    enable_plot: bool = True,
    max_faculty: int = 40,
    out_dir: Path = Path("outputs"),
) -> None:
    """Stacked bar chart of duties per faculty member, split by role."""
    if not enable_plot:
        return
    df = adapter.df_overview(res)
    if df.empty:
        return

    df = df.sort_values(["total", "faculty_id"], ascending=[False, True]).head(
        max_faculty
    )
    labels = list(df["faculty_id"])
    x = np.arange(len(labels))

    fig, ax = plt.subplots(figsize=(max(6.0, 0.25 * len(labels) + 2), 4), dpi=150)
    ax.set_title(f"Duties per faculty (top {len(labels)} by load)", pad=35)
    bottom = np.zeros(len(labels))
    for role in ROLES:
        vals = df[role].to_numpy(dtype=float)
        ax.bar(
            x,
            vals,
            bottom=bottom,
            label=role,
            color=ROLE_COLORS[role],
            width=0.85,
            edgecolor="none",
        )
        bottom = bottom + vals

    ax.set_xticks(x, labels, rotation=90, fontsize=6)
    ax.set_xlabel("Faculty")
    ax.set_ylabel("Duties")
    ax.set_xmargin(0.01)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.legend(
        ncol=len(ROLES),
        loc="upper center",
        bbox_to_anchor=(0.5, 1.15),
        borderaxespad=0.3,
        frameon=False,
    )
    fig.tight_layout(rect=(0, 0, 1, 0.92))
    _save_and_show(fig, "duty_load_bar_chart.png", out_dir)
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)


def show_slot_fill_heatmap(
    structure: ExamStructure,
    res: Any,
    adapter: ResultAdapter,
    enable_plot: bool = True,
    out_dir: Path = Path("outputs"),
) -> None:
    """Heat map of assigned/needed per (day, slot)."""
    if not enable_plot or not structure.duty_slots:
        return
    grid = slot_fill_matrix(structure, res, adapter)

    fig, ax = plt.subplots(
        figsize=(1.2 * grid.shape[1] + 3, 0.5 * grid.shape[0] + 2)
    )
    ax.set_title("Slot fill rate (assigned / needed)")
    masked = np.ma.masked_invalid(grid.to_numpy(dtype=float))
    im = ax.imshow(masked, cmap="RdYlGn", vmin=0.0, vmax=1.0, aspect="auto")
    ax.set_xticks(range(grid.shape[1]), [f"S{s + 1}" for s in grid.columns])
    ax.set_yticks(range(grid.shape[0]), [f"Day {d + 1}" for d in grid.index])
    for (d, s), val in np.ndenumerate(grid.to_numpy(dtype=float)):
        if not np.isnan(val):
            ax.text(s, d, f"{val:.0%}", ha="center", va="center", fontsize=7)
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    fig.tight_layout()
    _save_and_show(fig, "slot_fill_heatmap.png", out_dir)
    report = get_active_report()
    if report is not None:
        report.add_figure(fig)
