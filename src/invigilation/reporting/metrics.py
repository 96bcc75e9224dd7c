from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import pandas as pd

from invigilation.models import ROLES, TARGET_ROLES, ExamStructure, Faculty

from .adapters import ResultAdapter
from .data_models import FillMetrics, RoleFill, TargetGap


def compute_fill_metrics(
    structure: ExamStructure, res: Any, adapter: ResultAdapter
) -> FillMetrics:
    """Compute FillMetrics for an allocation result."""
    df = adapter.df_assignments(res)
    assigned_by_role = df.groupby("role").size().to_dict() if not df.empty else {}

    per_role: dict[str, RoleFill] = {}
    for role in ROLES:
        needed = sum(s.needed(role) for s in structure.duty_slots)
        per_role[role] = RoleFill(
            role=role, needed=needed, assigned=int(assigned_by_role.get(role, 0))
        )

    violations = adapter.df_violations(res)
    skipped = (
        int((violations["id"] == "ROOM_MISMATCH").sum()) if not violations.empty else 0
    )
    return FillMetrics(
        total_needed=sum(r.needed for r in per_role.values()),
        total_assigned=sum(r.assigned for r in per_role.values()),
        skipped_slots=skipped,
        incomplete_slots=len(adapter.df_incomplete(res)),
        per_role=per_role,
    )


def load_distribution(df_overview: pd.DataFrame) -> dict[str, float]:
    """mean/std/p5/p95/min/max of per-faculty total duties."""
    if df_overview.empty or "total" not in df_overview.columns:
        return {}
    totals = pd.to_numeric(df_overview["total"], errors="coerce").to_numpy(
        dtype=float
    )
    totals = totals[~np.isnan(totals)]
    if not totals.size:
        return {}
    if totals.size > 1:
        p5, p95 = np.percentile(totals, [5.0, 95.0])
        std = float(np.std(totals, ddof=1))
    else:
        p5, p95 = float(totals.min()), float(totals.max())
        std = float("nan")
    return {
        "mean": float(np.mean(totals)),
        "std": std,
        "p5": float(p5),
        "p95": float(p95),
        "min": float(np.min(totals)),
        "max": float(np.max(totals)),
    }


def compute_target_gaps(
    faculty: Sequence[Faculty],
    structure: ExamStructure,
    res: Any,
    adapter: ResultAdapter,
) -> tuple[list[TargetGap], pd.DataFrame]:
    """Per (faculty, role) target vs assigned; returns gaps plus the full frame."""
    overview = adapter.df_overview(res).set_index("faculty_id", drop=False)
    gaps: list[TargetGap] = []
    for f in faculty:
        for role in TARGET_ROLES:
            assigned = (
                int(overview.at[f.faculty_id, role])
                if f.faculty_id in overview.index
                else 0
            )
            gaps.append(
                TargetGap(
                    faculty_id=f.faculty_id,
                    role=role,
                    target=structure.target_for(f.designation, role),
                    assigned=assigned,
                )
            )
    df = pd.DataFrame(
        [
            {
                "faculty_id": g.faculty_id,
                "role": g.role,
                "target": g.target,
                "assigned": g.assigned,
                "gap": g.gap,
            }
            for g in gaps
        ],
        columns=["faculty_id", "role", "target", "assigned", "gap"],
    )
    return gaps, df


def slot_fill_matrix(
    structure: ExamStructure, res: Any, adapter: ResultAdapter
) -> pd.DataFrame:
    """(day x slot) grid of assigned / needed across all roles; NaN where no slot."""
    df = adapter.df_assignments(res)
    got = df.groupby(["day", "slot"]).size().to_dict() if not df.empty else {}
    days = structure.days
    max_slot = max((s.slot for s in structure.duty_slots), default=-1) + 1
    grid = np.full((days, max_slot), np.nan)
    for s in structure.duty_slots:
        need = sum(s.needed(r) for r in ROLES)
        grid[s.day, s.slot] = got.get((s.day, s.slot), 0) / need if need else 1.0
    return pd.DataFrame(
        grid,
        index=pd.Index(range(days), name="day"),
        columns=pd.Index(range(max_slot), name="slot"),
    )
