# invigilation/precheck.py
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Sequence

import pandas as pd

from invigilation.models import TARGET_ROLES, ExamStructure, Faculty


@dataclass
class PrecheckResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    demand: dict[str, int] = field(default_factory=dict)
    capacity: dict[str, int] = field(default_factory=dict)

    @property
    def mandatory_demand(self) -> int:
        return sum(self.demand.get(r, 0) for r in TARGET_ROLES)

    @property
    def mandatory_capacity(self) -> int:
        return sum(self.capacity.get(r, 0) for r in TARGET_ROLES)


def _role_demand(structure: ExamStructure) -> dict[str, int]:
    """Sum of per-slot requirements for every role."""
    return {
        "regular": sum(s.regular_duties for s in structure.duty_slots),
        "reliever": sum(s.reliever_duties for s in structure.duty_slots),
        "squad": sum(s.squad_duties for s in structure.duty_slots),
        "buffer": sum(s.buffer_duties for s in structure.duty_slots),
    }


def _role_capacity(
    faculty: Sequence[Faculty], structure: ExamStructure
) -> dict[str, int]:
    """Sum over faculty of their designation's target for each target-bearing role."""
    return {
        role: sum(structure.target_for(f.designation, role) for f in faculty)
        for role in TARGET_ROLES
    }


def validate_requirements(
    faculty: Sequence[Faculty], structure: ExamStructure
) -> PrecheckResult:
    """
    Fail fast on an empty roster, an empty schedule or mandatory demand
    (regular + reliever + squad) above the roster's summed targets.
    Buffer demand is not capacity-checked: it has no quota ceiling.
    """
    if not faculty:
        return PrecheckResult(valid=False, errors=["No faculty available"])
    if not structure.duty_slots:
        return PrecheckResult(valid=False, errors=["No duty slots configured"])

    demand = _role_demand(structure)
    capacity = _role_capacity(faculty, structure)
    out = PrecheckResult(valid=True, demand=demand, capacity=capacity)

    if out.mandatory_capacity < out.mandatory_demand:
        out.errors.append(
            "Insufficient faculty capacity for mandatory duties. "
            f"Need {out.mandatory_demand} ({demand['regular']} regular + "
            f"{demand['reliever']} reliever + {demand['squad']} squad), "
            f"but faculty can only handle {out.mandatory_capacity}"
        )

    if demand["buffer"] > len(faculty):
        out.warnings.append(
            f"{demand['buffer']} buffer duties needed but only {len(faculty)} "
            "faculty available. Some faculty may get multiple buffer duties."
        )

    out.valid = not out.errors
    return out


def structure_summary(structure: ExamStructure) -> pd.DataFrame:
    """One row per duty slot with per-role demand, room count and mismatch flag."""
    rows = [
        {
            "day": s.day,
            "slot": s.slot,
            "date": s.iso_date,
            "time": f"{s.start_time} - {s.end_time}".strip(" -"),
            "regular": s.regular_duties,
            "reliever": s.reliever_duties,
            "squad": s.squad_duties,
            "buffer": s.buffer_duties,
            "total": s.regular_duties
            + s.reliever_duties
            + s.squad_duties
            + s.buffer_duties,
            "rooms": len(s.rooms),
            "room_mismatch": s.has_room_mismatch,
        }
        for s in structure.sorted_slots()
    ]
    columns = [
        "day",
        "slot",
        "date",
        "time",
        "regular",
        "reliever",
        "squad",
        "buffer",
        "total",
        "rooms",
        "room_mismatch",
    ]
    return pd.DataFrame(rows, columns=columns)


def precheck_allocation(
    faculty: Sequence[Faculty],
    structure: ExamStructure,
    *,
    verbose: bool = True,
    stream=None,
) -> PrecheckResult:
    """
    Run validate_requirements and, if `verbose`, print the capacity header,
    per-role demand vs capacity and any room mismatches to `stream`.
    """
    stream = stream or sys.stdout
    res = validate_requirements(faculty, structure)
    if not verbose:
        return res

    print_precheck_header(res, stream=stream)
    if res.demand:
        print_role_status(res, stream=stream)
        print_structure_summary(structure, stream=stream)
        print_room_mismatches(structure, stream=stream)
    return res


def print_precheck_header(res: PrecheckResult, *, stream=sys.stdout) -> None:
    """Print 'Pre-check' on its own line, then capacity line with ✅/❌"""
    print("\nPre-check:\n", file=stream)
    if not res.demand:
        for err in res.errors:
            print(f"❌ {err}", file=stream)
        return
    cap, dem = res.mandatory_capacity, res.mandatory_demand
    if res.valid:
        print(f"✅ Capacity = {cap:,} | mandatory_demand = {dem:,} | OK", file=stream)
    else:
        print(
            f"❌ Capacity = {cap:,} | mandatory_demand = {dem:,} | NOT OK",
            file=stream,
        )
    print(
        "ℹ️  Pre-check only compares summed quotas with summed demand; individual "
        "slots may still go unfilled once availability and spacing rules apply.",
        file=stream,
    )
    for w in res.warnings:
        print(f"⚠️ {w}", file=stream)


def print_role_status(res: PrecheckResult, *, stream=sys.stdout) -> None:
    """One line per role: demand vs summed targets."""
    for role in TARGET_ROLES:
        need = res.demand.get(role, 0)
        have = res.capacity.get(role, 0)
        mark = "✅" if have >= need else "❌"
        print(
            f"{mark} {role} — requires {need:,}, quota {have:,} (slack={have - need})",
            file=stream,
        )
    print(
        f"ℹ️  buffer — requires {res.demand.get('buffer', 0):,} (no quota)",
        file=stream,
    )


def print_room_mismatches(structure: ExamStructure, *, stream=sys.stdout) -> None:
    """Report slots whose room list does not match their regular duty count."""
    bad = [s for s in structure.sorted_slots() if s.has_room_mismatch]
    print("\nRoom/regular-duty check:", file=stream)
    if not bad:
        print("✅ Every slot has one room per regular duty.", file=stream)
        return
    for s in bad:
        print(
            f"❌ {s.label()} — {len(s.rooms)} rooms provided but "
            f"{s.regular_duties} regular duties needed (slot will be skipped)",
            file=stream,
        )


def print_structure_summary(structure: ExamStructure, *, stream=sys.stdout) -> None:
    df = structure_summary(structure)
    print("\nSchedule summary:", file=stream)
    print(df.drop(columns=["room_mismatch"]).to_string(index=False), file=stream)
    totals = df[["regular", "reliever", "squad", "buffer", "total"]].sum()
    print(
        f"Totals: {len(df)} slots | "
        + " | ".join(f"{k}={int(v):,}" for k, v in totals.items()),
        file=stream,
    )
