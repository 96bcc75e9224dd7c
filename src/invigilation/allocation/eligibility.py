from __future__ import annotations

from typing import Optional, Sequence

from invigilation.allocation.state import AllocationState
from invigilation.models import Faculty, Role
from invigilation.rules.base import Relaxation, Rule, SlotContext


def remaining_pool(
    state: AllocationState, candidates: Sequence[Faculty], role: Role
) -> int:
    """How many candidates are still below their target for `role` (0 for buffer)."""
    if role == "buffer":
        return 0
    return sum(1 for f in candidates if state.counts[f.faculty_id].below_target(role))


def eligible_faculty(
    state: AllocationState,
    rules: Sequence[Rule],
    ctx: SlotContext,
    role: Role,
    relax: Relaxation,
) -> list[Faculty]:
    """
    Filter the slot's available faculty through every rule active at this
    rung. Hard rules run first and define the pool that `remaining_pool`
    is counted over.
    """
    hard = [r for r in rules if r.hard and r.active(role, relax, 0)]
    candidates = [
        f for f in ctx.available if not any(r.excludes(f, ctx, role) for r in hard)
    ]
    if not candidates:
        return []

    pool = remaining_pool(state, candidates, role)
    soft = [r for r in rules if not r.hard and r.active(role, relax, pool)]
    return [f for f in candidates if not any(r.excludes(f, ctx, role) for r in soft)]


def climb_ladder(
    state: AllocationState,
    rules: Sequence[Rule],
    ctx: SlotContext,
    role: Role,
    ladder: Sequence[Relaxation],
) -> tuple[list[Faculty], Optional[int]]:
    """
    Try each rung in order; return the first non-empty eligible set and the
    index of the rung that produced it, or ([], None) when all rungs fail.
    """
    for level, relax in enumerate(ladder):
        eligible = eligible_faculty(state, rules, ctx, role, relax)
        if eligible:
            return eligible, level
    return [], None
