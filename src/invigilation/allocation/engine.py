# invigilation/allocation/engine.py
from __future__ import annotations

from typing import Any, Optional, Sequence, Type

from invigilation.allocation.eligibility import climb_ladder
from invigilation.allocation.overview import build_overview
from invigilation.allocation.rooms import chunk_rooms, regular_room_order
from invigilation.allocation.selection import select_faculty
from invigilation.allocation.state import AllocationState
from invigilation.allocation.verify import verify_assignments
from invigilation.models import (
    ROLES,
    AllocationWarning,
    Assignment,
    AssignmentResult,
    DutySlot,
    ExamStructure,
    Faculty,
    IncompleteSlot,
    Role,
    UnavailableFaculty,
    Violation,
)
from invigilation.precheck import validate_requirements
from invigilation.rules.base import Rule, RuleSpec, SlotContext
from invigilation.rules.registry import (
    RELAXATION_LADDERS,
    instantiate_rules,
    normalize_rule_specs,
)


def allocate(
    faculty: Sequence[Faculty],
    structure: ExamStructure,
    unavailability: Sequence[UnavailableFaculty],
    rules: Sequence[RuleSpec | Type[Rule]] | None = None,
) -> AssignmentResult:
    """
    Assign faculty to every duty unit of every slot.

    Pre-allocation failures (empty roster, empty schedule, insufficient
    capacity) return success=False with no assignments. Units that cannot be
    filled even at the loosest rung are recorded as violations and the run
    carries on. Any unexpected exception is reported as an error result
    rather than raised.
    """
    try:
        return _allocate(faculty, structure, unavailability, rules)
    except Exception as exc:
        return AssignmentResult(
            success=False,
            errors=[f"Assignment failed: {exc}"],
        )


assign_duties = allocate


def _allocate(
    faculty: Sequence[Faculty],
    structure: ExamStructure,
    unavailability: Sequence[UnavailableFaculty],
    rules: Sequence[RuleSpec | Type[Rule]] | None,
) -> AssignmentResult:
    check = validate_requirements(faculty, structure)
    if not check.valid:
        return AssignmentResult(
            success=False, errors=list(check.errors), warnings=list(check.warnings)
        )

    state = AllocationState.create(faculty, structure, unavailability)
    active_rules = instantiate_rules(state, normalize_rule_specs(rules))

    result = AssignmentResult(success=True)
    for msg in check.warnings:
        result.add_warning(AllocationWarning(kind="PRECHECK", message=msg))

    incomplete: list[IncompleteSlot] = []
    for duty_slot in structure.sorted_slots():
        record = process_slot(state, active_rules, duty_slot, result)
        if record is not None:
            incomplete.append(record)

    for w in verify_assignments(
        state.assignments, structure, state.unavailability_map
    ):
        result.add_warning(w)

    result.assignments = list(state.assignments)
    result.incomplete_slots = incomplete
    result.overview = build_overview(result.assignments, state.faculty)
    return result


def process_slot(
    state: AllocationState,
    rules: Sequence[Rule],
    duty_slot: DutySlot,
    result: AssignmentResult,
) -> Optional[IncompleteSlot]:
    """
    Fill one slot: regular, reliever, squad, then buffer. Returns an
    IncompleteSlot when any role ends up short.
    """
    needed = {role: duty_slot.needed(role) for role in ROLES}

    if duty_slot.has_room_mismatch:
        result.violations.append(
            Violation(
                id="ROOM_MISMATCH",
                message=(
                    f"{duty_slot.label()}: {len(duty_slot.rooms)} rooms provided "
                    f"but {duty_slot.regular_duties} regular duties needed"
                ),
                day=duty_slot.day,
                slot=duty_slot.slot,
            )
        )
        return IncompleteSlot(
            day=duty_slot.day,
            slot=duty_slot.slot,
            needed=needed,
            assigned={role: 0 for role in ROLES},
        )

    ctx = SlotContext(
        duty_slot=duty_slot, available=state.available_for(duty_slot.iso_date)
    )
    assigned = {role: 0 for role in ROLES}
    for role in ROLES:
        assigned[role] = fill_role(
            state, rules, ctx, role, _unit_payloads(duty_slot, role), result
        )

    if all(assigned[r] >= needed[r] for r in ROLES):
        return None
    return IncompleteSlot(
        day=duty_slot.day, slot=duty_slot.slot, needed=needed, assigned=assigned
    )


def _unit_payloads(duty_slot: DutySlot, role: Role) -> list[dict[str, Any]]:
    """Per-unit room payload for the Assignment each unit would produce."""
    need = duty_slot.needed(role)
    if role == "regular":
        return [
            {"room_number": room}
            for room in regular_room_order(duty_slot.rooms)[:need]
        ]
    if role in ("reliever", "squad"):
        return [{"rooms": tuple(chunk)} for chunk in chunk_rooms(duty_slot.rooms, need)]
    return [{} for _ in range(need)]


def fill_role(
    state: AllocationState,
    rules: Sequence[Rule],
    ctx: SlotContext,
    role: Role,
    payloads: Sequence[dict[str, Any]],
    result: AssignmentResult,
) -> int:
    """Fill each unit through the role's relaxation ladder. Returns units filled."""
    ladder = RELAXATION_LADDERS[role]
    label = ctx.duty_slot.label()
    filled = 0

    for i, payload in enumerate(payloads):
        eligible, level = climb_ladder(state, rules, ctx, role, ladder)
        if level is None:
            result.violations.append(
                Violation(
                    id=f"NO_ELIGIBLE_{role.upper()}",
                    message=f"{label}: No eligible faculty for {role} duty {i + 1}",
                    day=ctx.day,
                    slot=ctx.slot,
                    role=role,
                    duty_index=i,
                )
            )
            continue

        chosen = select_faculty(eligible, role, state.counts, state.unavailable_days)
        state.record(
            Assignment(
                day=ctx.day,
                slot=ctx.slot,
                faculty_id=chosen.faculty_id,
                role=role,
                **payload,
            )
        )
        ctx.in_slot.add(chosen.faculty_id)
        filled += 1

        # Only the regular ladder lifts a rule on its last rung; the other
        # roles never reach this warning in practice.
        if len(ladder) > 1 and level == len(ladder) - 1:
            result.add_warning(
                AllocationWarning(
                    kind="LAST_RESORT",
                    message=(
                        f"{label}: {role} duty {i + 1} assigned to "
                        f"{chosen.faculty_id} only after allowing back-to-back duties"
                    ),
                    day=ctx.day,
                    slot=ctx.slot,
                    role=role,
                    faculty_id=chosen.faculty_id,
                )
            )
    return filled
