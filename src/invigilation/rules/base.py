# src/invigilation/rules/base.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, Type

if TYPE_CHECKING:
    from invigilation.models import (
        DutySlot,
        ExamStructure,
        Faculty,
        FacultyDutyCount,
        Role,
    )

from invigilation.models import ROLES


class AllocationStateProto(Protocol):
    structure: ExamStructure
    counts: dict[str, FacultyDutyCount]

    def regular_slots_on(self, faculty_id: str, day: int) -> set[int]: ...


@dataclass(frozen=True)
class Relaxation:
    """One rung of a relaxation ladder."""

    allow_consecutive: bool = False
    allow_target_overflow: bool = False
    allow_multiple_per_day: bool = False


@dataclass
class SlotContext:
    """Per-slot view handed to every rule while a slot is being filled."""

    duty_slot: DutySlot
    available: list[Faculty]
    in_slot: set[str] = field(default_factory=set)

    @property
    def day(self) -> int:
        return self.duty_slot.day

    @property
    def slot(self) -> int:
        return self.duty_slot.slot


@dataclass
class RuleSpec:
    cls: Type["Rule"]
    order: int | None = None
    enabled: bool = True
    settings: dict[str, Any] = field(default_factory=dict)


class Rule(ABC):
    """
    An eligibility filter. Hard rules always apply; relaxable rules can be
    switched off by a Relaxation and only bite while `remaining_pool > 0`
    when `guards_pool` is set.
    """

    order: int = 100
    enabled: bool = True
    name: str = "Rule"
    roles: tuple[Role, ...] = ROLES
    hard: bool = False
    guards_pool: bool = False

    def __init__(self, state: AllocationStateProto, **settings: Any) -> None:
        self.state: AllocationStateProto = state
        self._settings: dict[str, Any] = settings

    def applies_to(self, role: Role) -> bool:
        return role in self.roles

    def relaxed_by(self, relax: Relaxation) -> bool:
        """True when this rung switches the rule off."""
        return False

    def active(self, role: Role, relax: Relaxation, remaining_pool: int) -> bool:
        if not self.enabled or not self.applies_to(role):
            return False
        if self.hard:
            return True
        if self.relaxed_by(relax):
            return False
        if self.guards_pool and remaining_pool <= 0:
            return False
        return True

    @abstractmethod
    def excludes(self, member: Faculty, ctx: SlotContext, role: Role) -> bool: ...

    # Helper for subclasses to read optional settings
    def setting(self, key: str, default: Any) -> Any:
        return self._settings.get(key, default)
