from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Literal, Optional, TypeAlias

Role: TypeAlias = Literal["regular", "reliever", "squad", "buffer"]

ROLES: tuple[Role, ...] = ("regular", "reliever", "squad", "buffer")
TARGET_ROLES: tuple[Role, ...] = ("regular", "reliever", "squad")
COVERAGE_ROLES: tuple[Role, ...] = ("reliever", "squad")


def to_date(value: Any) -> date:
    """Normalise a date, datetime or ISO string to a datetime.date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text[:10]).date()
        except ValueError as exc:
            raise ValueError(f"Invalid ISO date string {value!r}") from exc
    raise TypeError("Dates must be ISO strings or datetime.date/datetime objects.")


@dataclass(slots=True, frozen=True)
class Faculty:
    """
    A faculty member who can take invigilation duties.
    """

    faculty_id: str
    name: str
    designation: str
    department: str = ""
    phone: str = ""
    s_no: int = 0


def faculty_sort_key(member: Faculty) -> tuple[str, str, str]:
    """Canonical order: designation, then name, then id."""
    return (member.designation, member.name, member.faculty_id)


def sort_faculty(faculty: Iterable[Faculty]) -> list[Faculty]:
    return sorted(faculty, key=faculty_sort_key)


@dataclass(slots=True)
class DutySlot:
    """
    One examination sitting at (day, slot), both zero-indexed.
    """

    day: int
    slot: int
    date: date
    start_time: str = ""
    end_time: str = ""
    rooms: list[str] = field(default_factory=list)
    regular_duties: int = 0
    reliever_duties: int = 0
    squad_duties: int = 0
    buffer_duties: int = 0

    def __post_init__(self) -> None:
        self.date = to_date(self.date)
        self.rooms = [str(r) for r in self.rooms]
        for attr in (
            "regular_duties",
            "reliever_duties",
            "squad_duties",
            "buffer_duties",
        ):
            if getattr(self, attr) < 0:
                raise ValueError(f"{attr} must be non-negative.")

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()

    @property
    def has_room_mismatch(self) -> bool:
        return len(self.rooms) != self.regular_duties

    def needed(self, role: Role) -> int:
        return int(getattr(self, f"{role}_duties"))

    def label(self) -> str:
        return f"Day {self.day + 1} Slot {self.slot + 1}"


@dataclass
class ExamStructure:
    """Duty slots plus per-designation quotas for each role."""

    duty_slots: list[DutySlot]
    designation_duty_counts: dict[str, int] = field(default_factory=dict)
    designation_reliever_counts: dict[str, int] = field(default_factory=dict)
    designation_squad_counts: dict[str, int] = field(default_factory=dict)
    designation_buffer_eligibility: dict[str, bool] = field(default_factory=dict)

    @property
    def days(self) -> int:
        if not self.duty_slots:
            return 0
        return max(s.day for s in self.duty_slots) + 1

    def target_for(self, designation: str, role: Role) -> int:
        counts = {
            "regular": self.designation_duty_counts,
            "reliever": self.designation_reliever_counts,
            "squad": self.designation_squad_counts,
        }.get(role)
        if counts is None:
            return 0
        return int(counts.get(designation, 0) or 0)

    def buffer_eligible(self, designation: str) -> bool:
        return bool(self.designation_buffer_eligibility.get(designation, False))

    def sorted_slots(self) -> list[DutySlot]:
        return sorted(self.duty_slots, key=lambda s: (s.day, s.slot))

    def find_slot(self, day: int, slot: int) -> Optional[DutySlot]:
        return next(
            (s for s in self.duty_slots if s.day == day and s.slot == slot), None
        )


@dataclass(slots=True, frozen=True)
class UnavailableFaculty:
    faculty_id: str
    date: str  # ISO YYYY-MM-DD

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", to_date(self.date).isoformat())


@dataclass(slots=True, frozen=True)
class Assignment:
    """
    One duty: regular carries room_number, reliever/squad carry rooms,
    buffer carries neither.
    """

    day: int
    slot: int
    faculty_id: str
    role: Role
    room_number: Optional[str] = None
    rooms: Optional[tuple[str, ...]] = None


@dataclass(slots=True)
class FacultyDutyCount:
    """Running per-role tally for one faculty member during a single run."""

    faculty_id: str
    regular_target: int = 0
    reliever_target: int = 0
    squad_target: int = 0
    regular: int = 0
    reliever: int = 0
    squad: int = 0
    buffer: int = 0

    def count(self, role: Role) -> int:
        return int(getattr(self, role))

    def target(self, role: Role) -> int:
        if role == "buffer":
            return 0
        return int(getattr(self, f"{role}_target"))

    def deficit(self, role: Role) -> int:
        return self.target(role) - self.count(role)

    def below_target(self, role: Role) -> bool:
        return self.count(role) < self.target(role)

    @property
    def total_target_based(self) -> int:
        return self.regular + self.reliever + self.squad

    def increment(self, role: Role) -> None:
        setattr(self, role, self.count(role) + 1)


@dataclass(frozen=True)
class Violation:
    """A duty unit that could not be filled (or a slot that was skipped)."""

    id: str
    message: str
    day: int
    slot: int
    role: Optional[Role] = None
    duty_index: Optional[int] = None


@dataclass(frozen=True)
class AllocationWarning:
    """Structured twin of a warning string."""

    kind: str
    message: str
    day: Optional[int] = None
    slot: Optional[int] = None
    role: Optional[Role] = None
    faculty_id: Optional[str] = None


@dataclass(frozen=True)
class IncompleteSlot:
    day: int
    slot: int
    needed: dict[str, int]
    assigned: dict[str, int]

    def shortfall(self) -> dict[str, int]:
        return {r: max(self.needed[r] - self.assigned.get(r, 0), 0) for r in ROLES}


@dataclass
class FacultyOverview:
    faculty_id: str
    name: str = ""
    designation: str = ""
    regular: int = 0
    reliever: int = 0
    squad: int = 0
    buffer: int = 0
    total: int = 0
    coverage: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class AssignmentResult:
    """Structured output of an allocation run."""

    success: bool
    assignments: list[Assignment] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    violations: list[Violation] = field(default_factory=list)
    incomplete_slots: Optional[list[IncompleteSlot]] = None
    overview: list[FacultyOverview] = field(default_factory=list)
    warning_records: list[AllocationWarning] = field(default_factory=list)

    def add_warning(self, record: AllocationWarning) -> None:
        self.warnings.append(record.message)
        self.warning_records.append(record)
