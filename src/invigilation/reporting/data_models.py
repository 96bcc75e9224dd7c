from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RoleFill:
    """Demand vs filled units for one role across the whole schedule."""

    role: str
    needed: int
    assigned: int

    @property
    def unfilled(self) -> int:
        return max(self.needed - self.assigned, 0)

    @property
    def fill_rate(self) -> float:
        return self.assigned / self.needed if self.needed else 1.0


@dataclass(frozen=True)
class FillMetrics:
    """Key coverage metrics summarising assigned vs demanded duty units."""

    total_needed: int
    total_assigned: int
    skipped_slots: int  # room mismatches
    incomplete_slots: int
    per_role: dict[str, RoleFill]


@dataclass(frozen=True)
class TargetGap:
    """Target shortfall/overshoot for a single faculty member and role."""

    faculty_id: str
    role: str
    target: int
    assigned: int

    @property
    def gap(self) -> int:
        return self.assigned - self.target
