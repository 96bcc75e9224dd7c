# generate/structure.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from invigilation.models import (
    DutySlot,
    ExamStructure,
    Faculty,
    UnavailableFaculty,
    sort_faculty,
)

# fmt: off
SURNAMES: Tuple[str, ...] = (
    "Rao", "Iyer", "Menon", "Nair", "Sharma", "Verma", "Gupta", "Reddy",
    "Pillai", "Das", "Bose", "Sen", "Kulkarni", "Joshi", "Patil", "Shah",
    "Mehta", "Kapoor", "Singh", "Khan", "Fernandes", "DSouza", "Naidu", "Hegde",
)

START_TIMES = ("9:00 AM", "10:00 AM", "11:00 AM", "12:00 PM",
               "1:00 PM", "2:00 PM", "3:00 PM", "4:00 PM")
END_TIMES = ("12:00 PM", "1:00 PM", "2:00 PM", "3:00 PM",
             "4:00 PM", "5:00 PM", "6:00 PM", "7:00 PM")
# fmt: on
BUILDINGS = ("A", "B", "C", "D", "E")


# ----------------------------
# Configuration container
# ----------------------------
@dataclass(slots=True)
class StructureGenConfig:
    """
    Configuration for generation of a synthetic roster and exam schedule.
    """

    n_faculty: int = 40

    # Designations and their roster share (must sum to 1.0)
    designations: Tuple[str, ...] = (
        "Professor",
        "Associate Professor",
        "Assistant Professor",
    )
    designation_probs: Tuple[float, ...] = (0.15, 0.25, 0.60)

    # Per-designation quotas: designation -> (regular, reliever, squad)
    quotas: dict[str, Tuple[int, int, int]] = field(
        default_factory=lambda: {
            "Professor": (1, 1, 1),
            "Associate Professor": (3, 1, 1),
            "Assistant Professor": (5, 1, 1),
        }
    )
    buffer_eligible: Tuple[str, ...] = ("Assistant Professor",)

    # Schedule shape
    min_days: int = 2
    max_days: int = 6
    min_slots_per_day: int = 1
    max_slots_per_day: int = 4

    # Share of total duty demand per role (must sum to 1.0)
    regular_ratio: float = 0.45
    reliever_ratio: float = 0.20
    squad_ratio: float = 0.20
    buffer_ratio: float = 0.15

    # Fraction of quota capacity the schedule consumes
    load_factor: float = 0.9

    unavailable_rate: float = 0.05
    start_date: date = date(2025, 11, 3)

    # RNG seed
    seed: Optional[int] = 7

    def validate(self) -> None:
        if self.n_faculty <= 0:
            raise ValueError("n_faculty must be > 0.")
        if len(self.designations) != len(self.designation_probs):
            raise ValueError("designations and designation_probs must be same length.")
        if not np.isclose(sum(self.designation_probs), 1.0, atol=1e-9):
            raise ValueError("designation_probs must sum to 1.0")
        if set(self.designations) != set(self.quotas.keys()):
            raise ValueError("quotas must have entries for all designations.")
        ratios = (
            self.regular_ratio,
            self.reliever_ratio,
            self.squad_ratio,
            self.buffer_ratio,
        )
        if any(r < 0 for r in ratios) or not np.isclose(sum(ratios), 1.0, atol=1e-9):
            raise ValueError("role ratios must be non-negative and sum to 1.0")
        if not (1 <= self.min_days <= self.max_days):
            raise ValueError("Require 1 <= min_days <= max_days.")
        if not (1 <= self.min_slots_per_day <= self.max_slots_per_day):
            raise ValueError("Require 1 <= min_slots_per_day <= max_slots_per_day.")
        if not (0.0 < self.load_factor <= 1.0):
            raise ValueError("load_factor must be in (0, 1].")
        if not (0.0 <= self.unavailable_rate <= 1.0):
            raise ValueError("unavailable_rate must be in [0,1].")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("seed must be an int or None.")


# ----------------------------
# Generation helpers
# ----------------------------
def _rng(seed: Optional[int]) -> np.random.Generator:
    return np.random.default_rng(seed) if seed is not None else np.random.default_rng()


def _deterministic_counts(n: int, probs: np.ndarray) -> np.ndarray:
    """
    Turn probabilities into integer counts that sum to n with minimal rounding error.
    """
    expected = probs * n
    floors = np.floor(expected).astype(int)
    shortfall = n - floors.sum()
    if shortfall > 0:
        remainders = expected - floors
        bump_idx = np.argsort(remainders)[::-1][:shortfall]
        floors[bump_idx] += 1
    return floors


def _distribute(
    total: int, slots: int, g: np.random.Generator, min_per_slot: int = 0
) -> np.ndarray:
    """Spread `total` over `slots` with a floor of `min_per_slot` each."""
    out = np.full(slots, min_per_slot, dtype=int)
    remaining = total - min_per_slot * slots
    if remaining > 0:
        picks = g.integers(0, slots, size=remaining)
        np.add.at(out, picks, 1)
    return out


def room_numbers(count: int, day: int, slot: int) -> list[str]:
    building = BUILDINGS[day % len(BUILDINGS)]
    return [f"{building}{slot * 100 + 101 + i}" for i in range(count)]


# ----------------------------
# Core API
# ----------------------------
def create_faculty(cfg: StructureGenConfig) -> list[Faculty]:
    cfg.validate()
    g = _rng(cfg.seed)

    counts = _deterministic_counts(
        cfg.n_faculty, np.array(cfg.designation_probs, dtype=float)
    )
    designations = np.concatenate(
        [np.full(c, i, dtype=int) for i, c in enumerate(counts)]
    )
    g.shuffle(designations)

    faculty: list[Faculty] = []
    for i in range(cfg.n_faculty):
        surname = SURNAMES[i % len(SURNAMES)]
        faculty.append(
            Faculty(
                faculty_id=f"F{i + 1:03d}",
                name=f"{surname} {i // len(SURNAMES) + 1}",
                designation=cfg.designations[int(designations[i])],
                department=("CSE", "ECE", "MECH", "CIVIL")[i % 4],
                phone=f"9{i:09d}",
                s_no=i + 1,
            )
        )
    return sort_faculty(faculty)


def calculate_total_duties(
    faculty: Sequence[Faculty], structure: ExamStructure
) -> int:
    """Summed regular + reliever + squad quota across the roster."""
    return sum(
        structure.target_for(f.designation, role)
        for f in faculty
        for role in ("regular", "reliever", "squad")
    )


def create_exam_structure(
    cfg: StructureGenConfig, faculty: Sequence[Faculty]
) -> ExamStructure:
    """
    Random days x slots schedule whose mandatory demand stays within
    `load_factor` of the roster's summed quota.
    """
    cfg.validate()
    g = _rng(None if cfg.seed is None else cfg.seed + 1)

    structure = ExamStructure(
        duty_slots=[],
        designation_duty_counts={d: q[0] for d, q in cfg.quotas.items()},
        designation_reliever_counts={d: q[1] for d, q in cfg.quotas.items()},
        designation_squad_counts={d: q[2] for d, q in cfg.quotas.items()},
        designation_buffer_eligibility={
            d: d in cfg.buffer_eligible for d in cfg.designations
        },
    )

    n_days = int(g.integers(cfg.min_days, cfg.max_days + 1))
    coords = [
        (d, s)
        for d in range(n_days)
        for s in range(
            int(g.integers(cfg.min_slots_per_day, cfg.max_slots_per_day + 1))
        )
    ]

    mandatory_cap = int(calculate_total_duties(faculty, structure) * cfg.load_factor)
    mandatory_share = cfg.regular_ratio + cfg.reliever_ratio + cfg.squad_ratio
    total = int(mandatory_cap / mandatory_share) if mandatory_share else 0

    targets = {
        "regular": int(total * cfg.regular_ratio),
        "reliever": int(total * cfg.reliever_ratio),
        "squad": int(total * cfg.squad_ratio),
    }
    targets["buffer"] = max(total - sum(targets.values()), 0)
    regular_floor = 1 if targets["regular"] >= len(coords) else 0

    dist = {
        "regular": _distribute(targets["regular"], len(coords), g, regular_floor),
        "reliever": _distribute(targets["reliever"], len(coords), g),
        "squad": _distribute(targets["squad"], len(coords), g),
        "buffer": _distribute(targets["buffer"], len(coords), g),
    }

    for idx, (d, s) in enumerate(coords):
        regular = int(dist["regular"][idx])
        structure.duty_slots.append(
            DutySlot(
                day=d,
                slot=s,
                date=cfg.start_date + timedelta(days=d),
                start_time=START_TIMES[min(s * 2, len(START_TIMES) - 2)],
                end_time=END_TIMES[min(s * 2 + 1, len(END_TIMES) - 1)],
                rooms=room_numbers(regular, d, s),
                regular_duties=regular,
                reliever_duties=int(dist["reliever"][idx]),
                squad_duties=int(dist["squad"][idx]),
                buffer_duties=int(dist["buffer"][idx]),
            )
        )
    return structure


def assign_unavailability(
    faculty: Sequence[Faculty],
    structure: ExamStructure,
    rate: float,
    seed: Optional[int] = 7,
) -> list[UnavailableFaculty]:
    """
    Randomly mark faculty unavailable on exam dates (one entry per date).
    """
    if not (0.0 <= rate <= 1.0):
        raise ValueError("rate must be in [0,1].")
    g = _rng(seed)
    dates = sorted({s.iso_date for s in structure.duty_slots})
    out: list[UnavailableFaculty] = []
    for f in faculty:
        hits = np.where(g.random(len(dates)) < rate)[0]
        out.extend(UnavailableFaculty(f.faculty_id, dates[int(i)]) for i in hits)
    return out


def faculty_to_dataframe(faculty: Sequence[Faculty]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "faculty_id": f.faculty_id,
                "name": f.name,
                "designation": f.designation,
                "department": f.department,
                "phone": f.phone,
            }
            for f in faculty
        ],
        columns=["faculty_id", "name", "designation", "department", "phone"],
    )
