# tests/conftest.py
from __future__ import annotations

import os
import random
from datetime import date
from pathlib import Path

import numpy as np
import pytest

from invigilation.models import DutySlot, ExamStructure, Faculty


# -----------------------------
# Global, deterministic seeding
# -----------------------------
@pytest.fixture(autouse=True, scope="session")
def _seed_everything() -> None:
    """
    Make tests deterministic across runs. If you need a different seed in a test,
    override locally.
    """
    seed = int(os.environ.get("PYTEST_SEED", "1234"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]


# -----------------------------
# Small allocation fixtures
# -----------------------------
@pytest.fixture
def two_professors() -> list[Faculty]:
    return [
        Faculty("A", "Alice", "Professor"),
        Faculty("B", "Bob", "Professor"),
    ]


@pytest.fixture
def one_slot_structure() -> ExamStructure:
    """One slot, one room, one regular duty; each Professor may take one."""
    return ExamStructure(
        duty_slots=[
            DutySlot(
                day=0, slot=0, date=date(2025, 1, 1), rooms=["R1"], regular_duties=1
            )
        ],
        designation_duty_counts={"Professor": 1},
    )
