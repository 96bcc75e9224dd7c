from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional


@dataclass
class Config:

    ### OUTPUT ###

    OUTPUT_DIR: Path = Path("outputs")

    # Reporting
    ENABLE_REPORTING: bool = True
    ENABLE_PLOTS: bool = True
    WRITE_PDF_REPORT: bool = True
    EXPORT_CSV: bool = True
    NUM_PRINT_EXAMPLES: int = 6

    # Ask before allocating when the pre-check fails (non-interactive -> Y)
    PROMPT_ON_FAILED_PRECHECK: bool = False

    ### SYNTHETIC DATA ###

    GEN_FACULTY: int = 40
    GEN_DAYS: int = 4
    GEN_MIN_SLOTS_PER_DAY: int = 1
    GEN_MAX_SLOTS_PER_DAY: int = 3
    GEN_UNAVAILABLE_RATE: float = 0.05
    START_DATE: datetime = datetime(2025, 11, 3)  # Monday

    # RANDOM SEED
    SEED: Optional[int] = None

    def __post_init__(self) -> None:
        self.OUTPUT_DIR = Path(self.OUTPUT_DIR)

    def validate(self):
        """
        Validate the Config object has sensible values before allocating.
        """
        if self.NUM_PRINT_EXAMPLES < 0:
            raise ValueError("NUM_PRINT_EXAMPLES must be >= 0.")
        if self.GEN_FACULTY <= 0:
            raise ValueError("GEN_FACULTY must be > 0.")
        if self.GEN_DAYS <= 0:
            raise ValueError("GEN_DAYS must be > 0.")
        if not (1 <= self.GEN_MIN_SLOTS_PER_DAY <= self.GEN_MAX_SLOTS_PER_DAY):
            raise ValueError(
                "Require 1 <= GEN_MIN_SLOTS_PER_DAY <= GEN_MAX_SLOTS_PER_DAY."
            )
        if not (0.0 <= self.GEN_UNAVAILABLE_RATE <= 1.0):
            raise ValueError("GEN_UNAVAILABLE_RATE must be in [0, 1].")
        if self.SEED is not None and not isinstance(self.SEED, int):
            raise ValueError("SEED must be an int or None.")


cfg = Config(
    OUTPUT_DIR=Path("outputs"),
    ENABLE_REPORTING=True,
    ENABLE_PLOTS=True,
    GEN_FACULTY=40,
    GEN_DAYS=4,
    GEN_MIN_SLOTS_PER_DAY=1,
    GEN_MAX_SLOTS_PER_DAY=3,
    GEN_UNAVAILABLE_RATE=0.05,
    SEED=3,
)
