from dataclasses import dataclass, field

from invigilation.config import Config
from invigilation.generate.structure import (
    StructureGenConfig,
    assign_unavailability,
    create_exam_structure,
    create_faculty,
)
from invigilation.metadata import ImportedMetadata
from invigilation.models import ExamStructure, Faculty, UnavailableFaculty


@dataclass
class InputData:
    faculty: list[Faculty]
    structure: ExamStructure
    unavailability: list[UnavailableFaculty] = field(default_factory=list)

    @classmethod
    def from_metadata(cls, meta: ImportedMetadata) -> "InputData":
        return cls(
            faculty=list(meta.faculty),
            structure=meta.structure,
            unavailability=list(meta.unavailability),
        )


def build_input(cfg: Config, seed: int = 7) -> InputData:
    """
    Build a synthetic InputData object from a Config.

    Parameters:
    cfg (Config): the configuration to use
    seed (int, optional): the random seed to use. Defaults to 7.

    Returns:
    InputData: the generated roster, schedule and unavailability
    """
    gen_cfg = StructureGenConfig(
        n_faculty=cfg.GEN_FACULTY,
        min_days=cfg.GEN_DAYS,
        max_days=cfg.GEN_DAYS,
        min_slots_per_day=cfg.GEN_MIN_SLOTS_PER_DAY,
        max_slots_per_day=cfg.GEN_MAX_SLOTS_PER_DAY,
        unavailable_rate=cfg.GEN_UNAVAILABLE_RATE,
        start_date=cfg.START_DATE.date(),
        seed=seed,
    )
    gen_cfg.validate()

    faculty = create_faculty(gen_cfg)
    structure = create_exam_structure(gen_cfg, faculty)
    unavailability = assign_unavailability(
        faculty, structure, rate=gen_cfg.unavailable_rate, seed=gen_cfg.seed
    )
    return InputData(
        faculty=faculty,
        structure=structure,
        unavailability=unavailability,
    )
