from .allocation import allocate, assign_duties
from .config import Config, cfg
from .input_data import InputData, build_input
from .main import run_allocation
from .models import (
    Assignment,
    AssignmentResult,
    DutySlot,
    ExamStructure,
    Faculty,
    UnavailableFaculty,
)

__all__ = [
    "Config",
    "cfg",
    "InputData",
    "build_input",
    "allocate",
    "assign_duties",
    "run_allocation",
    "Assignment",
    "AssignmentResult",
    "DutySlot",
    "ExamStructure",
    "Faculty",
    "UnavailableFaculty",
]
