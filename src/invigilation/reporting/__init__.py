from __future__ import annotations

from .adapters import PandasResultAdapter, ResultAdapter
from .data_models import FillMetrics, RoleFill, TargetGap
from .reporter import Reporter

__all__ = [
    "Reporter",
    "ResultAdapter",
    "PandasResultAdapter",
    "FillMetrics",
    "RoleFill",
    "TargetGap",
]
