from __future__ import annotations

from typing import Any, Protocol

import pandas as pd

from invigilation.models import ROLES

ASSIGNMENT_COLUMNS = ["day", "slot", "faculty_id", "role", "room_number", "rooms"]
OVERVIEW_COLUMNS = [
    "faculty_id",
    "name",
    "designation",
    "regular",
    "reliever",
    "squad",
    "buffer",
    "total",
]
VIOLATION_COLUMNS = ["id", "day", "slot", "role", "duty_index", "message"]


class ResultAdapter(Protocol):
    """Minimal interface the Reporter needs to work with any allocation result."""

    def success(self, res: Any) -> bool: ...
    def errors(self, res: Any) -> list[str]: ...
    def warnings(self, res: Any) -> list[str]: ...

    def df_assignments(self, res: Any) -> pd.DataFrame: ...
    def df_overview(self, res: Any) -> pd.DataFrame: ...
    def df_violations(self, res: Any) -> pd.DataFrame: ...
    def df_incomplete(self, res: Any) -> pd.DataFrame: ...


class PandasResultAdapter:
    """Default adapter for the shipped AssignmentResult dataclass."""

    def success(self, res: Any) -> bool:
        return bool(getattr(res, "success", False))

    def errors(self, res: Any) -> list[str]:
        return list(getattr(res, "errors", []) or [])

    def warnings(self, res: Any) -> list[str]:
        return list(getattr(res, "warnings", []) or [])

    def df_assignments(self, res: Any) -> pd.DataFrame:
        rows = [
            {
                "day": a.day,
                "slot": a.slot,
                "faculty_id": a.faculty_id,
                "role": a.role,
                "room_number": a.room_number,
                "rooms": ", ".join(a.rooms) if a.rooms else None,
            }
            for a in getattr(res, "assignments", []) or []
        ]
        return pd.DataFrame(rows, columns=ASSIGNMENT_COLUMNS)

    def df_overview(self, res: Any) -> pd.DataFrame:
        rows = [
            {c: getattr(o, c) for c in OVERVIEW_COLUMNS}
            for o in getattr(res, "overview", []) or []
        ]
        return pd.DataFrame(rows, columns=OVERVIEW_COLUMNS)

    def df_violations(self, res: Any) -> pd.DataFrame:
        rows = [
            {c: getattr(v, c) for c in VIOLATION_COLUMNS}
            for v in getattr(res, "violations", []) or []
        ]
        return pd.DataFrame(rows, columns=VIOLATION_COLUMNS)

    def df_incomplete(self, res: Any) -> pd.DataFrame:
        columns = ["day", "slot"] + [
            f"{role}_{kind}" for role in ROLES for kind in ("needed", "assigned")
        ]
        rows = []
        for rec in getattr(res, "incomplete_slots", None) or []:
            row: dict[str, int] = {"day": rec.day, "slot": rec.slot}
            for role in ROLES:
                row[f"{role}_needed"] = int(rec.needed.get(role, 0))
                row[f"{role}_assigned"] = int(rec.assigned.get(role, 0))
            rows.append(row)
        return pd.DataFrame(rows, columns=columns)
