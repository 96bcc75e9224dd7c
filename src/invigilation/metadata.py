# invigilation/metadata.py
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from invigilation.models import (
    AssignmentResult,
    DutySlot,
    ExamStructure,
    Faculty,
    UnavailableFaculty,
    sort_faculty,
)


@dataclass
class ImportedMetadata:
    faculty: list[Faculty]
    structure: ExamStructure
    unavailability: list[UnavailableFaculty]
    warnings: list[str] = field(default_factory=list)


def _to_int(value: Any, field_name: str, default: Optional[int] = None) -> int:
    if value in (None, ""):
        if default is not None:
            return default
        raise ValueError(f"Entry missing '{field_name}'.")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid integer for '{field_name}': {value!r}") from exc


def _count_map(raw: Any) -> dict[str, int]:
    if not isinstance(raw, Mapping):
        return {}
    return {str(k): _to_int(v, str(k), default=0) for k, v in raw.items()}


def _flag_map(raw: Any) -> dict[str, bool]:
    if not isinstance(raw, Mapping):
        return {}
    return {str(k): bool(v) for k, v in raw.items()}


def _slot_from_dict(raw: Mapping[str, Any]) -> DutySlot:
    rooms = raw.get("rooms") or []
    if isinstance(rooms, (str, bytes)) or not isinstance(rooms, Sequence):
        raise TypeError("Slot 'rooms' must be a list of room identifiers.")
    if raw.get("date") in (None, ""):
        raise ValueError(
            f"Slot day={raw.get('day')} slot={raw.get('slot')} is missing 'date'."
        )
    return DutySlot(
        day=_to_int(raw.get("day"), "day"),
        slot=_to_int(raw.get("slot"), "slot"),
        date=raw["date"],
        start_time=str(raw.get("startTime") or raw.get("start") or ""),
        end_time=str(raw.get("endTime") or raw.get("end") or ""),
        rooms=[str(r) for r in rooms],
        regular_duties=_to_int(
            raw.get("regularDuties", raw.get("regular")), "regularDuties", default=0
        ),
        reliever_duties=_to_int(raw.get("relieverDuties"), "relieverDuties", 0),
        squad_duties=_to_int(raw.get("squadDuties"), "squadDuties", 0),
        buffer_duties=_to_int(raw.get("bufferDuties"), "bufferDuties", 0),
    )


def _faculty_from_dicts(
    entries: Sequence[Any], warnings: list[str]
) -> list[Faculty]:
    faculty: list[Faculty] = []
    seen: set[str] = set()
    for idx, raw in enumerate(entries):
        if not isinstance(raw, Mapping):
            raise TypeError("Each faculty entry must be an object/dict.")
        fid = str(raw.get("facultyId") or raw.get("id") or "").strip()
        if not fid:
            warnings.append(f"Faculty entry {idx + 1}: missing faculty ID")
            continue
        if fid in seen:
            warnings.append(f"Faculty entry {idx + 1}: duplicate faculty ID {fid}")
            continue
        seen.add(fid)
        faculty.append(
            Faculty(
                faculty_id=fid,
                name=str(raw.get("facultyName") or raw.get("name") or "").strip(),
                designation=str(raw.get("designation") or "").strip(),
                department=str(raw.get("department") or "").strip(),
                phone=str(raw.get("phoneNo") or raw.get("phone") or "").strip(),
                s_no=_to_int(raw.get("sNo"), "sNo", default=idx + 1),
            )
        )
    return sort_faculty(faculty)


def metadata_from_dict(obj: Mapping[str, Any]) -> ImportedMetadata:
    """
    Build roster, schedule and unavailability from a metadata object with
    `slots`, `faculty`, `unavailable` and the `designation*` maps.
    """
    if not isinstance(obj, Mapping):
        raise TypeError("Metadata must be a JSON object.")

    warnings: list[str] = []
    raw_slots = obj.get("slots") or obj.get("dutySlots") or []
    slots = [_slot_from_dict(s) for s in raw_slots]
    structure = ExamStructure(
        duty_slots=slots,
        designation_duty_counts=_count_map(obj.get("designationDutyCounts")),
        designation_reliever_counts=_count_map(obj.get("designationRelieverCounts")),
        designation_squad_counts=_count_map(obj.get("designationSquadCounts")),
        designation_buffer_eligibility=_flag_map(
            obj.get("designationBufferEligibility")
        ),
    )

    raw_faculty = obj.get("faculty") or obj.get("facultyList") or []
    faculty = _faculty_from_dicts(raw_faculty, warnings)

    unavailability: list[UnavailableFaculty] = []
    for u in obj.get("unavailable") or []:
        if not isinstance(u, Mapping):
            raise TypeError("Each unavailability entry must be an object/dict.")
        fid = str(u.get("facultyId") or u.get("id") or "").strip()
        if not fid or not u.get("date"):
            warnings.append(f"Skipping unavailability entry {dict(u)!r}")
            continue
        unavailability.append(UnavailableFaculty(faculty_id=fid, date=u["date"]))

    return ImportedMetadata(
        faculty=faculty,
        structure=structure,
        unavailability=unavailability,
        warnings=warnings,
    )


def metadata_from_json(path: str | Path) -> ImportedMetadata:
    """Load a metadata .json file from disk."""
    file_path = Path(path).expanduser()
    if file_path.suffix.lower() != ".json":
        raise ValueError("metadata_from_json expects a path to a .json file.")
    if not file_path.exists():
        raise FileNotFoundError(f"Metadata JSON file not found: {file_path}")
    try:
        data = json.loads(file_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {file_path}") from exc
    return metadata_from_dict(data)


def metadata_to_dict(
    faculty: Sequence[Faculty],
    structure: ExamStructure,
    unavailability: Sequence[UnavailableFaculty],
    *,
    generated_at: Optional[datetime] = None,
) -> dict[str, Any]:
    stamp = generated_at or datetime.now()
    return {
        "type": "metadata",
        "generatedAt": stamp.isoformat(),
        "slots": [
            {
                "day": s.day,
                "slot": s.slot,
                "date": s.iso_date,
                "startTime": s.start_time,
                "endTime": s.end_time,
                "rooms": list(s.rooms),
                "regularDuties": s.regular_duties,
                "relieverDuties": s.reliever_duties,
                "squadDuties": s.squad_duties,
                "bufferDuties": s.buffer_duties,
            }
            for s in structure.sorted_slots()
        ],
        "designationDutyCounts": dict(structure.designation_duty_counts),
        "designationRelieverCounts": dict(structure.designation_reliever_counts),
        "designationSquadCounts": dict(structure.designation_squad_counts),
        "designationBufferEligibility": dict(
            structure.designation_buffer_eligibility
        ),
        "unavailable": [
            {"facultyId": u.faculty_id, "date": u.date} for u in unavailability
        ],
        "faculty": [
            {
                "sNo": f.s_no,
                "facultyId": f.faculty_id,
                "facultyName": f.name,
                "designation": f.designation,
                "department": f.department,
                "phoneNo": f.phone,
            }
            for f in faculty
        ],
    }


def assignments_to_records(
    result: AssignmentResult, structure: ExamStructure
) -> list[dict[str, Any]]:
    """Flatten assignments into the assignment.json record shape."""
    slots = {(s.day, s.slot): s for s in structure.duty_slots}
    records: list[dict[str, Any]] = []
    for a in result.assignments:
        s = slots.get((a.day, a.slot))
        time = f"{s.start_time} - {s.end_time}" if s and s.start_time else None
        records.append(
            {
                "day": a.day,
                "slot": a.slot,
                "date": s.iso_date if s else None,
                "time": time,
                "facultyId": a.faculty_id,
                "role": a.role,
                "roomNumber": a.room_number,
                "rooms": list(a.rooms) if a.rooms is not None else None,
            }
        )
    return records


def write_assignments_json(
    path: str | Path, result: AssignmentResult, structure: ExamStructure
) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(assignments_to_records(result, structure), indent=2))
    return out
