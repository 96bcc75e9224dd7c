from __future__ import annotations

from typing import Sequence


def chunk_rooms(rooms: Sequence[str], people: int) -> list[list[str]]:
    """
    Split `rooms` into `people` contiguous groups whose sizes differ by at
    most one; the first len(rooms) % people groups take the extra room.
    With no rooms every group is empty.
    """
    if people <= 0:
        return []
    if not rooms:
        return [[] for _ in range(people)]

    base, extra = divmod(len(rooms), people)
    groups: list[list[str]] = []
    start = 0
    for i in range(people):
        size = base + (1 if i < extra else 0)
        groups.append(list(rooms[start : start + size]))
        start += size
    return groups


def regular_room_order(rooms: Sequence[str]) -> list[str]:
    """Rooms in the order regular duties take them (ascending by name)."""
    return sorted(rooms)
