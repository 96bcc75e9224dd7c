from __future__ import annotations

from invigilation.allocation.rooms import chunk_rooms, regular_room_order


def test_chunk_rooms_front_loads_remainder():
    rooms = ["A", "B", "C", "D", "E"]
    assert chunk_rooms(rooms, 2) == [["A", "B", "C"], ["D", "E"]]
    assert chunk_rooms(rooms, 3) == [["A", "B"], ["C", "D"], ["E"]]


def test_chunk_rooms_covers_every_room_exactly_once():
    rooms = [f"R{i}" for i in range(11)]
    for people in range(1, 15):
        groups = chunk_rooms(rooms, people)
        assert len(groups) == people
        assert [r for g in groups for r in g] == rooms
        sizes = [len(g) for g in groups]
        assert max(sizes) - min(sizes) <= 1


def test_chunk_rooms_edge_cases():
    assert chunk_rooms(["A"], 0) == []
    assert chunk_rooms([], 3) == [[], [], []]
    assert chunk_rooms(["A", "B"], 4) == [["A"], ["B"], [], []]


def test_regular_room_order_is_sorted():
    assert regular_room_order(["B2", "A1", "A10"]) == ["A1", "A10", "B2"]
