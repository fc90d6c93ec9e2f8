import pytest

from mancala import TurnOrder, UNKNOWN_PLAYER


def test_successor_wraps_last_to_first():
    order = TurnOrder(["A", "B", "C"])
    assert order.successor_of("A") == "B"
    assert order.successor_of("B") == "C"
    assert order.successor_of("C") == "A"


def test_unknown_player_gets_sentinel():
    order = TurnOrder(["A", "B"])
    assert order.successor_of("Z") == UNKNOWN_PLAYER
    assert "Z" not in order


def test_seating_from_visits_everyone_once_and_is_restartable():
    order = TurnOrder(["A", "B", "C", "D"])
    seats = order.seating_from("C")
    assert list(seats) == ["C", "D", "A", "B"]
    # Iterating again walks the table from the same seat
    assert list(seats) == ["C", "D", "A", "B"]


def test_seating_from_unknown_start_is_empty():
    order = TurnOrder(["A", "B"])
    assert list(order.seating_from("Z")) == []


def test_cyclic_completeness_from_every_player():
    ids = ["p0", "p1", "p2", "p3", "p4"]
    order = TurnOrder(ids)
    for start in ids:
        assert sorted(order.seating_from(start)) == sorted(ids)
        pid = start
        for _ in range(len(order)):
            pid = order.successor_of(pid)
        assert pid == start


def test_rejects_duplicates_and_single_player():
    with pytest.raises(ValueError):
        TurnOrder(["A", "A"])
    with pytest.raises(ValueError):
        TurnOrder(["A"])
