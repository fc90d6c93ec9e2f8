from mancala import (
    HoldState,
    Pit,
    PlayerRegistry,
    STORE,
    SowingCursor,
    TurnOrder,
    next_hole,
    sow,
)


def _registry(rows, pit_count):
    reg = PlayerRegistry(list(rows), pit_count, 0)
    for pid, pits in rows.items():
        reg.players[pid].pits = list(pits)
    return reg


def test_next_hole_walks_own_row_then_store():
    order = TurnOrder(["A", "B"])
    assert next_hole(order, "A", SowingCursor("A", Pit(0)), 3) == SowingCursor("A", Pit(1))
    assert next_hole(order, "A", SowingCursor("A", Pit(2)), 3) == SowingCursor("A", STORE)
    assert next_hole(order, "A", SowingCursor("A", STORE), 3) == SowingCursor("B", Pit(0))


def test_next_hole_passes_other_players_stores():
    order = TurnOrder(["A", "B", "C"])
    assert next_hole(order, "A", SowingCursor("B", Pit(2)), 3) == SowingCursor("C", Pit(0))
    assert next_hole(order, "A", SowingCursor("C", Pit(2)), 3) == SowingCursor("A", Pit(0))


def test_four_seeds_from_first_pit():
    order = TurnOrder(["A", "B"])
    reg = _registry({"A": [0, 4, 4], "B": [4, 4, 4]}, 3)
    res = sow(reg, order, "A", HoldState(pit=0, seeds=4))
    assert res.registry.pits("A") == [0, 5, 5]
    assert res.registry.store("A") == 1
    assert res.registry.pits("B") == [5, 4, 4]
    assert res.cursor == SowingCursor("B", Pit(0))
    assert [str(c) for c in res.trace] == ["A pit 1", "A pit 2", "A store", "B pit 0"]
    # Works on a copy
    assert reg.pits("A") == [0, 4, 4]
    assert reg.store("A") == 0


def test_source_pit_is_skipped_on_wrap():
    order = TurnOrder(["A", "B"])
    reg = _registry({"A": [0, 0, 0], "B": [0, 0, 0]}, 3)
    # Seventh seed would land back on A pit 0
    res = sow(reg, order, "A", HoldState(pit=0, seeds=7))
    assert res.registry.pits("A") == [0, 2, 1]
    assert res.registry.store("A") == 1
    assert res.registry.pits("B") == [1, 1, 1]
    assert res.cursor == SowingCursor("A", Pit(1))


def test_long_sow_never_refills_source_pit():
    order = TurnOrder(["A", "B"])
    reg = _registry({"A": [0, 0, 0], "B": [0, 0, 0]}, 3)
    for seeds in range(3, 40):
        res = sow(reg, order, "A", HoldState(pit=0, seeds=seeds))
        assert res.registry.pits("A")[0] == 0
        assert res.registry.total_seeds() == seeds
        assert len(res.trace) == seeds
        assert all(c != SowingCursor("A", Pit(0)) for c in res.trace)


def test_ten_seeds_two_laps():
    order = TurnOrder(["A", "B"])
    reg = _registry({"A": [0, 0, 0], "B": [0, 0, 0]}, 3)
    res = sow(reg, order, "A", HoldState(pit=0, seeds=10))
    assert res.registry.pits("A") == [0, 2, 2]
    assert res.registry.store("A") == 2
    assert res.registry.pits("B") == [2, 1, 1]
    assert res.registry.store("B") == 0
    assert res.cursor == SowingCursor("B", Pit(0))


def test_three_players_only_sower_store_receives():
    order = TurnOrder(["A", "B", "C"])
    reg = _registry({"A": [1, 0], "B": [1, 1], "C": [1, 1]}, 2)
    res = sow(reg, order, "A", HoldState(pit=1, seeds=5))
    assert res.registry.store("A") == 1
    assert res.registry.store("B") == 0
    assert res.registry.store("C") == 0
    assert res.registry.pits("B") == [2, 2]
    assert res.registry.pits("C") == [2, 2]
    assert res.cursor == SowingCursor("C", Pit(1))
