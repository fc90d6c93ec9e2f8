from mancala import Pit, PlayerRegistry, STORE


def test_new_registry_fills_every_pit():
    reg = PlayerRegistry(["A", "B"], 5, 3)
    assert reg.pits("A") == [3, 3, 3, 3, 3]
    assert reg.store("B") == 0
    assert reg.total_seeds() == 30


def test_take_deposit_and_put_back():
    reg = PlayerRegistry(["A", "B"], 3, 2)
    assert reg.take("A", 1) == 2
    assert reg.pits("A") == [2, 0, 2]
    reg.deposit("A", STORE)
    reg.deposit("B", Pit(2))
    assert reg.store("A") == 1
    assert reg.pits("B") == [2, 2, 3]
    # Two seeds taken, two deposited
    assert reg.total_seeds() == 12
    reg.put_back("A", 1, 2)
    assert reg.pits("A") == [2, 2, 2]


def test_clone_is_independent():
    reg = PlayerRegistry(["A", "B"], 2, 1)
    copy = reg.clone()
    copy.deposit("A", Pit(0))
    copy.players["B"].pits[1] = 0
    assert reg.pits("A") == [1, 1]
    assert reg.pits("B") == [1, 1]
    assert not reg.row_empty("B")
    copy.players["B"].pits[0] = 0
    assert copy.row_empty("B")
