from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .registry import PlayerRegistry
from .turn_order import TurnOrder
from .types import HoldState, Pit, PlayerId, STORE, SowingCursor, Store, UNKNOWN_PLAYER


@dataclass
class SowResult:
    registry: PlayerRegistry
    cursor: SowingCursor
    # One entry per deposited seed, in order (for animation/diagnostics)
    trace: List[SowingCursor] = field(default_factory=list)


def next_hole(order: TurnOrder, turn_player: PlayerId, prev: SowingCursor, pit_count: int) -> SowingCursor:
    owner = prev.holder
    hole = prev.hole
    if isinstance(hole, Store):
        nxt = order.successor_of(owner)
        assert nxt != UNKNOWN_PLAYER, f"Unknown player in turn order: {owner}"
        return SowingCursor(holder=nxt, hole=Pit(0))
    if hole.n + 1 < pit_count:
        return SowingCursor(holder=owner, hole=Pit(hole.n + 1))
    # End of a row: only the sower's own store is ever entered
    if owner == turn_player:
        return SowingCursor(holder=owner, hole=STORE)
    nxt = order.successor_of(owner)
    assert nxt != UNKNOWN_PLAYER, f"Unknown player in turn order: {owner}"
    return SowingCursor(holder=nxt, hole=Pit(0))


def _skipped(cursor: SowingCursor, turn_player: PlayerId, source_pit: int) -> bool:
    return cursor.holder == turn_player and cursor.hole == Pit(source_pit)


def sow(registry: PlayerRegistry, order: TurnOrder, turn_player: PlayerId, hold: HoldState) -> SowResult:
    """
    Distribute the held seeds one by one starting after the held pit.

    The source pit is passed over every time the walk reaches it, so it is
    still empty when the pass ends. Works on a copy; `registry` is untouched.
    """
    assert hold.seeds > 0, "Nothing in hand to sow"
    board = registry.clone()
    cursor = SowingCursor(holder=turn_player, hole=Pit(hold.pit))
    trace: List[SowingCursor] = []
    in_hand = hold.seeds
    while in_hand > 0:
        cursor = next_hole(order, turn_player, cursor, board.pit_count)
        if _skipped(cursor, turn_player, hold.pit):
            continue
        board.deposit(cursor.holder, cursor.hole)
        in_hand -= 1
        trace.append(cursor)
    return SowResult(registry=board, cursor=cursor, trace=trace)
