from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from . import hold as holding
from .registry import PlayerRegistry
from .sowing import sow
from .turn_order import TurnOrder
from .types import HoldState, PlayerId, SowingCursor, Store


def _append_log(state: "GameState", msg: str) -> None:
    if state.logs is None:
        state.logs = []
    state.logs.append(msg)


@dataclass
class GameConfig:
    player_ids: List[PlayerId]  # seating order unless new_game gets one
    pit_count: int = 6
    initial_seeds_per_pit: int = 4
    time_limit_seconds: int = 30

    @property
    def total_seeds(self) -> int:
        return len(self.player_ids) * self.pit_count * self.initial_seeds_per_pit


# Frozen end-of-game snapshot; never changes once recorded
@dataclass(frozen=True)
class GameResult:
    winner: PlayerId
    pits: Dict[PlayerId, List[int]]
    stores: Dict[PlayerId, int]
    seating: List[PlayerId]
    turn: int
    elapsed_seconds: float


@dataclass
class GameState:
    cfg: GameConfig
    order: TurnOrder
    registry: PlayerRegistry
    current: PlayerId
    turn_started_at: float
    turn: int = 1
    hold: Optional[HoldState] = None
    cursor: Optional[SowingCursor] = None
    result: Optional[GameResult] = None
    last_trace: List[SowingCursor] = field(default_factory=list)
    logs: List[str] = field(default_factory=list)

    @property
    def winner(self) -> Optional[PlayerId]:
        return None if self.result is None else self.result.winner

    @property
    def is_over(self) -> bool:
        return self.result is not None

    def clone(self) -> "GameState":
        # TurnOrder and GameResult are immutable and can be shared
        return GameState(
            cfg=self.cfg,
            order=self.order,
            registry=self.registry.clone(),
            current=self.current,
            turn_started_at=self.turn_started_at,
            turn=self.turn,
            hold=self.hold,
            cursor=self.cursor,
            result=self.result,
            last_trace=list(self.last_trace),
            logs=list(self.logs),
        )


def _validate_config(cfg: GameConfig, seating: Sequence[PlayerId]) -> None:
    assert cfg.pit_count >= 2, "pit_count must be at least 2"
    assert cfg.initial_seeds_per_pit >= 1, "initial_seeds_per_pit must be at least 1"
    assert cfg.time_limit_seconds >= 1, "time_limit_seconds must be at least 1"
    assert len(cfg.player_ids) >= 2, "At least two players are required"
    assert len(set(cfg.player_ids)) == len(cfg.player_ids), "Player ids must be unique"
    assert sorted(seating) == sorted(cfg.player_ids), "Seating must list every player exactly once"


def new_game(cfg: GameConfig, now: float, seating: Optional[Sequence[PlayerId]] = None) -> GameState:
    seats = list(cfg.player_ids if seating is None else seating)
    _validate_config(cfg, seats)
    order = TurnOrder(seats)
    state = GameState(
        cfg=cfg,
        order=order,
        registry=PlayerRegistry(seats, cfg.pit_count, cfg.initial_seeds_per_pit),
        current=seats[0],
        turn_started_at=now,
    )
    _append_log(state, f"SEATING: {', '.join(seats)}")
    return state


def restart(state: GameState, now: float, seating: Optional[Sequence[PlayerId]] = None) -> GameState:
    return new_game(state.cfg, now, state.order.players if seating is None else seating)


def total_seeds(state: GameState) -> int:
    in_hand = 0 if state.hold is None else state.hold.seeds
    return state.registry.total_seeds() + in_hand


def _check_seeds(state: GameState) -> None:
    assert total_seeds(state) == state.cfg.total_seeds, (
        f"Seed count drifted: {total_seeds(state)} != {state.cfg.total_seeds}"
    )


def remaining_seconds(state: GameState, now: float) -> float:
    return max(0.0, state.cfg.time_limit_seconds - (now - state.turn_started_at))


def _accepts_action(state: GameState, player_id: PlayerId) -> bool:
    return not state.is_over and player_id == state.current


def select_pit(state: GameState, player_id: PlayerId, pit: int) -> GameState:
    if not _accepts_action(state, player_id):
        return state
    nxt = state.clone()
    held = holding.select_pit(nxt.registry, nxt.hold, player_id, pit)
    if held is nxt.hold:
        return state
    nxt.hold = held
    _append_log(nxt, f"SELECT: {player_id} pit {held.pit} ({held.seeds})")
    return nxt


# --- Turn resolution ---

def _finish_turn(state: GameState, now: float) -> None:
    state.hold = None
    state.cursor = None
    state.turn_started_at = now


def _handoff(state: GameState, now: float, reason: str) -> None:
    prev = state.current
    nxt = state.order.successor_of(prev)
    assert nxt in state.order, f"No successor for {prev}"
    state.current = nxt
    state.turn += 1
    _finish_turn(state, now)
    _append_log(state, f"{reason}: {prev} -> {nxt}")


def _declare_winner(state: GameState, now: float) -> None:
    reg = state.registry
    seating = state.order.players
    state.result = GameResult(
        winner=state.current,
        pits={pid: list(reg.pits(pid)) for pid in seating},
        stores={pid: reg.store(pid) for pid in seating},
        seating=seating,
        turn=state.turn,
        elapsed_seconds=now - state.turn_started_at,
    )
    state.hold = None
    state.cursor = None
    _append_log(state, f"WINNER: {state.current}")


def resolve_turn(state: GameState, now: float) -> None:
    """
    Decide what happens after a sowing pass, in place on `state`:
    win if the sower's row is empty, otherwise multi-lap when the last seed
    landed in the sower's store, otherwise hand the turn to the successor.
    """
    assert state.cursor is not None, "No sowing to resolve"
    if state.registry.row_empty(state.current):
        _declare_winner(state, now)
        return
    if isinstance(state.cursor.hole, Store):
        # Stores are only entered by their owner, so this is always the sower's
        assert state.cursor.holder == state.current
        _finish_turn(state, now)
        _append_log(state, f"MULTI_LAP: {state.current}")
        return
    _handoff(state, now, "HANDOFF")


def commit_sowing(state: GameState, player_id: PlayerId, now: float) -> GameState:
    if not _accepts_action(state, player_id) or state.hold is None:
        return state
    nxt = state.clone()
    held = nxt.hold
    assert held is not None
    res = sow(nxt.registry, nxt.order, player_id, held)
    nxt.registry = res.registry
    nxt.hold = None
    nxt.cursor = res.cursor
    nxt.last_trace = res.trace
    _append_log(nxt, f"SOW: {player_id} pit {held.pit} ({held.seeds}) -> {res.cursor}")
    resolve_turn(nxt, now)
    _check_seeds(nxt)
    return nxt


def tick(state: GameState, now: float) -> GameState:
    """
    Time sample. Once the turn player's time is used up the turn passes on,
    whether or not a pit is being held. Held seeds go back to their pit.
    """
    if state.is_over or remaining_seconds(state, now) > 0:
        return state
    nxt = state.clone()
    holding.release_hold(nxt.registry, nxt.hold, nxt.current)
    _handoff(nxt, now, "TIMEOUT")
    _check_seeds(nxt)
    return nxt


# --- Projection for renderers ---

def _cursor_to_obj(cursor: Optional[SowingCursor]) -> Optional[Dict[str, object]]:
    if cursor is None:
        return None
    if isinstance(cursor.hole, Store):
        return {"playerId": cursor.holder, "hole": "store"}
    return {"playerId": cursor.holder, "hole": "pit", "pit": int(cursor.hole.n)}


def to_json(state: GameState, viewer_id: Optional[PlayerId] = None, now: Optional[float] = None) -> Dict[str, object]:
    cfg_obj: Dict[str, object] = {
        "pitCount": int(state.cfg.pit_count),
        "initialSeedsPerPit": int(state.cfg.initial_seeds_per_pit),
        "timeLimitSeconds": int(state.cfg.time_limit_seconds),
    }

    # Players ordered around the table starting from the viewer
    start = viewer_id if viewer_id in state.order else state.order.players[0]
    players_obj: List[Dict[str, object]] = []
    for pid in state.order.seating_from(start):
        players_obj.append({
            "id": pid,
            "pits": [int(s) for s in state.registry.pits(pid)],
            "store": int(state.registry.store(pid)),
        })

    hold_obj: Optional[Dict[str, object]] = None
    if state.hold is not None:
        hold_obj = {"pit": int(state.hold.pit), "seeds": int(state.hold.seeds)}

    result_obj: Optional[Dict[str, object]] = None
    if state.result is not None:
        res = state.result
        result_obj = {
            "winner": res.winner,
            "seating": list(res.seating),
            "pits": {pid: list(p) for pid, p in res.pits.items()},
            "stores": dict(res.stores),
            "turn": int(res.turn),
            "elapsedSeconds": float(res.elapsed_seconds),
        }

    data: Dict[str, object] = {
        "schemaVersion": 1,
        "config": cfg_obj,
        "viewerId": start,
        "players": players_obj,
        "currentPlayerId": state.current,
        "turn": int(state.turn),
        "hold": hold_obj,
        "cursor": _cursor_to_obj(state.cursor),
        "lastTrace": [_cursor_to_obj(c) for c in state.last_trace],
        "winner": state.winner,
        "result": result_obj,
        "logs": list(state.logs),
    }
    if now is not None:
        data["remainingSeconds"] = float(remaining_seconds(state, now))
    return data
