from .types import PlayerId, Pit, Store, STORE, Hole, HoldState, SowingCursor, UNKNOWN_PLAYER
from .registry import PlayerInfo, PlayerRegistry
from .turn_order import TurnOrder
from .sowing import SowResult, next_hole, sow
from .core import (
    GameConfig,
    GameResult,
    GameState,
    new_game,
    restart,
    select_pit,
    commit_sowing,
    resolve_turn,
    tick,
    remaining_seconds,
    total_seeds,
    to_json,
)

__all__ = [
    "PlayerId",
    "Pit",
    "Store",
    "STORE",
    "Hole",
    "HoldState",
    "SowingCursor",
    "UNKNOWN_PLAYER",
    "PlayerInfo",
    "PlayerRegistry",
    "TurnOrder",
    "SowResult",
    "next_hole",
    "sow",
    "GameConfig",
    "GameResult",
    "GameState",
    "new_game",
    "restart",
    "select_pit",
    "commit_sowing",
    "resolve_turn",
    "tick",
    "remaining_seconds",
    "total_seeds",
    "to_json",
]
