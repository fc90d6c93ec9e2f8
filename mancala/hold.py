from __future__ import annotations

from typing import Optional

from .registry import PlayerRegistry
from .types import HoldState, PlayerId


def select_pit(
    registry: PlayerRegistry,
    hold: Optional[HoldState],
    player_id: PlayerId,
    pit: int,
) -> Optional[HoldState]:
    """
    Pick up (or re-pick) a pit for the turn player. Mutates `registry` in place
    and returns the hold that results; rejected picks return `hold` unchanged.
    """
    if not registry.valid_pit(pit):
        return hold
    if hold is not None and hold.pit == pit:
        return hold
    if registry.pits(player_id)[pit] == 0:
        return hold
    # Switching pits: previous seeds go back where they came from first
    release_hold(registry, hold, player_id)
    seeds = registry.take(player_id, pit)
    return HoldState(pit=pit, seeds=seeds)


def release_hold(registry: PlayerRegistry, hold: Optional[HoldState], player_id: PlayerId) -> None:
    if hold is None:
        return
    registry.put_back(player_id, hold.pit, hold.seeds)
