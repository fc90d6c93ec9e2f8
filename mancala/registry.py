from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .types import Hole, PlayerId, Store


@dataclass
class PlayerInfo:
    pits: List[int] = field(default_factory=list)
    store: int = 0

    def clone(self) -> "PlayerInfo":
        return PlayerInfo(pits=list(self.pits), store=self.store)

    def seeds_on_board(self) -> int:
        return sum(self.pits) + self.store


class PlayerRegistry:
    def __init__(self, player_ids: Iterable[PlayerId], pit_count: int, seeds_per_pit: int) -> None:
        self.pit_count: int = pit_count
        self.players: Dict[PlayerId, PlayerInfo] = {
            pid: PlayerInfo(pits=[seeds_per_pit] * pit_count, store=0) for pid in player_ids
        }

    def clone(self) -> "PlayerRegistry":
        reg = PlayerRegistry([], self.pit_count, 0)
        reg.players = {pid: info.clone() for pid, info in self.players.items()}
        return reg

    def __contains__(self, player_id: object) -> bool:
        return player_id in self.players

    def pits(self, player_id: PlayerId) -> List[int]:
        return self.players[player_id].pits

    def store(self, player_id: PlayerId) -> int:
        return self.players[player_id].store

    def valid_pit(self, pit: int) -> bool:
        return 0 <= pit < self.pit_count

    def take(self, player_id: PlayerId, pit: int) -> int:
        # Empties the pit and returns how many seeds it held
        row = self.players[player_id].pits
        seeds = row[pit]
        row[pit] = 0
        return seeds

    def put_back(self, player_id: PlayerId, pit: int, seeds: int) -> None:
        self.players[player_id].pits[pit] += seeds

    def deposit(self, player_id: PlayerId, hole: Hole) -> None:
        info = self.players[player_id]
        if isinstance(hole, Store):
            info.store += 1
        else:
            info.pits[hole.n] += 1

    def row_empty(self, player_id: PlayerId) -> bool:
        return all(s == 0 for s in self.players[player_id].pits)

    def total_seeds(self) -> int:
        return sum(info.seeds_on_board() for info in self.players.values())
