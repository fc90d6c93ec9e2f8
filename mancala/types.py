from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union

PlayerId: TypeAlias = str

# Returned by successor lookups for an id that was never seated
UNKNOWN_PLAYER: PlayerId = "?"


@dataclass(frozen=True)
class Pit:
    n: int  # 0-based pit index

    def __str__(self) -> str:
        return f"pit {self.n}"


@dataclass(frozen=True)
class Store:
    def __str__(self) -> str:
        return "store"


STORE = Store()

Hole = Union[Pit, Store]


# Seeds currently "in hand" for the turn player
@dataclass(frozen=True)
class HoldState:
    pit: int
    seeds: int


# Last hole sown into and whose board it belongs to
@dataclass(frozen=True)
class SowingCursor:
    holder: PlayerId
    hole: Hole

    def __str__(self) -> str:
        return f"{self.holder} {self.hole}"
