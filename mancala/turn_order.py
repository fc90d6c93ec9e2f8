from __future__ import annotations

from typing import Dict, Iterator, List, Sequence, Tuple

from .types import PlayerId, UNKNOWN_PLAYER


class _Seating:
    # Re-iterable view: every iter() walks the table again from the same seat
    def __init__(self, order: "TurnOrder", start: PlayerId) -> None:
        self._order = order
        self._start = start

    def __iter__(self) -> Iterator[PlayerId]:
        if self._start not in self._order:
            return
        pid = self._start
        for _ in range(len(self._order)):
            yield pid
            pid = self._order.successor_of(pid)


class TurnOrder:
    """Cyclic successor mapping over the seated players.

    Built once from an externally ordered (possibly shuffled) seating list;
    never changes afterwards.
    """

    def __init__(self, seating: Sequence[PlayerId]) -> None:
        ids = list(seating)
        if len(ids) < 2:
            raise ValueError("Turn order needs at least two players")
        if len(set(ids)) != len(ids):
            raise ValueError("Player ids must be unique")
        self._players: Tuple[PlayerId, ...] = tuple(ids)
        self._next: Dict[PlayerId, PlayerId] = {
            pid: ids[(i + 1) % len(ids)] for i, pid in enumerate(ids)
        }

    @property
    def players(self) -> List[PlayerId]:
        return list(self._players)

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._next

    def successor_of(self, player_id: PlayerId) -> PlayerId:
        return self._next.get(player_id, UNKNOWN_PLAYER)

    def seating_from(self, start: PlayerId) -> _Seating:
        return _Seating(self, start)
