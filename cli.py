from __future__ import annotations

from typing import List, Optional
import argparse
import random
import time

from mancala import (
    GameConfig,
    GameState,
    PlayerId,
    new_game,
    restart,
    select_pit,
    commit_sowing,
    tick,
    remaining_seconds,
)


# Defaults for a hot-seat game at one terminal
PLAYERS: List[PlayerId] = ["You", "Friend"]
PIT_COUNT: int = 6
SEEDS_PER_PIT: int = 4
TIME_LIMIT: int = 30


def print_board(state: GameState, viewer: PlayerId, now: float) -> None:
    print()
    for pid in state.order.seating_from(viewer):
        pits = list(state.registry.pits(pid))
        marks: List[str] = []
        for i, seeds in enumerate(pits):
            held = pid == state.current and state.hold is not None and state.hold.pit == i
            marks.append(f"[{seeds:>2}]" if held else f" {seeds:>2} ")
        arrow = "->" if pid == state.current else "  "
        print(f"{arrow} {pid:<10} {''.join(marks)} | store {state.registry.store(pid)}")
    if state.hold is not None:
        print(f"In hand: {state.hold.seeds} from pit {state.hold.pit}")
    print(f"Turn {state.turn}: {state.current} ({remaining_seconds(state, now):.0f}s left)")


def print_new_logs(state: GameState, seen: int) -> int:
    for line in state.logs[seen:]:
        print(line)
    return len(state.logs)


def ask_command(state: GameState) -> Optional[str]:
    n = state.cfg.pit_count
    while True:
        s = input(f"Pit 0..{n - 1}, 's' to sow, 'q' to quit: ").strip().lower()
        if s in ("s", "q"):
            return s
        try:
            pit = int(s)
        except ValueError:
            print("Invalid input.")
            continue
        if 0 <= pit < n:
            return s
        print(f"Out of range; must be 0..{n - 1}.")


def play(state: GameState) -> Optional[GameState]:
    seen = print_new_logs(state, 0)
    while not state.is_over:
        print_board(state, state.current, time.monotonic())
        cmd = ask_command(state)
        if cmd == "q":
            return None
        # The clock is only sampled between inputs
        now = time.monotonic()
        timed = tick(state, now)
        if timed is not state:
            print("Time's up!")
            state = timed
            seen = print_new_logs(state, seen)
            continue
        if cmd == "s":
            nxt = commit_sowing(state, state.current, now)
            if nxt is state:
                print("Pick a pit first.")
        else:
            nxt = select_pit(state, state.current, int(cmd))
            if nxt is state:
                print("That pit cannot be picked.")
        state = nxt
        seen = print_new_logs(state, seen)
    return state


def print_result(state: GameState) -> None:
    res = state.result
    assert res is not None
    print("\n=== Game Over ===")
    for pid in res.seating:
        print(f"{pid}: pits {res.pits[pid]}, store {res.stores[pid]}")
    print(f"Winner: {res.winner} (turn {res.turn}, final turn took {res.elapsed_seconds:.1f}s)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed-sowing game, hot-seat console", prog="mancala")
    parser.add_argument("players", nargs="*", default=PLAYERS, help="Player names (2 or more)")
    parser.add_argument("--pits", type=int, default=PIT_COUNT, help="Pits per player")
    parser.add_argument("--seeds", type=int, default=SEEDS_PER_PIT, help="Initial seeds per pit")
    parser.add_argument("--time-limit", type=int, default=TIME_LIMIT, help="Seconds per turn")
    parser.add_argument("--shuffle", action="store_true", help="Randomize the seating")
    parser.add_argument("--seed", type=int, default=None, help="Seed for --shuffle")
    args = parser.parse_args()

    cfg = GameConfig(
        player_ids=list(args.players),
        pit_count=args.pits,
        initial_seeds_per_pit=args.seeds,
        time_limit_seconds=args.time_limit,
    )
    seating = list(cfg.player_ids)
    if args.shuffle:
        random.Random(args.seed).shuffle(seating)
    try:
        state = new_game(cfg, time.monotonic(), seating)
    except AssertionError as e:
        parser.error(str(e))

    while True:
        final = play(state)
        if final is None:
            break
        print_result(final)
        again = input("Play again? (y/n): ").strip().lower()
        if again != "y":
            break
        state = restart(final, time.monotonic())


if __name__ == "__main__":
    main()
