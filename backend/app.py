from __future__ import annotations

from typing import Callable, Dict, Iterator, Optional
from contextlib import contextmanager
import logging
import os
import random
import threading
import time
import uuid

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from backend.models import (
    NewGameReq,
    SelectReq,
    CommitReq,
    SessionReq,
    RestartReq,
    GetStateResp,
    StateEnvelope,
)

from mancala.core import (
    GameConfig,
    GameState,
    new_game,
    restart as engine_restart,
    select_pit as engine_select,
    commit_sowing as engine_commit,
    tick as engine_tick,
    to_json,
)

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


# In-memory session store; one lock per session keeps a single writer
SESSIONS: Dict[str, GameState] = {}
LOCKS: Dict[str, threading.Lock] = {}


def _now() -> float:
    return time.monotonic()


def configure_logging(level: Optional[str] = None) -> None:
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=level)
    root_logger.setLevel(level)


def _new_session_id() -> str:
    return uuid.uuid4().hex


def get_state(session_id: str) -> GameState:
    state = SESSIONS.get(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return state


def save_state(session_id: str, state: GameState) -> None:
    SESSIONS[session_id] = state


@contextmanager
def _session_lock(session_id: str) -> Iterator[None]:
    lock = LOCKS.get(session_id)
    if lock is None:
        raise HTTPException(status_code=404, detail="Session not found")
    with lock:
        yield


def _apply(
    session_id: str,
    op: Callable[[GameState, float], GameState],
    what: str,
    viewer_id: Optional[str] = None,
) -> GetStateResp:
    try:
        with _session_lock(session_id):
            state = get_state(session_id)
            now = _now()
            new_state = op(state, now)
            save_state(session_id, new_state)
            if new_state.turn != state.turn or new_state.is_over != state.is_over:
                logger.info("session %s: turn %d, %s to move%s", session_id, new_state.turn, new_state.current,
                            f", winner {new_state.winner}" if new_state.is_over else "")
            return GetStateResp(state=to_json(new_state, viewer_id=viewer_id, now=now))
    except HTTPException:
        raise
    except AssertionError as e:
        logger.warning("%s rejected for session %s: %s", what, session_id, e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("%s failed for session %s", what, session_id)
        raise HTTPException(status_code=500, detail=f"{what} failed: {e}")


app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


@app.post("/new-game", response_model=StateEnvelope)
def new_game_endpoint(req: NewGameReq) -> StateEnvelope:
    try:
        cfg = GameConfig(
            player_ids=list(req.players),
            pit_count=int(req.pitCount),
            initial_seeds_per_pit=int(req.initialSeedsPerPit),
            time_limit_seconds=int(req.timeLimitSeconds),
        )
        seating = list(req.players)
        # Seat shuffling stays out here; the engine only sees the final order
        if req.shuffle:
            random.Random(req.seed).shuffle(seating)
        now = _now()
        state = new_game(cfg, now, seating)
        sid = _new_session_id()
        LOCKS[sid] = threading.Lock()
        save_state(sid, state)
        logger.info("session %s: new game, seating %s", sid, ", ".join(seating))
        return StateEnvelope(sessionId=sid, state=to_json(state, now=now))
    except AssertionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("new-game failed")
        raise HTTPException(status_code=500, detail=f"new-game failed: {e}")


@app.get("/state/{sessionId}", response_model=GetStateResp)
def get_state_endpoint(sessionId: str, viewer: Optional[str] = None) -> GetStateResp:
    state = get_state(sessionId)
    return GetStateResp(state=to_json(state, viewer_id=viewer, now=_now()))


def _unless_timed_out(op: Callable[[GameState, float], GameState]) -> Callable[[GameState, float], GameState]:
    # An overdue turn passes on first; the late action itself is dropped
    def run(state: GameState, now: float) -> GameState:
        timed = engine_tick(state, now)
        if timed is not state:
            return timed
        return op(state, now)
    return run


@app.post("/select", response_model=GetStateResp)
def select_endpoint(req: SelectReq) -> GetStateResp:
    return _apply(
        req.sessionId,
        _unless_timed_out(lambda state, now: engine_select(state, req.playerId, req.pit)),
        "select",
        viewer_id=req.playerId,
    )


@app.post("/commit", response_model=GetStateResp)
def commit_endpoint(req: CommitReq) -> GetStateResp:
    return _apply(
        req.sessionId,
        _unless_timed_out(lambda state, now: engine_commit(state, req.playerId, now)),
        "commit",
        viewer_id=req.playerId,
    )


@app.post("/tick", response_model=GetStateResp)
def tick_endpoint(req: SessionReq) -> GetStateResp:
    return _apply(req.sessionId, engine_tick, "tick", viewer_id=req.viewerId)


@app.post("/restart", response_model=GetStateResp)
def restart_endpoint(req: RestartReq) -> GetStateResp:
    def run(state: GameState, now: float) -> GameState:
        seating = state.order.players
        if req.shuffle:
            random.Random(req.seed).shuffle(seating)
        return engine_restart(state, now, seating)

    return _apply(req.sessionId, run, "restart", viewer_id=req.viewerId)


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run("backend.app:app", host="0.0.0.0", port=8000, reload=True)
