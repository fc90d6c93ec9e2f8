from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class NewGameReq(BaseModel):
    players: List[str] = Field(..., min_length=2)
    pitCount: int = Field(6, ge=2)
    initialSeedsPerPit: int = Field(4, ge=1)
    timeLimitSeconds: int = Field(30, ge=1)
    shuffle: bool = False
    seed: Optional[int] = None


class SelectReq(BaseModel):
    sessionId: str
    playerId: str
    pit: int


class CommitReq(BaseModel):
    sessionId: str
    playerId: str


class SessionReq(BaseModel):
    sessionId: str
    viewerId: Optional[str] = None


class GetStateResp(BaseModel):
    state: Dict[str, Any]


class StateEnvelope(BaseModel):
    sessionId: str
    state: Dict[str, Any]


class RestartReq(BaseModel):
    sessionId: str
    viewerId: Optional[str] = None
    shuffle: bool = False
    seed: Optional[int] = None
