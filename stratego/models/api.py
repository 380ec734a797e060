from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .enums import ActionKind, ActionLogResult, CombatOutcome, Coord, MoveError, Rank, Team
from .pieces import Piece

# ----- Combat -----


class CombatResult(BaseModel):
    outcome: CombatOutcome
    attacker: Piece
    defender: Piece
    winner: Optional[Piece] = None
    loser: Optional[Piece] = None
    reason: str = ""

    @property
    def removed(self) -> list[Piece]:
        if self.outcome == CombatOutcome.BOTH_REMOVED:
            return [self.attacker, self.defender]
        return [self.loser] if self.loser is not None else []


# ----- History -----


class ActionRecord(BaseModel):
    kind: ActionKind
    ply: int
    team: Team
    piece_id: str
    rank: Rank
    src: Coord
    dest: Coord
    defender_id: Optional[str] = None
    defender_rank: Optional[Rank] = None
    outcome: Optional[CombatOutcome] = None


# ----- Engine IO -----


class Evaluation(BaseModel):
    legal: bool
    error: Optional[MoveError] = None
    explanation: str = "ok"
    kind: Optional[ActionKind] = None

    def __bool__(self) -> bool:
        return self.legal


class MoveResult(BaseModel):
    applied: bool
    error: Optional[MoveError] = None
    explanation: str = "ok"
    record: Optional[ActionRecord] = None
    combat: Optional[CombatResult] = None
    winner: Optional[Team] = None

    def __bool__(self) -> bool:
        return self.applied


# ----- Action Log -----


class ActionLogEntry(BaseModel):
    ts: datetime = Field(default_factory=datetime.now)
    game_id: str
    ply: int
    team: Team
    src: Coord
    dest: Coord
    result: ActionLogResult = ActionLogResult.APPLIED
    record: Optional[ActionRecord] = None
    error: Optional[MoveError] = None
    message: Optional[str] = None


class ActionLogResponse(BaseModel):
    entries: list[ActionLogEntry]
