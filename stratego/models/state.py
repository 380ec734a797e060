from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, Field

from .api import ActionRecord
from .board import Board
from .enums import GameStatus, Team
from .pieces import Piece


class GameState(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    board: Board = Field(default_factory=Board)
    rosters: dict[Team, list[Piece]] = Field(default_factory=dict)
    turn: Team = Team.RED
    ply: int = 0
    history: list[ActionRecord] = Field(default_factory=list)
    status: GameStatus = GameStatus.IN_PROGRESS
    winner: Optional[Team] = None

    def roster(self, team: Team) -> list[Piece]:
        return self.rosters.setdefault(team, [])
