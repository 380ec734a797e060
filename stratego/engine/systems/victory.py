from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.state import GameState

from ...models.enums import Rank, Team
from .turn import opposite

TEAM_ORDER = (Team.RED, Team.BLUE)


def has_lost(state: GameState, team: Team) -> bool:
    roster = state.rosters.get(team, [])
    if not any(p.rank == Rank.FLAG for p in roster):
        return True
    return not any(p.movable for p in roster)


def check(state: GameState) -> Team | None:
    """Winner if one team has lost its flag or every movable piece, else None."""
    for team in TEAM_ORDER:
        if has_lost(state, team):
            return opposite(team)
    return None
