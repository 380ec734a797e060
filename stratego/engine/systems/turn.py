from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.state import GameState

from ...models.enums import Team


def opposite(team: Team) -> Team:
    return Team.BLUE if team == Team.RED else Team.RED


def end_turn(state: GameState) -> None:
    state.turn = opposite(state.turn)
    state.ply += 1
