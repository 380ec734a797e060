from __future__ import annotations

from collections import Counter
from typing import Any, Optional

from ..errors import SetupError
from ..models.enums import Rank, Team
from ..models.pieces import Piece, rank_from_symbol
from .core import RulesEngine

SETUP_ROWS = 4

STANDARD_ARMY: Counter[Rank] = Counter(
    {
        Rank.MARSHAL: 1,
        Rank.GENERAL: 1,
        Rank.COLONEL: 2,
        Rank.MAJOR: 3,
        Rank.CAPTAIN: 4,
        Rank.LIEUTENANT: 4,
        Rank.SERGEANT: 4,
        Rank.MINER: 5,
        Rank.SCOUT: 8,
        Rank.SPY: 1,
        Rank.BOMB: 6,
        Rank.FLAG: 1,
    }
)

# layout row 0 is each team's back line
DEFAULT_SETUP: list[list[str]] = [
    ["F", "B", "3", "3", "B", "1", "4", "6", "B", "B"],
    ["B", "3", "4", "3", "1", "B", "5", "6", "5", "3"],
    ["1", "1", "10", "4", "8", "5", "S", "4", "7", "1"],
    ["1", "6", "7", "8", "6", "1", "9", "7", "5", "1"],
]


def parse_setup(setup: list[list[str]], team: Team) -> list[list[Rank]]:
    """Validate a 4x10 layout of symbols against the standard army."""
    if len(setup) != SETUP_ROWS or any(len(row) != 10 for row in setup):
        raise SetupError(f"{team.value} setup must be {SETUP_ROWS} rows of 10")
    try:
        ranks = [[rank_from_symbol(s) for s in row] for row in setup]
    except ValueError as e:
        raise SetupError(f"{team.value} setup: {e}") from e
    counts = Counter(r for row in ranks for r in row)
    if counts != STANDARD_ARMY:
        diff = {
            r.name: counts.get(r, 0) - STANDARD_ARMY.get(r, 0)
            for r in set(counts) | set(STANDARD_ARMY)
            if counts.get(r, 0) != STANDARD_ARMY.get(r, 0)
        }
        raise SetupError(f"{team.value} army composition is off: {diff}")
    return ranks


def board_row(team: Team, layout_row: int) -> int:
    return layout_row if team == Team.RED else 9 - layout_row


def quickstart(
    setup_red: Optional[list[list[str]]] = None,
    setup_blue: Optional[list[list[str]]] = None,
    **engine_kwargs: Any,
) -> RulesEngine:
    """Create an engine with both armies placed; pass layouts to override the default."""
    armies = {
        Team.RED: parse_setup(setup_red or DEFAULT_SETUP, Team.RED),
        Team.BLUE: parse_setup(setup_blue or DEFAULT_SETUP, Team.BLUE),
    }
    engine = RulesEngine(**engine_kwargs)
    for team, ranks in armies.items():
        for i, row in enumerate(ranks):
            for col, rank in enumerate(row):
                engine.register_piece(Piece(rank=rank, team=team), (col, board_row(team, i)))
    return engine
