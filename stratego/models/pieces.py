from __future__ import annotations

import uuid
from typing import Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .enums import Coord, Rank, Special, Team

SYMBOLS: dict[Rank, str] = {
    Rank.SPY: "S",
    Rank.BOMB: "B",
    Rank.FLAG: "F",
}

SPECIAL_BY_RANK: dict[Rank, Special] = {
    Rank.MINER: Special.MINER,
    Rank.SPY: Special.SPY,
    Rank.SCOUT: Special.SCOUT,
}


@runtime_checkable
class PieceHooks(Protocol):
    """Callbacks a presentation layer can attach to a piece."""

    def reveal(self, piece: Piece) -> None: ...

    def moved(self, piece: Piece, src: Coord, dest: Coord) -> None: ...


class Piece(BaseModel):
    """A single piece. Identity is `id`; `coord` is set only while on the board."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    rank: Rank
    team: Team
    coord: Optional[Coord] = None
    revealed: bool = False
    hooks: Optional[PieceHooks] = Field(default=None, exclude=True, repr=False)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def movable(self) -> bool:
        return self.rank not in (Rank.BOMB, Rank.FLAG)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def special(self) -> Optional[Special]:
        # rank is canonical; the tag is an alias
        return SPECIAL_BY_RANK.get(self.rank)

    @property
    def symbol(self) -> str:
        return SYMBOLS.get(self.rank, str(int(self.rank)))

    def reveal(self) -> None:
        self.revealed = True
        if self.hooks is not None:
            self.hooks.reveal(self)

    def notify_moved(self, src: Coord, dest: Coord) -> None:
        if self.hooks is not None:
            self.hooks.moved(self, src, dest)


def rank_from_symbol(symbol: str) -> Rank:
    """Parse a layout symbol ("10".."1", "S", "B", "F") into a Rank."""
    s = symbol.strip().upper()
    for rank, sym in SYMBOLS.items():
        if s == sym:
            return rank
    try:
        return Rank(int(s))
    except ValueError:
        raise ValueError(f"unknown piece symbol: {symbol!r}") from None
