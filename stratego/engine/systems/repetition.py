from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.api import ActionRecord
    from ...models.enums import Coord, Team

# two plain moves per side, turns alternate
MIN_WINDOW = 4


class AntiStallWindow:
    """Most recent plain moves, oldest dropped first."""

    def __init__(self, size: int = MIN_WINDOW) -> None:
        if size < MIN_WINDOW:
            raise ValueError(f"anti-stall window needs at least {MIN_WINDOW} entries, got {size}")
        self._moves: deque[ActionRecord] = deque(maxlen=size)

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self):
        return iter(self._moves)

    @property
    def size(self) -> int:
        return self._moves.maxlen or 0

    def append(self, record: ActionRecord) -> None:
        self._moves.append(record)

    def blocks(self, team: Team, src: Coord, dest: Coord) -> bool:
        """True if src->dest would be the third leg of a src<->dest shuttle by `team`."""
        own = [r for r in self._moves if r.team == team]
        if len(own) < 2:
            return False
        older, newer = own[-2], own[-1]
        return (older.src, older.dest) == (src, dest) and (newer.src, newer.dest) == (dest, src)
