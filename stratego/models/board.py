from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .enums import Coord
from .pieces import Piece

BOARD_SIZE = 10

LAKES: frozenset[Coord] = frozenset(
    {(2, 4), (3, 4), (6, 4), (7, 4), (2, 5), (3, 5), (6, 5), (7, 5)}
)


def _empty_cells() -> list[list[Optional[Piece]]]:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


class Board(BaseModel):
    size: int = BOARD_SIZE
    cells: list[list[Optional[Piece]]] = Field(default_factory=_empty_cells)  # cells[row][col]

    def in_bounds(self, c: Coord) -> bool:
        col, row = c
        return 0 <= col < self.size and 0 <= row < self.size

    def is_lake(self, c: Coord) -> bool:
        return c in LAKES

    def get(self, c: Coord) -> Optional[Piece]:
        col, row = c
        return self.cells[row][col]

    def put(self, c: Coord, piece: Optional[Piece]) -> None:
        col, row = c
        self.cells[row][col] = piece

    def occupied(self) -> list[tuple[Coord, Piece]]:
        return [
            ((col, row), p)
            for row, line in enumerate(self.cells)
            for col, p in enumerate(line)
            if p is not None
        ]

    def dump(self) -> str:
        """
        Human-readable grid, row 9 printed first:
         - '~' for lake
         - '.' for empty
         - otherwise the piece symbol (e.g. '10', 'S', 'B', 'F')
        """
        lines = []
        for row in reversed(range(self.size)):
            out = []
            for col in range(self.size):
                p = self.cells[row][col]
                if p is not None:
                    out.append(p.symbol.rjust(2))
                elif (col, row) in LAKES:
                    out.append(" ~")
                else:
                    out.append(" .")
            lines.append(f"{row} " + " ".join(out))
        lines.append("  " + " ".join(str(c).rjust(2) for c in range(self.size)))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.dump()
