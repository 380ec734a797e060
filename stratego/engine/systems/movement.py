from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ...models.board import Board
    from ...models.pieces import Piece

from ...models.enums import Coord, MoveError, Special

DIRS = [(1, 0), (-1, 0), (0, 1), (0, -1)]


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_orthogonal(src: Coord, dest: Coord) -> bool:
    return (src[0] == dest[0]) != (src[1] == dest[1])


def is_long_range(piece: Piece) -> bool:
    return piece.special == Special.SCOUT


def path_between(src: Coord, dest: Coord) -> Iterator[Coord]:
    """Cells strictly between src and dest on a straight orthogonal line."""
    dx = (dest[0] > src[0]) - (dest[0] < src[0])
    dy = (dest[1] > src[1]) - (dest[1] < src[1])
    cx, cy = src[0] + dx, src[1] + dy
    while (cx, cy) != dest:
        yield (cx, cy)
        cx += dx
        cy += dy


def check_geometry(board: Board, piece: Piece, src: Coord, dest: Coord) -> tuple[bool, MoveError | None, str]:
    if not is_orthogonal(src, dest):
        return False, MoveError.ILLEGAL_MOVEMENT, "moves must be orthogonal"
    if not is_long_range(piece):
        if manhattan(src, dest) != 1:
            return False, MoveError.ILLEGAL_MOVEMENT, "piece moves one square"
        return True, None, "ok"
    for c in path_between(src, dest):
        if board.is_lake(c):
            return False, MoveError.LAKE_BLOCKED, f"path crosses lake at {c}"
        if board.get(c) is not None:
            return False, MoveError.ILLEGAL_MOVEMENT, f"path blocked at {c}"
    return True, None, "ok"


def candidate_targets(board: Board, piece: Piece, src: Coord) -> Iterator[Coord]:
    """Cells a piece could try to reach from src, stopping at the first obstacle per direction."""
    reach = board.size if is_long_range(piece) else 1
    for dx, dy in DIRS:
        cx, cy = src
        for _ in range(reach):
            cx += dx
            cy += dy
            c = (cx, cy)
            if not board.in_bounds(c) or board.is_lake(c):
                break
            yield c
            if board.get(c) is not None:
                break
