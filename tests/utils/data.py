# tests/utils/data.py
from __future__ import annotations

from stratego.models.enums import Coord, Rank, Team
from stratego.models.pieces import Piece

RED_FLAG_AT: Coord = (9, 0)
RED_RESERVE_AT: Coord = (8, 0)
BLUE_FLAG_AT: Coord = (9, 9)
BLUE_RESERVE_AT: Coord = (8, 9)
BLUE_LOOP: list[Coord] = [(8, 9), (8, 8), (7, 8), (7, 9)]


class RecordingHooks:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def reveal(self, piece: Piece) -> None:
        self.calls.append(("reveal", piece.id))

    def moved(self, piece: Piece, src: Coord, dest: Coord) -> None:
        self.calls.append(("moved", piece.id, src, dest))


def red(rank: Rank, **kw) -> Piece:
    return Piece(rank=rank, team=Team.RED, **kw)


def blue(rank: Rank, **kw) -> Piece:
    return Piece(rank=rank, team=Team.BLUE, **kw)


def place(engine, piece: Piece, coord: Coord) -> Piece:
    assert engine.register_piece(piece, coord), f"could not place {piece.rank.name} at {coord}"
    return piece


def add_reserves(engine) -> dict[str, Piece]:
    """Flag and one sergeant per team in the far corners so a capture does not end the game."""
    return {
        "red_flag": place(engine, red(Rank.FLAG), RED_FLAG_AT),
        "red_reserve": place(engine, red(Rank.SERGEANT), RED_RESERVE_AT),
        "blue_flag": place(engine, blue(Rank.FLAG), BLUE_FLAG_AT),
        "blue_reserve": place(engine, blue(Rank.SERGEANT), BLUE_RESERVE_AT),
    }


def pass_blue(engine) -> None:
    """Spend Blue's turn walking its reserve sergeant round a 2x2 loop (never a shuttle)."""
    for i, here in enumerate(BLUE_LOOP):
        p = engine.piece_at(here)
        if p is not None and p.team == Team.BLUE and p.rank == Rank.SERGEANT:
            assert engine.attempt_move(here, BLUE_LOOP[(i + 1) % len(BLUE_LOOP)])
            return
    raise AssertionError("blue reserve not found")


def assert_consistent(engine) -> None:
    """Every placed piece sits in exactly one cell and exactly one roster."""
    board = engine.state.board
    placed = board.occupied()
    for coord, p in placed:
        assert p.coord == coord
        rosters_holding = [t for t, lst in engine.state.rosters.items() if any(x is p for x in lst)]
        assert rosters_holding == [p.team]
    for team, lst in engine.state.rosters.items():
        for p in lst:
            assert p.team == team
            assert p.coord is not None and board.get(p.coord) is p
    assert len(placed) == sum(len(lst) for lst in engine.state.rosters.values())
