from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from ..errors import OutOfBoundsError, ReentrantCallError
from ..events import AttackResolved, EventBus, GameOver, MoveMade
from ..logging_listeners import register_listeners
from ..models.api import ActionRecord, Evaluation, MoveResult
from ..models.enums import ActionKind, GameStatus, MoveError, Rank, Team
from ..models.state import GameState
from ..settings import Settings
from .logging.logger import log_applied, log_error, log_illegal
from .systems import combat, movement, turn, victory
from .systems.repetition import AntiStallWindow

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..models.api import CombatResult
    from ..models.enums import Coord
    from ..models.pieces import Piece
    from ..storage import ActionLogStore

logger = logging.getLogger(__name__)


def _reject(error: MoveError, explanation: str) -> Evaluation:
    return Evaluation(legal=False, error=error, explanation=explanation)


class RulesEngine:
    """
    Owns one game: board, rosters, turn, history and the anti-stall window.

    Every mutating call validates first and mutates second. Notifications
    (MoveMade, AttackResolved, GameOver) are emitted on `bus` only after the
    whole move, including turn flip and win check, is committed.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        bus: EventBus | None = None,
        log_store: ActionLogStore | None = None,
    ):
        self.settings = settings or Settings()
        self.bus = bus or EventBus()
        self.log_store = log_store
        if log_store is not None:
            register_listeners(self.bus, log_store)
        self._in_flight = False
        self.state = GameState()
        self.window = AntiStallWindow(self.settings.anti_stall_window)

    # ---------- Lifecycle ----------

    def reset(self) -> None:
        for _, p in self.state.board.occupied():
            p.coord = None
        self.state = GameState()
        self.window = AntiStallWindow(self.settings.anti_stall_window)
        logger.info("new game %s", self.state.id)

    @property
    def turn(self) -> Team:
        return self.state.turn

    @property
    def winner(self) -> Team | None:
        return self.state.winner

    @property
    def is_over(self) -> bool:
        return self.state.status == GameStatus.FINISHED

    @property
    def history(self) -> tuple[ActionRecord, ...]:
        return tuple(self.state.history)

    def roster(self, team: Team) -> list[Piece]:
        return list(self.state.rosters.get(team, []))

    # ---------- Pieces ----------

    def register_piece(self, piece: Piece, coord: Coord) -> Evaluation:
        board = self.state.board
        if not board.in_bounds(coord):
            logger.warning("cannot register %s at %s: out of bounds", piece.rank.name, coord)
            return _reject(MoveError.OUT_OF_BOUNDS, f"{coord} is off the board")
        if board.is_lake(coord):
            logger.warning("cannot register %s at %s: lake", piece.rank.name, coord)
            return _reject(MoveError.LAKE_BLOCKED, f"{coord} is a lake")
        occupant = board.get(coord)
        if occupant is not None and occupant is not piece:
            logger.warning("cannot register %s at %s: occupied", piece.rank.name, coord)
            return _reject(MoveError.OCCUPIED, f"{coord} is occupied")

        # re-registering a live piece moves it
        self.unregister_piece(piece)
        board.put(coord, piece)
        self.state.roster(piece.team).append(piece)
        piece.coord = coord
        return Evaluation(legal=True)

    def unregister_piece(self, piece: Piece) -> None:
        board = self.state.board
        c = piece.coord
        if c is not None and board.in_bounds(c) and board.get(c) is piece:
            board.put(c, None)
        roster = self.state.rosters.get(piece.team)
        if roster is not None:
            for i, p in enumerate(roster):
                if p is piece:
                    del roster[i]
                    break
        piece.coord = None

    def piece_at(self, coord: Coord) -> Piece | None:
        if not self.state.board.in_bounds(coord):
            raise OutOfBoundsError(f"{coord} is off the board")
        return self.state.board.get(coord)

    # ---------- Moves ----------

    def evaluate(self, src: Coord, dest: Coord) -> Evaluation:
        st = self.state
        board = st.board
        if st.status == GameStatus.FINISHED:
            return _reject(MoveError.GAME_FINISHED, "game is over")
        if not board.in_bounds(src) or not board.in_bounds(dest):
            return _reject(MoveError.OUT_OF_BOUNDS, "coordinate off the board")
        piece = board.get(src)
        if piece is None:
            return _reject(MoveError.NO_PIECE_AT_SOURCE, f"no piece at {src}")
        if piece.team != st.turn:
            return _reject(MoveError.NOT_YOUR_TURN, f"{st.turn.value} to move")
        if not piece.movable:
            return _reject(MoveError.IMMOBILE, f"{piece.rank.name} cannot move")
        if src == dest:
            return _reject(MoveError.NULL_MOVE, "source equals destination")
        if board.is_lake(dest):
            return _reject(MoveError.LAKE_BLOCKED, f"{dest} is a lake")
        target = board.get(dest)
        if target is not None and target.team == piece.team:
            return _reject(MoveError.FRIENDLY_FIRE, "cannot capture own piece")
        ok, error, why = movement.check_geometry(board, piece, src, dest)
        if not ok:
            return _reject(error or MoveError.ILLEGAL_MOVEMENT, why)
        if self.window.blocks(piece.team, src, dest):
            return _reject(MoveError.REPETITION_BLOCKED, "repetitive back-and-forth move")
        kind = ActionKind.ATTACK if target is not None else ActionKind.MOVE
        return Evaluation(legal=True, kind=kind)

    def attempt_move(self, src: Coord, dest: Coord) -> MoveResult:
        if self._in_flight:
            raise ReentrantCallError("attempt_move called while another move is in flight")
        self._in_flight = True
        try:
            ev = self.evaluate(src, dest)
            if not ev.legal:
                log_illegal(self.bus, self.state, src, dest, ev)
                return MoveResult(applied=False, error=ev.error, explanation=ev.explanation)

            pending: list[Callable[[], None]] = []
            piece = self.state.board.get(src)
            target = self.state.board.get(dest)
            if target is None:
                result = self._move(piece, src, dest, pending)
            else:
                result = self._attack(piece, target, src, dest, pending)
            self._end_turn(pending)
            result.winner = self.state.winner

            # deliver everything, then re-raise the first handler failure
            failures: list[Exception] = []
            for notify in pending:
                try:
                    notify()
                except Exception as e:
                    log_error(self.bus, self.state, src, dest, e)
                    failures.append(e)
            if failures:
                raise failures[0]
            return result
        finally:
            self._in_flight = False

    def legal_moves(self, team: Team | None = None) -> list[tuple[Coord, Coord]]:
        """Every (src, dest) `team` may play now. Empty unless `team` is the side to move."""
        out: list[tuple[Coord, Coord]] = []
        team = team or self.state.turn
        if self.is_over or team != self.state.turn:
            return out
        board = self.state.board
        for p in self.state.rosters.get(team, []):
            if not p.movable or p.coord is None:
                continue
            for dest in movement.candidate_targets(board, p, p.coord):
                if self.evaluate(p.coord, dest).legal:
                    out.append((p.coord, dest))
        return out

    def summary(self) -> dict:
        st = self.state
        return {
            "status": st.status.value,
            "winner": st.winner.value if st.winner else None,
            "turn": st.turn.value,
            "ply": st.ply,
            "pieces": {t.value: len(st.rosters.get(t, [])) for t in Team},
        }

    def dump_board(self) -> str:
        return self.state.board.dump()

    # ---------- Internals ----------

    def _record(self, kind: ActionKind, piece: Piece, src: Coord, dest: Coord, res: CombatResult | None = None) -> ActionRecord:
        return ActionRecord(
            kind=kind,
            ply=self.state.ply,
            team=piece.team,
            piece_id=piece.id,
            rank=piece.rank,
            src=src,
            dest=dest,
            defender_id=res.defender.id if res else None,
            defender_rank=res.defender.rank if res else None,
            outcome=res.outcome if res else None,
        )

    def _move(self, piece: Piece, src: Coord, dest: Coord, pending: list[Callable[[], None]]) -> MoveResult:
        board = self.state.board
        board.put(src, None)
        board.put(dest, piece)
        piece.coord = dest

        record = self._record(ActionKind.MOVE, piece, src, dest)
        self.window.append(record)
        self.state.history.append(record)

        pending.append(partial(log_applied, self.bus, self.state, record))
        pending.append(partial(piece.notify_moved, src, dest))
        pending.append(partial(self.bus.emit, MoveMade(src=src, dest=dest, piece=piece)))
        return MoveResult(applied=True, explanation="moved", record=record)

    def _attack(self, attacker: Piece, defender: Piece, src: Coord, dest: Coord, pending: list[Callable[[], None]]) -> MoveResult:
        res = combat.resolve(attacker, defender)
        attacker.revealed = True
        defender.revealed = True
        for p in res.removed:
            self.unregister_piece(p)
        if combat.attacker_relocates(res):
            board = self.state.board
            board.put(src, None)
            board.put(dest, attacker)
            attacker.coord = dest

        record = self._record(ActionKind.ATTACK, attacker, src, dest, res)
        self.state.history.append(record)

        pending.append(partial(log_applied, self.bus, self.state, record))
        pending.append(attacker.reveal)
        pending.append(defender.reveal)
        if combat.attacker_relocates(res):
            pending.append(partial(attacker.notify_moved, src, dest))
        pending.append(partial(self.bus.emit, AttackResolved(attacker=attacker, defender=defender, result=res)))

        if res.winner is not None and res.winner.rank == Rank.FLAG:
            self._declare_winner(attacker.team, pending)
        return MoveResult(applied=True, explanation=res.reason, record=record, combat=res)

    def _end_turn(self, pending: list[Callable[[], None]]) -> None:
        turn.end_turn(self.state)
        if self.state.status == GameStatus.FINISHED:
            return
        winner = victory.check(self.state)
        if winner is not None:
            self._declare_winner(winner, pending)

    def _declare_winner(self, winner: Team, pending: list[Callable[[], None]]) -> None:
        if self.state.status == GameStatus.FINISHED:
            return
        self.state.status = GameStatus.FINISHED
        self.state.winner = winner
        logger.info("game %s finished, %s wins", self.state.id, winner.value)
        pending.append(partial(self.bus.emit, GameOver(winner=winner)))
