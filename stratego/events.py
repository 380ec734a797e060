from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar, cast

if TYPE_CHECKING:
    from collections.abc import Callable

    from .models.api import ActionRecord, CombatResult
    from .models.enums import ActionLogResult, Coord, MoveError, Team
    from .models.pieces import Piece


@dataclass
class MoveMade:
    src: Coord
    dest: Coord
    piece: Piece


@dataclass
class AttackResolved:
    attacker: Piece
    defender: Piece
    result: CombatResult


@dataclass
class GameOver:
    winner: Team


@dataclass
class ActionEvent:
    game_id: str
    ply: int
    team: Team
    src: Coord
    dest: Coord
    result: ActionLogResult
    record: ActionRecord | None = None
    error: MoveError | None = None
    message: str | None = None


T = TypeVar("T")


class EventBus:
    """Typed pub/sub for one engine. Handlers run in subscription order and may unsubscribe mid-emit."""

    def __init__(self) -> None:
        self._subs: dict[type[Any], list[object]] = {}

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        lst = self._subs.setdefault(event_type, [])
        lst.append(cast("object", handler))

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        lst = self._subs.get(event_type, [])
        if handler in lst:
            lst.remove(handler)

    def emit(self, event: Any) -> None:
        et = type(event)
        for h in list(self._subs.get(et, [])):
            # Let exceptions propagate; callers decide how to handle them
            cast("Callable[[Any], None]", h)(event)
