from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...events import EventBus
    from ...models.api import ActionRecord, Evaluation
    from ...models.enums import Coord
    from ...models.state import GameState

from ...events import ActionEvent
from ...models.enums import ActionLogResult

logger = logging.getLogger("stratego.engine")


def log_event(
    bus: EventBus,
    state: GameState,
    src: Coord,
    dest: Coord,
    result: ActionLogResult,
    record: ActionRecord | None = None,
    evaluation: Evaluation | None = None,
) -> None:
    team = record.team if record is not None else state.turn
    bus.emit(
        ActionEvent(
            game_id=state.id,
            ply=record.ply if record is not None else state.ply,
            team=team,
            src=src,
            dest=dest,
            result=result,
            record=record,
            error=evaluation.error if evaluation is not None else None,
            message=evaluation.explanation if evaluation is not None else None,
        )
    )


def log_applied(bus: EventBus, state: GameState, record: ActionRecord) -> None:
    logger.debug(
        "ply %s: %s %s %s -> %s",
        record.ply,
        record.team.value,
        record.kind.value,
        record.src,
        record.dest,
    )
    log_event(bus, state, record.src, record.dest, ActionLogResult.APPLIED, record=record)


def log_illegal(
    bus: EventBus, state: GameState, src: Coord, dest: Coord, evaluation: Evaluation
) -> None:
    logger.debug("rejected %s -> %s: %s", src, dest, evaluation.explanation)
    log_event(bus, state, src, dest, ActionLogResult.ILLEGAL, evaluation=evaluation)


def log_error(bus: EventBus, state: GameState, src: Coord, dest: Coord, error: Exception) -> None:
    logger.exception("move %s -> %s failed", src, dest)
    bus.emit(
        ActionEvent(
            game_id=state.id,
            ply=state.ply,
            team=state.turn,
            src=src,
            dest=dest,
            result=ActionLogResult.ERROR,
            message=str(error),
        )
    )
