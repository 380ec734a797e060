from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from .events import ActionEvent, AttackResolved, GameOver
from .models.api import ActionLogEntry, ActionLogResponse

if TYPE_CHECKING:
    from .events import EventBus
    from .storage import ActionLogStore

logger = logging.getLogger(__name__)


def register_listeners(bus: EventBus, store: ActionLogStore) -> None:
    def _on_action_event(ev: ActionEvent) -> None:
        # Convert event to ActionLogEntry JSON for persistence
        entry = ActionLogEntry(
            game_id=ev.game_id,
            ply=ev.ply,
            team=ev.team,
            src=ev.src,
            dest=ev.dest,
            result=ev.result,
            record=ev.record,
            error=ev.error,
            message=ev.message,
        )
        store.append(ev.game_id, entry.model_dump_json())

    def _on_attack(ev: AttackResolved) -> None:
        logger.info(
            "%s %s attacked %s %s: %s",
            ev.attacker.team.value,
            ev.attacker.rank.name,
            ev.defender.team.value,
            ev.defender.rank.name,
            ev.result.outcome.value,
        )

    def _on_game_over(ev: GameOver) -> None:
        logger.info("game over, %s wins", ev.winner.value)

    bus.subscribe(ActionEvent, _on_action_event)
    bus.subscribe(AttackResolved, _on_attack)
    bus.subscribe(GameOver, _on_game_over)


def read_log(store: ActionLogStore, game_id: str, limit: int = 50) -> ActionLogResponse:
    ta = TypeAdapter(ActionLogEntry)
    entries: list[ActionLogEntry] = []
    for raw in store.list(game_id, limit):
        try:
            entries.append(ta.validate_json(raw))
        except ValidationError:
            # Skip malformed entries rather than failing the whole read
            logger.warning("skipping malformed log entry for %s", game_id)
    return ActionLogResponse(entries=entries)
