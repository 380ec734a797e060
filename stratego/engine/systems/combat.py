from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...models.pieces import Piece

from ...models.api import CombatResult
from ...models.enums import CombatOutcome, Rank, Special


def _attacker_wins(attacker: Piece, defender: Piece, reason: str) -> CombatResult:
    return CombatResult(
        outcome=CombatOutcome.ATTACKER_WINS,
        attacker=attacker,
        defender=defender,
        winner=attacker,
        loser=defender,
        reason=reason,
    )


def _defender_wins(attacker: Piece, defender: Piece, reason: str) -> CombatResult:
    return CombatResult(
        outcome=CombatOutcome.DEFENDER_WINS,
        attacker=attacker,
        defender=defender,
        winner=defender,
        loser=attacker,
        reason=reason,
    )


def resolve(attacker: Piece, defender: Piece) -> CombatResult:
    """Decide a battle; does not touch the board."""
    if defender.rank == Rank.BOMB:
        if attacker.special == Special.MINER:
            return _attacker_wins(attacker, defender, "miner defuses bomb")
        return _defender_wins(attacker, defender, "bomb destroys attacker")

    if attacker.special == Special.SPY and defender.rank == Rank.MARSHAL:
        return _attacker_wins(attacker, defender, "spy strikes marshal")

    if attacker.rank > defender.rank:
        return _attacker_wins(attacker, defender, "higher rank")
    if attacker.rank < defender.rank:
        return _defender_wins(attacker, defender, "lower rank")
    return CombatResult(
        outcome=CombatOutcome.BOTH_REMOVED,
        attacker=attacker,
        defender=defender,
        reason="equal rank",
    )


def attacker_relocates(result: CombatResult) -> bool:
    return result.outcome == CombatOutcome.ATTACKER_WINS
