from __future__ import annotations

from enum import Enum, IntEnum

Coord = tuple[int, int]  # (column, row)


class Team(str, Enum):
    RED = "RED"
    BLUE = "BLUE"


class Rank(IntEnum):
    """
    Combat strength of a piece. Higher beats lower, with three overrides:
    - SPY beats MARSHAL when it is the attacker
    - MINER defuses BOMB
    - BOMB and FLAG never move
    """

    MARSHAL = 10
    GENERAL = 9
    COLONEL = 8
    MAJOR = 7
    CAPTAIN = 6
    LIEUTENANT = 5
    SERGEANT = 4
    MINER = 3
    CORPORAL = 2
    SCOUT = 1
    SPY = 0
    BOMB = -1
    FLAG = -2


class Special(str, Enum):
    MINER = "MINER"
    SPY = "SPY"
    SCOUT = "SCOUT"


class MoveError(str, Enum):
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    NO_PIECE_AT_SOURCE = "NO_PIECE_AT_SOURCE"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    IMMOBILE = "IMMOBILE"
    NULL_MOVE = "NULL_MOVE"
    LAKE_BLOCKED = "LAKE_BLOCKED"
    FRIENDLY_FIRE = "FRIENDLY_FIRE"
    ILLEGAL_MOVEMENT = "ILLEGAL_MOVEMENT"
    REPETITION_BLOCKED = "REPETITION_BLOCKED"
    OCCUPIED = "OCCUPIED"
    GAME_FINISHED = "GAME_FINISHED"


class CombatOutcome(str, Enum):
    ATTACKER_WINS = "ATTACKER_WINS"
    DEFENDER_WINS = "DEFENDER_WINS"
    BOTH_REMOVED = "BOTH_REMOVED"


class ActionKind(str, Enum):
    MOVE = "MOVE"
    ATTACK = "ATTACK"


class GameStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


class ActionLogResult(str, Enum):
    APPLIED = "APPLIED"
    ILLEGAL = "ILLEGAL"
    ERROR = "ERROR"
