from __future__ import annotations

from .models.enums import MoveError


class RulesError(Exception):
    """Raised for misuse of the engine API. Illegal moves are returned, not raised."""

    kind: MoveError | None = None


class OutOfBoundsError(RulesError, IndexError):
    kind = MoveError.OUT_OF_BOUNDS


class SetupError(RulesError, ValueError):
    pass


class ReentrantCallError(RulesError, RuntimeError):
    pass
