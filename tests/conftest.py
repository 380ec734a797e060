import pytest

from stratego.engine.core import RulesEngine
from stratego.events import AttackResolved, GameOver, MoveMade
from stratego.storage import MemoryLogStore


@pytest.fixture()
def log_store() -> MemoryLogStore:
    return MemoryLogStore()


@pytest.fixture()
def engine(log_store: MemoryLogStore) -> RulesEngine:
    return RulesEngine(log_store=log_store)


@pytest.fixture()
def events(engine: RulesEngine) -> list:
    """Every presentation notification the engine emits, in order."""
    seen: list = []
    for et in (MoveMade, AttackResolved, GameOver):
        engine.bus.subscribe(et, seen.append)
    return seen
