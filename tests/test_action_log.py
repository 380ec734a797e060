from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from stratego.engine.core import RulesEngine
from stratego.events import MoveMade
from stratego.logging_listeners import read_log
from stratego.models.enums import ActionLogResult, MoveError, Rank, Team
from stratego.settings import Settings, configure_logging, get_settings
from stratego.storage import MemoryLogStore, RedisLogStore, make_log_store
from tests.utils.data import add_reserves, blue, place, red


def test_applied_and_illegal_actions_are_logged(engine, log_store):
    add_reserves(engine)
    place(engine, red(Rank.COLONEL), (0, 0))
    place(engine, blue(Rank.MAJOR), (0, 1))
    engine.attempt_move((0, 0), (1, 1))
    engine.attempt_move((0, 0), (0, 1))

    entries = read_log(log_store, engine.state.id).entries
    assert [e.result for e in entries] == [ActionLogResult.ILLEGAL, ActionLogResult.APPLIED]
    illegal, applied = entries
    assert illegal.error == MoveError.ILLEGAL_MOVEMENT and illegal.team == Team.RED
    assert illegal.record is None
    assert applied.record is not None and applied.record.defender_rank == Rank.MAJOR
    assert applied.src == (0, 0) and applied.dest == (0, 1)


def test_memory_store_caps_entries():
    store = MemoryLogStore(max_entries=3)
    for i in range(5):
        store.append("g", str(i))
    assert store.list("g") == ["2", "3", "4"]
    assert store.list("g", limit=1) == ["4"]
    store.clear("g")
    assert store.list("g") == []


def test_redis_store_commands():
    client = MagicMock()
    pipe = client.pipeline.return_value
    client.lrange.return_value = ["a", "b"]
    store = RedisLogStore(client, max_entries=10)

    store.append("g1", '{"x": 1}')
    pipe.rpush.assert_called_once_with("stratego:log:g1", '{"x": 1}')
    pipe.ltrim.assert_called_once_with("stratego:log:g1", -10, -1)
    pipe.execute.assert_called_once()

    assert store.list("g1", limit=2) == ["a", "b"]
    client.lrange.assert_called_once_with("stratego:log:g1", -2, -1)

    store.clear("g1")
    client.delete.assert_called_once_with("stratego:log:g1")


def test_make_log_store_picks_backend():
    assert isinstance(make_log_store(Settings()), MemoryLogStore)
    with patch("stratego.storage.Redis.from_url") as from_url:
        store = make_log_store(Settings(redis_url="redis://localhost:6379/0", action_log_max=7))
    assert isinstance(store, RedisLogStore)
    assert store.max_entries == 7
    from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("STRATEGO_LOG_LEVEL", "debug")
    monkeypatch.setenv("ACTION_LOG_MAX", "25")
    monkeypatch.delenv("REDIS_URL", raising=False)
    s = get_settings()
    assert s.log_level == "DEBUG"
    assert s.action_log_max == 25
    assert s.redis_url is None
    assert s.anti_stall_window == 4


def test_malformed_env_value_is_rejected(monkeypatch):
    monkeypatch.setenv("ACTION_LOG_MAX", "lots")
    with pytest.raises(ValidationError):
        get_settings()
    monkeypatch.setenv("ACTION_LOG_MAX", "10")
    monkeypatch.setenv("ANTI_STALL_WINDOW", "2")
    with pytest.raises(ValidationError):
        get_settings()


def test_engine_without_store_still_runs():
    engine = RulesEngine()
    add_reserves(engine)
    assert engine.attempt_move((8, 0), (8, 1))


def test_read_log_skips_malformed_entries():
    store = MemoryLogStore()
    engine = RulesEngine(log_store=store)
    add_reserves(engine)
    engine.attempt_move((8, 0), (8, 1))
    store.append(engine.state.id, "not json")
    resp = read_log(store, engine.state.id)
    assert len(resp.entries) == 1
    assert resp.entries[0].result == ActionLogResult.APPLIED


def test_handler_failure_is_logged_as_error(engine, log_store):
    add_reserves(engine)

    def broken(ev) -> None:
        raise RuntimeError("renderer crashed")

    engine.bus.subscribe(MoveMade, broken)
    with pytest.raises(RuntimeError):
        engine.attempt_move((8, 0), (8, 1))
    results = [e.result for e in read_log(log_store, engine.state.id).entries]
    assert results == [ActionLogResult.APPLIED, ActionLogResult.ERROR]
    assert engine.turn == Team.BLUE


def test_configure_logging_accepts_settings():
    configure_logging(Settings(log_level="WARNING"))
