from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from redis import Redis

if TYPE_CHECKING:
    from .settings import Settings

PREFIX = "stratego:log"


class ActionLogStore(Protocol):
    def append(self, game_id: str, raw: str) -> None: ...
    def list(self, game_id: str, limit: int = 50) -> list[str]: ...
    def clear(self, game_id: str) -> None: ...


class MemoryLogStore:
    """In-process action log; oldest entries are dropped past `max_entries`."""

    def __init__(self, max_entries: int = 1000) -> None:
        self._data: dict[str, list[str]] = {}
        self.max_entries = max_entries

    def append(self, game_id: str, raw: str) -> None:
        lst = self._data.setdefault(game_id, [])
        lst.append(raw)
        if len(lst) > self.max_entries:
            del lst[: len(lst) - self.max_entries]

    def list(self, game_id: str, limit: int = 50) -> list[str]:
        return self._data.get(game_id, [])[-limit:]

    def clear(self, game_id: str) -> None:
        self._data.pop(game_id, None)


class RedisLogStore:
    """
    JSON-over-Redis action log using list keys like: stratego:log:<game_id>
    """

    def __init__(self, client: Redis, max_entries: int = 1000, key_prefix: str = PREFIX):
        self.client = client
        self.max_entries = max_entries
        self.key_prefix = key_prefix.rstrip(":")

    def _key(self, game_id: str) -> str:
        return f"{self.key_prefix}:{game_id}"

    def append(self, game_id: str, raw: str) -> None:
        k = self._key(game_id)
        pipe = self.client.pipeline()
        pipe.rpush(k, raw)
        # keep only the newest max_entries
        pipe.ltrim(k, -self.max_entries, -1)
        pipe.execute()

    def list(self, game_id: str, limit: int = 50) -> list[str]:
        return list(self.client.lrange(self._key(game_id), -limit, -1))

    def clear(self, game_id: str) -> None:
        self.client.delete(self._key(game_id))


def make_log_store(settings: Settings) -> ActionLogStore:
    if settings.redis_url:
        client = Redis.from_url(settings.redis_url, decode_responses=True)
        return RedisLogStore(client, max_entries=settings.action_log_max)
    return MemoryLogStore(max_entries=settings.action_log_max)
