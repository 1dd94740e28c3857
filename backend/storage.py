"""
Flat key-value persistence for the player's Riot ID, match history, Arena progress
and the match detail cache.

Every value is JSON and is replaced as a whole on write. Passing ``None`` as the
store (no storage available) makes every getter return its empty default and
every setter a no-op.
"""
import logging
from typing import Any, Protocol

import redis
from pydantic import TypeAdapter, ValidationError

from schemas import ArenaProgress, MatchResult, MatchSummary, RiotId

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "RIOT_ID": "arena-god-riot-id",
    "MATCH_HISTORY": "arena-god-match-history",
    "ARENA_PROGRESS": "arena-god-progress",
    "MATCH_CACHE": "arena-god-match-cache",
}

_match_history_adapter = TypeAdapter(list[MatchResult])
_match_cache_adapter = TypeAdapter(dict[str, MatchSummary])
_raw_map_adapter = TypeAdapter(dict[str, Any])


class KeyValueStore(Protocol):
    """Anything with string get/set, e.g. a redis.Redis client with decode_responses=True."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str): ...


class MemoryStore:
    """In-process store, used when Redis is not wanted."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value


# --- RAW JSON ACCESS ---

def _read(store: KeyValueStore | None, key: str, adapter: TypeAdapter):
    if store is None:
        return None
    try:
        stored = store.get(key)
        return adapter.validate_json(stored) if stored else None
    except redis.exceptions.RedisError as e:
        logger.warning(f"Redis error reading key {key}: {e}")
        return None
    except ValidationError as e:
        logger.warning(f"Discarding unreadable value for key {key}: {e}")
        return None


def _write(store: KeyValueStore | None, key: str, adapter: TypeAdapter, value):
    if store is None:
        return
    try:
        store.set(key, adapter.dump_json(value).decode())
    except redis.exceptions.RedisError as e:
        logger.warning(f"Redis error writing key {key}: {e}")


# --- TYPED ACCESSORS ---

def get_riot_id(store: KeyValueStore | None) -> RiotId | None:
    return _read(store, STORAGE_KEYS["RIOT_ID"], TypeAdapter(RiotId))


def set_riot_id(store: KeyValueStore | None, riot_id: RiotId):
    _write(store, STORAGE_KEYS["RIOT_ID"], TypeAdapter(RiotId), riot_id)


def get_match_history(store: KeyValueStore | None) -> list[MatchResult]:
    return _read(store, STORAGE_KEYS["MATCH_HISTORY"], _match_history_adapter) or []


def set_match_history(store: KeyValueStore | None, history: list[MatchResult]):
    _write(store, STORAGE_KEYS["MATCH_HISTORY"], _match_history_adapter, history)


def get_arena_progress(store: KeyValueStore | None) -> ArenaProgress:
    progress = _read(store, STORAGE_KEYS["ARENA_PROGRESS"], TypeAdapter(ArenaProgress))
    return progress or ArenaProgress(firstPlaceChampions=[])


def set_arena_progress(store: KeyValueStore | None, progress: ArenaProgress):
    _write(store, STORAGE_KEYS["ARENA_PROGRESS"], TypeAdapter(ArenaProgress), progress)


def get_match_cache(store: KeyValueStore | None) -> dict[str, MatchSummary]:
    """Entries are validated one by one so a single bad entry doesn't hide the rest."""
    raw = _read(store, STORAGE_KEYS["MATCH_CACHE"], _raw_map_adapter) or {}
    cache: dict[str, MatchSummary] = {}
    for match_id, entry in raw.items():
        try:
            cache[match_id] = MatchSummary.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"Dropping unreadable cached match {match_id}: {e}")
    return cache


def set_match_cache(store: KeyValueStore | None, cache: dict[str, MatchSummary]):
    _write(store, STORAGE_KEYS["MATCH_CACHE"], _match_cache_adapter, cache)


class MatchCache:
    """
    Match details keyed by match id. Entries are never evicted or expired;
    a match's details do not change once it has been played.
    """

    def __init__(self, store: KeyValueStore | None):
        self.store = store

    def get(self, match_id: str) -> MatchSummary | None:
        return get_match_cache(self.store).get(match_id)

    def put(self, match_id: str, summary: MatchSummary):
        cache = get_match_cache(self.store)
        cache[match_id] = summary
        set_match_cache(self.store, cache)
