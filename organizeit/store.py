"""
Key-value store for demo mode.

The dashboard persists everything as flat JSON records under string keys.
In production this would be a hosted KV table; for the demo we keep the
records in a plain Python dict. Data is lost on restart -- that's fine,
every collection re-seeds itself on first read.

Routes that write a timestamped copy on every poll go through
record_snapshot(), which keeps only the newest HISTORY_LIMIT entries per
history so a long-running process does not grow without bound.

Values are deep-copied on the way in and out so callers can mutate what
they get back without touching the stored record, the same as a store
that round-trips through JSON.
"""

import copy
from typing import Any, Callable

from organizeit.config import HISTORY_LIMIT


class StoreError(Exception):
    """Raised when the backing store cannot serve a read or write."""


class KVStore:
    """Async key-value store backed by an in-process dict."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        value = self._data.get(key)
        return copy.deepcopy(value)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def mset(self, items: dict[str, Any]) -> None:
        for key, value in items.items():
            await self.set(key, value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


async def get_or_seed(store: KVStore, key: str, seed: Callable[[], Any]) -> Any:
    """Return the record under `key`, writing `seed()` there first if it is empty."""
    value = await store.get(key)
    if not value:
        value = seed()
        await store.set(key, value)
    return value


async def record_snapshot(
    store: KVStore,
    prefix: str,
    stamp: Any,
    value: Any,
    keep: int = HISTORY_LIMIT,
) -> None:
    """Write `value` under <prefix>:<stamp> and drop the oldest entries past `keep`.

    The stamps live, oldest first, under <prefix>:index.
    """
    index_key = f"{prefix}:index"
    stamps = await store.get(index_key) or []
    stamps.append(stamp)
    evicted, stamps = stamps[:-keep], stamps[-keep:]

    await store.set(f"{prefix}:{stamp}", value)
    for old in evicted:
        await store.delete(f"{prefix}:{old}")
    await store.set(index_key, stamps)
