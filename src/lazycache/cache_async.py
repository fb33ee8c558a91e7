"""Asyncio flavour of the lazy-eviction cache.

Same expiration policy as lazycache.cache.Cache, but every operation is a
coroutine and whatever on_delete returns is awaited if awaitable. The store
is only mutated between suspension points, so no lock is needed on a single
event loop.
"""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Dict, Generic, Optional, TypeVar

from lazycache.models import (
    AsyncCacheOptions,
    Entry,
    compute_expires_at,
    now_ms,
    resolve_ttl,
    validate_ttl,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class CacheAsync(Generic[T]):
    def __init__(
        self,
        options: Optional[AsyncCacheOptions[T]] = None,
        *,
        default_ttl: Optional[int] = None,
        on_delete: Optional[Callable[[T], Optional[Awaitable[None]]]] = None,
    ) -> None:
        opts = options or AsyncCacheOptions()
        self._default_ttl = validate_ttl(
            opts.default_ttl if default_ttl is None else default_ttl, name="default_ttl"
        )
        self._on_delete = on_delete or opts.on_delete
        self._store: Dict[str, Entry[T]] = {}

    async def _notify(self, value: T) -> None:
        # Plain callables are accepted too; only awaitables are awaited.
        result = self._on_delete(value)
        if inspect.isawaitable(result):
            await result

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    async def set(self, key: str, value: T, ttl: Optional[int] = None) -> None:
        ttl_ms = resolve_ttl(ttl, self._default_ttl)
        self._store[key] = Entry(value=value, expires_at=compute_expires_at(ttl_ms, now_ms()))

    async def get(self, key: str) -> Optional[T]:
        entry = self._store.get(key)
        if entry is None:
            return None

        if entry.is_expired(now_ms()):
            # Drop before awaiting so concurrent lookups already miss.
            del self._store[key]
            logger.debug("evicting %r: expired", key)
            await self._notify(entry.value)
            return None

        return entry.value

    async def delete(self, key: str) -> bool:
        entry = self._store.get(key)
        if entry is None:
            return False

        logger.debug("evicting %r: deleted", key)
        await self._notify(entry.value)

        # The hook may have replaced or removed the key meanwhile.
        if self._store.get(key) is entry:
            del self._store[key]
        return True

    async def clear(self) -> None:
        # Snapshot and empty first; hooks are then awaited one by one.
        entries = list(self._store.values())
        self._store.clear()
        if entries:
            logger.debug("evicting %d entries: cleared", len(entries))
        for entry in entries:
            await self._notify(entry.value)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        entry = self._store.get(key)  # type: ignore[arg-type]
        return entry is not None and not entry.is_expired(now_ms())
