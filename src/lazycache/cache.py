"""In-memory key-value cache with per-entry TTL and lazy eviction.

Entries carry an absolute deadline (epoch milliseconds, 0 = never). There is
no background sweep: an expired entry is only reaped when get() touches it,
at which point on_delete receives the stale value.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Generic, Optional, TypeVar

from lazycache.models import (
    CacheOptions,
    Entry,
    compute_expires_at,
    now_ms,
    resolve_ttl,
    validate_ttl,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Cache(Generic[T]):
    """Synchronous cache; on_delete runs before the triggering call returns."""

    def __init__(
        self,
        options: Optional[CacheOptions[T]] = None,
        *,
        default_ttl: Optional[int] = None,
        on_delete: Optional[Callable[[T], None]] = None,
    ) -> None:
        opts = options or CacheOptions()
        self._default_ttl = validate_ttl(
            opts.default_ttl if default_ttl is None else default_ttl, name="default_ttl"
        )
        self._on_delete = on_delete or opts.on_delete
        self._store: Dict[str, Entry[T]] = {}

        # Threads preempt; RLock lets on_delete call back into this cache.
        self._lock = threading.RLock()

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    def set(self, key: str, value: T, ttl: Optional[int] = None) -> None:
        """Store value under key, replacing any previous entry.

        ttl is in milliseconds; None uses default_ttl and 0 never expires.
        A replaced value is dropped without calling on_delete.
        """
        ttl_ms = resolve_ttl(ttl, self._default_ttl)
        with self._lock:
            self._store[key] = Entry(value=value, expires_at=compute_expires_at(ttl_ms, now_ms()))

    def get(self, key: str) -> Optional[T]:
        """Return the cached value, or None when missing or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            if entry.is_expired(now_ms()):
                # Drop first so a hook that looks the key up again just misses.
                del self._store[key]
                logger.debug("evicting %r: expired", key)
                self._on_delete(entry.value)
                return None

            return entry.value

    def delete(self, key: str) -> bool:
        """Evict key regardless of expiry. Returns whether it was stored."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return False

            logger.debug("evicting %r: deleted", key)
            self._on_delete(entry.value)

            # The hook may have replaced or removed the key meanwhile.
            if self._store.get(key) is entry:
                del self._store[key]
            return True

    def clear(self) -> None:
        """Evict every entry, calling on_delete once per stored value."""
        with self._lock:
            entries = list(self._store.items())
            if entries:
                logger.debug("evicting %d entries: cleared", len(entries))
            for _, entry in entries:
                self._on_delete(entry.value)

            # Keep whatever the hooks stored while clearing.
            for key, entry in entries:
                if self._store.get(key) is entry:
                    del self._store[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        # Peek only: never reaps, never calls on_delete
        with self._lock:
            entry = self._store.get(key)  # type: ignore[arg-type]
            return entry is not None and not entry.is_expired(now_ms())
