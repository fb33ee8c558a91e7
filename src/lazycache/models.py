"""Entry and option dataclasses shared by both cache variants.

Also holds the small pieces of expiration policy both variants apply the
same way: reading the clock, resolving a TTL and computing a deadline.
Timestamps are integer milliseconds since epoch; 0 means "never expires".
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from lazycache.errors import ValidationError

T = TypeVar("T")

NEVER = 0


def _noop(value: object) -> None:
    return None


async def _async_noop(value: object) -> None:
    return None


@dataclass(slots=True)
class Entry(Generic[T]):
    value: T
    expires_at: int  # epoch ms, NEVER for no deadline

    def is_expired(self, now: int) -> bool:
        # An entry expiring exactly at `now` is still live
        return self.expires_at != NEVER and self.expires_at < now


@dataclass(frozen=True)
class CacheOptions(Generic[T]):
    """Options for the synchronous cache.

    - default_ttl: milliseconds applied when set() gets no ttl; 0 disables expiry
    - on_delete: called with every evicted value
    """

    default_ttl: int = 0
    on_delete: Callable[[T], None] = _noop


@dataclass(frozen=True)
class AsyncCacheOptions(Generic[T]):
    """Options for the asynchronous cache; on_delete is awaited when it returns an awaitable."""

    default_ttl: int = 0
    on_delete: Callable[[T], Optional[Awaitable[None]]] = _async_noop


def now_ms() -> int:
    return int(time.time() * 1000)


def validate_ttl(ttl: object, *, name: str = "ttl") -> int:
    # bool is an int subclass but never a meaningful duration
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise ValidationError(f"{name} must be an integer number of milliseconds, got {ttl!r}")
    if ttl < 0:
        raise ValidationError(f"{name} must be non-negative, got {ttl}")
    return ttl


def resolve_ttl(ttl: Optional[int], default_ttl: int) -> int:
    if ttl is None:
        return default_ttl
    return validate_ttl(ttl)


def compute_expires_at(ttl: int, now: int) -> int:
    return NEVER if ttl == 0 else now + ttl
