"""Configuration and environment helpers for the cache.

Reads typed environment variables and exposes LOG_LEVEL. The option
builders re-read the environment on every call so tests and long-lived
processes can change it at runtime.
"""

from __future__ import annotations

import os
from typing import Any, Awaitable, Callable, Optional

from lazycache.models import AsyncCacheOptions, CacheOptions


def _env_int(name: str, default: int, *, minimum: Optional[int] = None) -> int:
    # Unparsable or out-of-range values fall back to the default
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# Logging
LOG_LEVEL = _env_str("LAZYCACHE_LOG_LEVEL", "WARNING").upper()


def options_from_env(on_delete: Optional[Callable[[Any], None]] = None) -> CacheOptions:
    default_ttl = _env_int("LAZYCACHE_DEFAULT_TTL_MS", 0, minimum=0)
    if on_delete is None:
        return CacheOptions(default_ttl=default_ttl)
    return CacheOptions(default_ttl=default_ttl, on_delete=on_delete)


def async_options_from_env(
    on_delete: Optional[Callable[[Any], Optional[Awaitable[None]]]] = None,
) -> AsyncCacheOptions:
    default_ttl = _env_int("LAZYCACHE_DEFAULT_TTL_MS", 0, minimum=0)
    if on_delete is None:
        return AsyncCacheOptions(default_ttl=default_ttl)
    return AsyncCacheOptions(default_ttl=default_ttl, on_delete=on_delete)
