from __future__ import annotations


class LazyCacheError(Exception):
    """Base error for the cache package."""


class ValidationError(LazyCacheError):
    """Raised when a TTL argument is invalid."""
