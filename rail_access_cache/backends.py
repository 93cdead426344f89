"""
Django cache adapter for the access cache.

Wraps any ``django.core.cache.backends.base.BaseCache`` so it satisfies the
``AccessCache`` protocol. Backend exceptions are re-raised as
``CacheReadError``, ``CacheWriteError`` or ``CacheDeleteError`` carrying the
key involved.
"""

import logging
from typing import TYPE_CHECKING, Optional

from django.core.cache import InvalidCacheBackendError, caches

from .exceptions import (
    AccessCacheConfigurationError,
    CacheDeleteError,
    CacheReadError,
    CacheWriteError,
)
from .protocols import TTL

if TYPE_CHECKING:
    from django.core.cache.backends.base import BaseCache

logger = logging.getLogger(__name__)

_MISSING = object()


class DjangoAccessCache:
    """Access cache backed by a Django cache backend."""

    def __init__(self, backend: "BaseCache", alias: Optional[str] = None):
        self.backend = backend
        self.alias = alias

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.backend.get(key, _MISSING)
        except Exception as exc:
            raise CacheReadError(f"Cache read failed: {exc}", key=key) from exc
        if value is _MISSING:
            return None
        return value

    def set(self, key: str, value: str, ttl: TTL) -> None:
        try:
            self.backend.set(key, value, timeout=ttl)
        except Exception as exc:
            raise CacheWriteError(f"Cache write failed: {exc}", key=key) from exc

    def delete(self, key: str) -> None:
        try:
            self.backend.delete(key)
        except Exception as exc:
            raise CacheDeleteError(f"Cache delete failed: {exc}", key=key) from exc

    def __repr__(self) -> str:
        return f"<DjangoAccessCache alias={self.alias!r}>"


def resolve_access_cache(alias: str = "default") -> DjangoAccessCache:
    """Build an access cache for the Django cache configured under ``alias``."""
    try:
        backend = caches[alias]
    except InvalidCacheBackendError as exc:
        raise AccessCacheConfigurationError(
            f"Could not find cache alias '{alias}': {exc}", setting="cache_alias"
        ) from exc
    logger.debug("Resolved access cache backend '%s'", alias)
    return DjangoAccessCache(backend, alias=alias)


__all__ = ["DjangoAccessCache", "resolve_access_cache"]
