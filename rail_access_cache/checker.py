"""
CachedAccessChecker - cache-aside access checks.

Wraps an authorization engine and a cache. Verdicts are read from the cache
when caching is active for the call, otherwise (or on a miss) the engine is
asked and its verdict stored with the configured TTL.

Cache read and write failures never fail a check: the checker falls back to
the engine. Invalidation failures are raised so callers can escalate.
"""

import logging
from datetime import timedelta
from typing import Any, Mapping, Optional, Union

from .codec import CacheKeyCodec, VerdictCodec
from .exceptions import CacheDeleteError, VerdictDecodeError
from .protocols import AccessCache, AuthorizationEngine
from .settings import AccessCacheSettings, normalize_duration
from .types import AccessCheckRequest, Subject

logger = logging.getLogger(__name__)


class CachedAccessChecker:
    """
    Cache-aside decorator around an ``AuthorizationEngine``.

    Holds only read-only configuration after construction and is safe to
    share between threads, provided the cache is.
    """

    def __init__(
        self,
        engine: AuthorizationEngine,
        cache: Optional[AccessCache] = None,
        caching_duration: Union[int, float, timedelta] = 0,
        cache_enabled: bool = True,
        key_codec: Optional[CacheKeyCodec] = None,
    ):
        self._engine = engine
        self._cache = cache
        self._caching_duration = normalize_duration(caching_duration)
        self._cache_enabled = bool(cache_enabled)
        self._key_codec = key_codec or CacheKeyCodec()

    @property
    def engine(self) -> AuthorizationEngine:
        return self._engine

    @property
    def cache(self) -> Optional[AccessCache]:
        return self._cache

    @property
    def caching_duration(self) -> Union[int, float]:
        return self._caching_duration

    @property
    def key_codec(self) -> CacheKeyCodec:
        return self._key_codec

    def is_caching_active(self, allow_caching: bool = True) -> bool:
        """Whether a call with ``allow_caching`` would read and write the cache."""
        return bool(
            allow_caching
            and self._cache_enabled
            and self._caching_duration > 0
            and self._cache is not None
        )

    # --- Public API ---

    def check_access(
        self,
        operation: str,
        subject: Subject,
        params: Optional[Mapping[str, Any]] = None,
        allow_caching: bool = True,
    ) -> bool:
        """
        Check whether ``subject`` may perform ``operation``.

        Args:
            operation: Name of the operation being checked
            subject: Identifier of the principal
            params: Name-value pairs passed to the engine's business rules
            allow_caching: Set to False to skip the cache for this call only

        Returns:
            The engine's verdict, possibly served from the cache.
        """
        request = AccessCheckRequest(operation, subject, params or {})
        return self.check(request, allow_caching=allow_caching)

    def check(self, request: AccessCheckRequest, allow_caching: bool = True) -> bool:
        """Check an ``AccessCheckRequest``. See ``check_access``."""
        if not self.is_caching_active(allow_caching):
            logger.debug("Access cache bypassed for '%s'", request.operation)
            return self._delegate(request)

        key = self._key_codec.encode_request(request)
        cached = self._get_cached_verdict(key)
        if cached is not None:
            logger.debug("Access cache hit for %s", key)
            return cached

        logger.debug("Access cache miss for %s", key)
        allowed = self._delegate(request)
        self._set_cached_verdict(key, allowed)
        return allowed

    def invalidate_access(
        self,
        operation: str,
        subject: Subject,
        params: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Evict the cached verdict for (operation, subject, params).

        Raises:
            CacheDeleteError: If the cache could not confirm the deletion.
        """
        request = AccessCheckRequest(operation, subject, params or {})
        self.invalidate(request)

    def invalidate(self, request: AccessCheckRequest) -> None:
        """Evict the cached verdict for ``request``. See ``invalidate_access``."""
        if self._cache is None:
            return
        key = self._key_codec.encode_request(request)
        try:
            self._cache.delete(key)
        except CacheDeleteError:
            logger.error("Failed to invalidate access cache entry %s", key)
            raise
        except Exception as exc:
            logger.error("Failed to invalidate access cache entry %s: %s", key, exc)
            raise CacheDeleteError(f"Cache delete failed: {exc}", key=key) from exc
        logger.info("Invalidated access cache entry %s", key)

    # --- Internals ---

    def _delegate(self, request: AccessCheckRequest) -> bool:
        return bool(
            self._engine.check_access(request.operation, request.subject, request.params)
        )

    def _get_cached_verdict(self, key: str) -> Optional[bool]:
        try:
            data = self._cache.get(key)
        except Exception as exc:
            logger.warning("Access cache read failed for %s: %s", key, exc)
            return None
        if data is None:
            return None
        try:
            return VerdictCodec.loads(data)
        except VerdictDecodeError as exc:
            logger.warning("Ignoring unreadable access cache entry %s: %s", key, exc)
            return None

    def _set_cached_verdict(self, key: str, allowed: bool) -> None:
        try:
            self._cache.set(key, VerdictCodec.dumps(allowed), self._caching_duration)
        except Exception as exc:
            logger.warning("Access cache write failed for %s: %s", key, exc)


def build_access_checker(
    engine: AuthorizationEngine,
    cache: Optional[AccessCache] = None,
    **overrides: Any,
) -> CachedAccessChecker:
    """
    Build a checker configured from the ``RAIL_ACCESS_CACHE`` settings.

    The Django cache named by ``cache_alias`` is resolved here, once, unless a
    ``cache`` is passed explicitly. It is attached even when caching is
    disabled so that ``invalidate_access`` still evicts entries written under
    an earlier configuration; reads and writes stay gated by
    ``is_caching_active``.
    """
    config = AccessCacheSettings.from_settings(**overrides)
    config.validate(check_alias=cache is None)
    if cache is None and config.cache_alias_configured():
        from .backends import resolve_access_cache

        cache = resolve_access_cache(config.cache_alias)
    return CachedAccessChecker(
        engine,
        cache=cache,
        caching_duration=config.caching_duration,
        cache_enabled=config.cache_enabled,
        key_codec=CacheKeyCodec(config.key_prefix),
    )


__all__ = ["CachedAccessChecker", "build_access_checker"]
