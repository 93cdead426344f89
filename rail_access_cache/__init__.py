"""
Cached access checks for Django projects.

This package puts a cache in front of an authorization engine:
- Deterministic cache keys for (operation, subject, params)
- TTL-bound verdict caching with per-call bypass
- Explicit invalidation that reports failures
- A Django cache adapter and a ``django.contrib.auth`` engine

Quick Start:
    >>> from rail_access_cache import build_access_checker, DjangoPermissionEngine
    >>>
    >>> checker = build_access_checker(DjangoPermissionEngine())
    >>> if checker.check_access("blog.change_post", user.pk, {"post": post.pk}):
    ...     post.save()
    >>>
    >>> # After changing the user's permissions
    >>> checker.invalidate_access("blog.change_post", user.pk, {"post": post.pk})
"""

from .checker import CachedAccessChecker, build_access_checker
from .codec import CacheKeyCodec, VerdictCodec
from .exceptions import (
    AccessCacheConfigurationError,
    AccessCacheError,
    CacheBackendError,
    CacheDeleteError,
    CacheReadError,
    CacheWriteError,
    DelegationError,
    InvalidAccessRequest,
    VerdictDecodeError,
)
from .protocols import AccessCache, AuthorizationEngine
from .settings import AccessCacheSettings
from .types import AccessCheckRequest, Subject


def __getattr__(name):
    # Django-dependent helpers are imported lazily so the core can be used
    # before settings are configured.
    if name in ("DjangoAccessCache", "resolve_access_cache"):
        from . import backends

        return getattr(backends, name)
    if name == "DjangoPermissionEngine":
        from .engines import DjangoPermissionEngine

        return DjangoPermissionEngine
    if name == "require_access":
        from .decorators import require_access

        return require_access
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Types
    "Subject",
    "AccessCheckRequest",
    # Codecs
    "CacheKeyCodec",
    "VerdictCodec",
    # Capabilities
    "AuthorizationEngine",
    "AccessCache",
    # Checker
    "CachedAccessChecker",
    "build_access_checker",
    "AccessCacheSettings",
    # Django integration
    "DjangoAccessCache",
    "resolve_access_cache",
    "DjangoPermissionEngine",
    "require_access",
    # Errors
    "AccessCacheError",
    "InvalidAccessRequest",
    "AccessCacheConfigurationError",
    "CacheBackendError",
    "CacheReadError",
    "CacheWriteError",
    "CacheDeleteError",
    "VerdictDecodeError",
    "DelegationError",
]
