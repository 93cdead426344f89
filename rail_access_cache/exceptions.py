"""
Exceptions raised by the access cache.

Cache read and write failures are caught inside ``CachedAccessChecker`` and
never reach callers of ``check_access``. Delete failures are surfaced from
``invalidate_access``. Errors raised by the authorization engine are never
wrapped.
"""

from typing import Optional


class AccessCacheError(Exception):
    """Base exception for access cache errors."""


class InvalidAccessRequest(AccessCacheError, ValueError):
    """Raised when an access check request is malformed."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        self.field_name = field_name
        super().__init__(message)


class AccessCacheConfigurationError(AccessCacheError):
    """Raised when the access cache settings are invalid."""

    def __init__(self, message: str, setting: Optional[str] = None):
        self.setting = setting
        super().__init__(message)


class CacheBackendError(AccessCacheError):
    """Raised when the underlying cache fails to serve an operation."""

    operation = "access"

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class CacheReadError(CacheBackendError):
    """Raised when a cached verdict cannot be read."""

    operation = "get"


class CacheWriteError(CacheBackendError):
    """Raised when a verdict cannot be stored."""

    operation = "set"


class CacheDeleteError(CacheBackendError):
    """Raised when a cached verdict cannot be invalidated."""

    operation = "delete"


class VerdictDecodeError(AccessCacheError):
    """Raised when a cached value is not a serialized verdict."""

    def __init__(self, message: str, value: object = None):
        self.value = value
        super().__init__(message)


class DelegationError(AccessCacheError):
    """
    Base class authorization engines may raise for authoritative failures.

    The checker propagates it (and any other engine exception) unchanged.
    """


__all__ = [
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
