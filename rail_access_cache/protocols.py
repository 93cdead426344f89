"""
Capabilities consumed by ``CachedAccessChecker``.
"""

from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

from .types import Subject

TTL = Union[int, float]


@runtime_checkable
class AuthorizationEngine(Protocol):
    """Authoritative, uncached access decisions."""

    def check_access(
        self, operation: str, subject: Subject, params: Mapping[str, Any]
    ) -> bool:
        ...


@runtime_checkable
class AccessCache(Protocol):
    """
    String key/value store with per-entry expiry.

    ``get`` returns ``None`` only when the key is absent or expired.
    Deleting an absent key is not an error.
    """

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str, ttl: TTL) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


__all__ = ["AuthorizationEngine", "AccessCache", "TTL"]
