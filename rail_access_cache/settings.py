"""
AccessCacheSettings implementation.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional, Union

from .codec import MAX_SEGMENT_LENGTH
from .defaults import LIBRARY_DEFAULTS
from .exceptions import AccessCacheConfigurationError


def normalize_duration(value: Union[int, float, timedelta, None]) -> Union[int, float]:
    """Convert a configured duration to seconds."""
    if value is None:
        return 0
    if isinstance(value, timedelta):
        value = value.total_seconds()
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise AccessCacheConfigurationError(
            f"caching_duration must be a number of seconds, got {value!r}",
            setting="caching_duration",
        )
    if value < 0:
        raise AccessCacheConfigurationError(
            f"caching_duration must not be negative, got {value!r}",
            setting="caching_duration",
        )
    return value


@dataclass
class AccessCacheSettings:
    """Settings controlling how access check verdicts are cached."""

    caching_duration: Union[int, float] = 0
    cache_enabled: bool = True
    cache_alias: str = "default"
    key_prefix: str = "Auth.CachedAccessChecker"

    def __post_init__(self):
        self.caching_duration = normalize_duration(self.caching_duration)
        self.cache_enabled = bool(self.cache_enabled)

    @property
    def caching_active(self) -> bool:
        return self.cache_enabled and self.caching_duration > 0

    @classmethod
    def from_settings(cls, **overrides: Any) -> "AccessCacheSettings":
        from .config_proxy import get_setting

        merged = {key: get_setting(key, default) for key, default in LIBRARY_DEFAULTS.items()}
        merged.update(overrides)
        merged = _normalize_legacy_settings(merged)
        valid_fields = set(cls.__dataclass_fields__.keys())
        return cls(**{k: v for k, v in merged.items() if k in valid_fields})

    def cache_alias_configured(self) -> bool:
        """Whether ``cache_alias`` names a cache defined in Django's ``CACHES``."""
        from django.conf import settings as django_settings

        if not isinstance(self.cache_alias, str) or not self.cache_alias:
            return False
        configured = getattr(django_settings, "CACHES", None) or {}
        return self.cache_alias in configured

    def validate(self, check_alias: bool = True) -> None:
        """Raise AccessCacheConfigurationError if the settings cannot be used."""
        if not isinstance(self.key_prefix, str) or not self.key_prefix:
            raise AccessCacheConfigurationError(
                "key_prefix must be a non-empty string", setting="key_prefix"
            )
        if len(self.key_prefix) > MAX_SEGMENT_LENGTH or any(
            ord(char) <= 32 or ord(char) >= 127 for char in self.key_prefix
        ):
            raise AccessCacheConfigurationError(
                f"key_prefix must be at most {MAX_SEGMENT_LENGTH} printable ASCII "
                "characters without whitespace",
                setting="key_prefix",
            )
        if not self.caching_active:
            return
        if not isinstance(self.cache_alias, str) or not self.cache_alias:
            raise AccessCacheConfigurationError(
                "cache_alias must name a configured cache", setting="cache_alias"
            )
        if check_alias and not self.cache_alias_configured():
            raise AccessCacheConfigurationError(
                f"Cache alias '{self.cache_alias}' is not defined in CACHES",
                setting="cache_alias",
            )


def _normalize_legacy_settings(config: dict[str, Any]) -> dict[str, Any]:
    """Map a ``cache_alias`` of False (disabled cache selector) to ``cache_enabled``."""
    normalized = dict(config)
    alias: Optional[Any] = normalized.get("cache_alias")
    if alias is False or alias is None:
        normalized["cache_enabled"] = False
        normalized["cache_alias"] = LIBRARY_DEFAULTS["cache_alias"]
    return normalized


__all__ = ["AccessCacheSettings", "normalize_duration"]
