"""
Configuration management for rail-access-cache.

Settings are resolved in the following order:
1. Runtime overrides (via configure_runtime_settings)
2. Django settings (RAIL_ACCESS_CACHE)
3. Library defaults (LIBRARY_DEFAULTS)
"""

from typing import Any

from django.conf import settings

from .defaults import LIBRARY_DEFAULTS, SETTINGS_NAME

# Runtime storage for overrides (avoids modifying Django settings)
_RUNTIME_SETTINGS: dict[str, Any] = {}

_MISSING = object()


class SettingsProxy:
    """Proxy for reading access cache settings with hierarchical resolution."""

    def __init__(self):
        self._cache: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value, caching the resolved value.

        Args:
            key: Setting key to retrieve
            default: Default value if setting is not found

        Returns:
            The setting value from the highest priority source
        """
        if key in self._cache:
            return self._cache[key]

        for source in (_RUNTIME_SETTINGS, self._get_django_settings(), LIBRARY_DEFAULTS):
            value = source.get(key, _MISSING) if isinstance(source, dict) else _MISSING
            if value is not _MISSING:
                self._cache[key] = value
                return value

        self._cache[key] = default
        return default

    def _get_django_settings(self) -> dict[str, Any]:
        return getattr(settings, SETTINGS_NAME, None) or {}

    def clear_cache(self) -> None:
        self._cache.clear()


# Global settings proxy instance
settings_proxy = SettingsProxy()


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value using the hierarchical settings system."""
    return settings_proxy.get(key, default)


def configure_runtime_settings(clear_existing: bool = False, **overrides: Any) -> None:
    """
    Override settings at runtime without touching Django settings.

    Args:
        clear_existing: Whether to drop previous runtime overrides first
        **overrides: Setting key-value pairs to override
    """
    if clear_existing:
        _RUNTIME_SETTINGS.clear()
    _RUNTIME_SETTINGS.update(overrides)
    settings_proxy.clear_cache()


def clear_runtime_settings() -> None:
    _RUNTIME_SETTINGS.clear()
    settings_proxy.clear_cache()
