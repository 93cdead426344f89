"""
Test utilities for rail-access-cache.
"""

from contextlib import contextmanager
from typing import Any, Optional

from django.test import override_settings


@contextmanager
def override_access_cache_settings(settings: Optional[dict[str, Any]] = None, **overrides: Any):
    """
    Override ``RAIL_ACCESS_CACHE`` for the duration of the block.

    Runtime overrides are suspended so the given settings take effect.
    """
    from .config_proxy import _RUNTIME_SETTINGS, settings_proxy
    from .decorators import reset_default_checker

    original_runtime = _RUNTIME_SETTINGS.copy()
    _RUNTIME_SETTINGS.clear()

    values = dict(settings or {})
    values.update(overrides)

    with override_settings(RAIL_ACCESS_CACHE=values):
        settings_proxy.clear_cache()
        reset_default_checker()
        try:
            yield
        finally:
            _RUNTIME_SETTINGS.clear()
            _RUNTIME_SETTINGS.update(original_runtime)
            settings_proxy.clear_cache()
            reset_default_checker()


__all__ = ["override_access_cache_settings"]
