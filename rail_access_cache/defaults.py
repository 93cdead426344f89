"""
Default configuration for the rail-access-cache library.

Every setting the library consumes is listed here. Projects override them
through the ``RAIL_ACCESS_CACHE`` dict in their Django settings.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "rail-access-cache"

SETTINGS_NAME = "RAIL_ACCESS_CACHE"

LIBRARY_DEFAULTS: dict[str, Any] = {
    # Seconds a verdict may stay cached. 0 disables caching.
    "caching_duration": 0,
    "cache_enabled": True,
    "cache_alias": "default",
    "key_prefix": "Auth.CachedAccessChecker",
}
