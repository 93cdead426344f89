"""
Django app configuration for rail-access-cache.

Validates the ``RAIL_ACCESS_CACHE`` settings once Django has loaded.
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for rail-access-cache."""

    name = "rail_access_cache"
    verbose_name = "Rail Access Cache"
    label = "rail_access_cache"

    def ready(self):
        try:
            self._validate_configuration()
        except Exception as e:
            logger.error(f"Invalid access cache configuration: {e}")
            # Don't raise in production to avoid breaking the app
            if self._is_debug_mode():
                raise

    def _validate_configuration(self):
        from .settings import AccessCacheSettings

        config = AccessCacheSettings.from_settings()
        config.validate()
        if config.caching_active:
            logger.info(
                "Access cache enabled on '%s' with a %ss TTL",
                config.cache_alias,
                config.caching_duration,
            )
        else:
            logger.debug("Access cache disabled")

    def _is_debug_mode(self):
        from django.conf import settings as django_settings

        return getattr(django_settings, "DEBUG", False)
