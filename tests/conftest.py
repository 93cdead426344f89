"""
Shared fixtures and test doubles for the access cache tests.
"""

import pytest

from rail_access_cache.config_proxy import clear_runtime_settings, settings_proxy
from rail_access_cache.decorators import reset_default_checker


class CountingEngine:
    """Authorization engine stub returning a fixed verdict and counting calls."""

    def __init__(self, verdict=True, error=None):
        self.verdict = verdict
        self.error = error
        self.calls = []

    @property
    def call_count(self):
        return len(self.calls)

    def check_access(self, operation, subject, params):
        self.calls.append((operation, subject, dict(params)))
        if self.error is not None:
            raise self.error
        return self.verdict


class RecordingCache:
    """In-memory access cache that records every operation."""

    def __init__(self, fail_on=()):
        self.data = {}
        self.fail_on = set(fail_on)
        self.gets = []
        self.sets = []
        self.deletes = []

    def get(self, key):
        self.gets.append(key)
        if "get" in self.fail_on:
            raise ConnectionError("cache unavailable")
        return self.data.get(key)

    def set(self, key, value, ttl):
        self.sets.append((key, value, ttl))
        if "set" in self.fail_on:
            raise ConnectionError("cache unavailable")
        self.data[key] = value

    def delete(self, key):
        self.deletes.append(key)
        if "delete" in self.fail_on:
            raise ConnectionError("cache unavailable")
        self.data.pop(key, None)


@pytest.fixture
def engine():
    return CountingEngine(verdict=True)


@pytest.fixture
def recording_cache():
    return RecordingCache()


@pytest.fixture
def make_cache():
    return RecordingCache


@pytest.fixture
def make_engine():
    return CountingEngine


@pytest.fixture(autouse=True)
def reset_access_cache_state():
    clear_runtime_settings()
    reset_default_checker()
    yield
    clear_runtime_settings()
    settings_proxy.clear_cache()
    reset_default_checker()
