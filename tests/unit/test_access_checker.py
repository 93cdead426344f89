"""
Unit tests for CachedAccessChecker.
"""

import logging
from datetime import timedelta

import pytest

from rail_access_cache import (
    AccessCacheConfigurationError,
    AccessCheckRequest,
    CacheDeleteError,
    CachedAccessChecker,
    CacheKeyCodec,
    DelegationError,
    InvalidAccessRequest,
    VerdictCodec,
)

pytestmark = pytest.mark.unit


def _checker(engine, cache, duration=300, **kwargs):
    return CachedAccessChecker(engine, cache=cache, caching_duration=duration, **kwargs)


def test_cache_hit_skips_engine(engine, recording_cache):
    key = CacheKeyCodec().encode("editPost", 42, {})
    recording_cache.data[key] = VerdictCodec.dumps(False)
    checker = _checker(engine, recording_cache)

    assert checker.check_access("editPost", 42) is False
    assert engine.call_count == 0


def test_cache_miss_populates_cache(engine, recording_cache):
    checker = _checker(engine, recording_cache)

    assert checker.check_access("editPost", 42, {"post": 1}) is True
    assert checker.check_access("editPost", 42, {"post": 1}) is True
    assert engine.call_count == 1
    key = CacheKeyCodec().encode("editPost", 42, {"post": 1})
    assert recording_cache.sets == [(key, "1", 300)]


def test_cached_denial_is_not_a_miss(make_engine, recording_cache):
    engine = make_engine(verdict=False)
    checker = _checker(engine, recording_cache)

    assert checker.check_access("editPost", 42) is False
    assert checker.check_access("editPost", 42) is False
    assert engine.call_count == 1


def test_reordered_params_hit_the_same_entry(engine, recording_cache):
    checker = _checker(engine, recording_cache)

    checker.check_access("editPost", 42, {"a": 1, "b": 2})
    checker.check_access("editPost", 42, {"b": 2, "a": 1})
    assert engine.call_count == 1


def test_bypass_always_delegates_and_never_writes(engine, recording_cache):
    key = CacheKeyCodec().encode("editPost", 42, {})
    recording_cache.data[key] = VerdictCodec.dumps(False)
    checker = _checker(engine, recording_cache)

    assert checker.check_access("editPost", 42, allow_caching=False) is True
    assert checker.check_access("editPost", 42, allow_caching=False) is True
    assert engine.call_count == 2
    assert recording_cache.gets == []
    assert recording_cache.sets == []


@pytest.mark.parametrize(
    "duration, enabled",
    [(0, True), (0.0, True), (timedelta(0), True), (300, False)],
)
def test_disabled_caching_never_touches_cache(engine, recording_cache, duration, enabled):
    checker = _checker(engine, recording_cache, duration=duration, cache_enabled=enabled)

    checker.check_access("editPost", 42)
    checker.check_access("editPost", 42)
    assert engine.call_count == 2
    assert recording_cache.gets == []
    assert recording_cache.sets == []
    assert checker.is_caching_active() is False


def test_checker_without_cache_delegates(engine):
    checker = CachedAccessChecker(engine, caching_duration=300)

    assert checker.check_access("editPost", 42) is True
    assert checker.check_access("editPost", 42) is True
    assert engine.call_count == 2
    checker.invalidate_access("editPost", 42)


def test_timedelta_duration_is_used_as_ttl(engine, recording_cache):
    checker = _checker(engine, recording_cache, duration=timedelta(minutes=2))

    checker.check_access("op", 1)
    assert recording_cache.sets[0][2] == 120


def test_negative_duration_is_rejected(engine, recording_cache):
    with pytest.raises(AccessCacheConfigurationError):
        _checker(engine, recording_cache, duration=-1)


def test_invalidation_forces_delegation(engine, recording_cache):
    checker = _checker(engine, recording_cache)

    checker.check_access("editPost", 42, {"post": 1})
    checker.invalidate_access("editPost", 42, {"post": 1})
    checker.check_access("editPost", 42, {"post": 1})
    checker.check_access("editPost", 42, {"post": 1})
    assert engine.call_count == 2


def test_invalidation_only_evicts_matching_entry(engine, recording_cache):
    checker = _checker(engine, recording_cache)

    checker.check_access("editPost", 42)
    checker.check_access("editPost", 43)
    checker.invalidate_access("editPost", 42)
    checker.check_access("editPost", 43)
    assert engine.call_count == 2


def test_invalidating_missing_entry_is_noop(engine, recording_cache):
    checker = _checker(engine, recording_cache)

    checker.invalidate_access("editPost", 42)
    assert len(recording_cache.deletes) == 1


def test_invalidation_works_while_caching_disabled(engine, recording_cache):
    key = CacheKeyCodec().encode("editPost", 42, {})
    recording_cache.data[key] = "1"
    checker = _checker(engine, recording_cache, duration=0)

    checker.invalidate_access("editPost", 42)
    assert key not in recording_cache.data


def test_read_error_fails_open(engine, make_cache, caplog):
    cache = make_cache(fail_on={"get"})
    checker = _checker(engine, cache)

    with caplog.at_level(logging.WARNING, logger="rail_access_cache.checker"):
        assert checker.check_access("editPost", 42) is True
    assert engine.call_count == 1
    assert "read failed" in caplog.text


def test_write_error_still_returns_verdict(make_engine, make_cache):
    engine = make_engine(verdict=False)
    cache = make_cache(fail_on={"set"})
    checker = _checker(engine, cache)

    assert checker.check_access("editPost", 42) is False
    assert checker.check_access("editPost", 42) is False
    assert engine.call_count == 2


def test_corrupt_entry_is_treated_as_miss(engine, recording_cache):
    key = CacheKeyCodec().encode("editPost", 42, {})
    recording_cache.data[key] = "b:1;"
    checker = _checker(engine, recording_cache)

    assert checker.check_access("editPost", 42) is True
    assert engine.call_count == 1
    assert recording_cache.data[key] == "1"


def test_delete_error_is_raised(engine, make_cache):
    cache = make_cache(fail_on={"delete"})
    checker = _checker(engine, cache)

    with pytest.raises(CacheDeleteError) as exc_info:
        checker.invalidate_access("editPost", 42)
    assert exc_info.value.key == CacheKeyCodec().encode("editPost", 42, {})
    assert isinstance(exc_info.value.__cause__, ConnectionError)


def test_engine_errors_propagate_unchanged(make_engine, recording_cache):
    error = DelegationError("role store offline")
    engine = make_engine(error=error)
    checker = _checker(engine, recording_cache)

    with pytest.raises(DelegationError) as exc_info:
        checker.check_access("editPost", 42)
    assert exc_info.value is error
    assert recording_cache.sets == []


def test_arbitrary_engine_errors_are_not_wrapped(make_engine, recording_cache):
    engine = make_engine(error=RuntimeError("boom"))
    checker = _checker(engine, recording_cache)

    with pytest.raises(RuntimeError):
        checker.check_access("editPost", 42)


def test_invalid_request_is_rejected_before_any_io(engine, recording_cache):
    checker = _checker(engine, recording_cache)

    with pytest.raises(InvalidAccessRequest):
        checker.check_access("", 42)
    assert engine.call_count == 0
    assert recording_cache.gets == []


def test_engine_receives_request_values(engine, recording_cache):
    checker = _checker(engine, recording_cache)

    checker.check(AccessCheckRequest("editPost", "alice", {"post": 9}))
    assert engine.calls == [("editPost", "alice", {"post": 9})]


def test_custom_key_codec(engine, recording_cache):
    checker = _checker(engine, recording_cache, key_codec=CacheKeyCodec("tenant-1"))

    checker.check_access("op", 1)
    assert recording_cache.sets[0][0].startswith("tenant-1:op:1:")


def test_edit_post_scenario(engine, recording_cache):
    checker = _checker(engine, recording_cache)

    assert checker.check_access("editPost", 42, {}) is True
    assert engine.call_count == 1
    assert checker.check_access("editPost", 42, {}) is True
    assert engine.call_count == 1

    checker.invalidate_access("editPost", 42, {})
    assert checker.check_access("editPost", 42, {}) is True
    assert engine.call_count == 2
