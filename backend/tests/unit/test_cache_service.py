# backend/tests/unit/test_cache_service.py
"""
Unit tests for CacheService with the in-memory backend and a mocked Redis.
"""

from datetime import date, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from classroom_scheduler.core.config import settings
from classroom_scheduler.services.cache_service import (
    CacheKeyBuilder,
    CacheService,
    CircuitBreaker,
    CircuitState,
    get_cache_service,
)


class TestCacheKeyBuilder:
    def test_schedule_prefix_and_date_formatting(self):
        assert CacheKeyBuilder.build("schedule", "date", date(2024, 1, 8)) == "sched:date:2024-01-08"

    def test_unknown_prefix_is_kept(self):
        assert CacheKeyBuilder.build("misc", 5) == "misc:5"


class TestInMemoryCache:
    @pytest.fixture
    def cache(self):
        return CacheService()

    def test_backend_is_memory(self, cache):
        assert cache.backend == "memory"

    def test_set_get_delete(self, cache):
        assert cache.set("sched:detail:1", {"id": 1})
        assert cache.get("sched:detail:1") == {"id": 1}

        assert cache.delete("sched:detail:1")
        assert cache.get("sched:detail:1") is None

    def test_expired_entries_are_misses(self, cache):
        cache.set("sched:detail:1", {"id": 1})
        cache._memory_expiry["sched:detail:1"] = datetime.now() - timedelta(seconds=1)

        assert cache.get("sched:detail:1") is None
        assert "sched:detail:1" not in cache._memory_cache

    def test_delete_pattern_only_touches_matching_keys(self, cache):
        cache.set("sched:detail:1", 1)
        cache.set("sched:date:2024-01-08", [1])
        cache.set("room:1", {"id": 1})

        assert cache.delete_pattern("sched:*") == 2
        assert cache.get("room:1") == {"id": 1}

    def test_stats(self, cache):
        cache.set("k", 1)
        cache.get("k")
        cache.get("missing")

        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == "50.00%"
        assert stats["circuit_breaker"]["state"] == "closed"


class TestRedisBackedCache:
    def test_values_round_trip_through_json(self):
        redis_client = MagicMock()
        redis_client.get.return_value = '{"id": 1}'
        redis_client.setex.return_value = True
        cache = CacheService(None, redis_client)

        assert cache.set("sched:detail:1", {"id": 1}, ttl=30)
        redis_client.setex.assert_called_once_with("sched:detail:1", 30, '{"id": 1}')
        assert cache.get("sched:detail:1") == {"id": 1}

    def test_default_ttl_comes_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "cache_ttl_seconds", 45)
        redis_client = MagicMock()
        redis_client.setex.return_value = True
        cache = CacheService(None, redis_client)

        assert cache.set("sched:detail:1", {"id": 1})
        redis_client.setex.assert_called_once_with("sched:detail:1", 45, '{"id": 1}')

    def test_redis_errors_degrade_to_miss(self):
        redis_client = MagicMock()
        redis_client.get.side_effect = RedisConnectionError("down")
        cache = CacheService(None, redis_client)

        assert cache.get("sched:detail:1") is None
        assert cache.get_stats()["errors"] == 1


class TestCircuitBreaker:
    def test_opens_after_threshold(self):
        breaker = CircuitBreaker(failure_threshold=2, recovery_timeout=60)

        def failing():
            raise RedisConnectionError("down")

        with pytest.raises(RedisConnectionError):
            breaker.call(failing)
        assert breaker.call(failing) is None
        assert breaker.state == CircuitState.OPEN

    def test_open_circuit_skips_calls(self):
        breaker = CircuitBreaker(failure_threshold=1, recovery_timeout=60)
        breaker._on_failure()
        calls = []

        def func():
            calls.append(1)

        assert breaker.call(func) is None
        assert calls == []


class TestGetCacheService:
    def test_disabled_returns_none(self, monkeypatch):
        monkeypatch.setattr(settings, "cache_enabled", False)

        assert get_cache_service() is None

    def test_without_redis_url_uses_memory(self, monkeypatch):
        monkeypatch.setattr(settings, "cache_enabled", True)
        monkeypatch.setattr(settings, "redis_url", None)

        cache = get_cache_service()

        assert cache is not None
        assert cache.backend == "memory"
