# backend/classroom_scheduler/services/cache_service.py
"""
Cache Service for the classroom scheduler.

Centralizes caching with key management, invalidation and statistics.
Redis is used when ``settings.redis_url`` is configured; otherwise an
in-process dictionary with expiry stands in.
"""

from datetime import date, datetime, time, timedelta
from enum import Enum
import fnmatch
import json
import logging
import threading
from typing import Any, Callable, Dict, Optional, TypeVar, Union

import redis
from redis import Redis
from redis.exceptions import RedisError
from sqlalchemy.orm import Session

from ..core.config import settings
from .base import BaseService

logger = logging.getLogger(__name__)


T = TypeVar("T")

# Cached schedule payloads embed room, course and user labels
SCHEDULE_CACHE_PATTERN = "sched:*"


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, reject calls
    HALF_OPEN = "half_open"  # Testing if service recovered


class CircuitBreaker:
    """
    Circuit breaker for cache calls.

    After ``failure_threshold`` consecutive failures the circuit opens and
    calls are skipped until ``recovery_timeout`` seconds have passed.
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout: int = 60,
        expected_exception: type[BaseException] = RedisError,
    ) -> None:
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exception = expected_exception

        self._failure_count: int = 0
        self._last_failure_time: Optional[datetime] = None
        self._state: CircuitState = CircuitState.CLOSED
        self._lock = threading.Lock()

    @property
    def state(self) -> CircuitState:
        with self._lock:
            if self._state == CircuitState.OPEN and self._last_failure_time:
                elapsed = (datetime.now() - self._last_failure_time).total_seconds()
                if elapsed >= self.recovery_timeout:
                    self._state = CircuitState.HALF_OPEN
            return self._state

    def call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> Optional[T]:
        """
        Execute function with circuit breaker protection.

        Returns None without calling ``func`` while the circuit is open.
        Failures below the threshold propagate to the caller.
        """
        if self.state == CircuitState.OPEN:
            logger.warning(f"Circuit breaker is OPEN, skipping {func.__name__}")
            return None

        try:
            result = func(*args, **kwargs)
            self._on_success()
            return result
        except self.expected_exception:
            self._on_failure()
            if self.state == CircuitState.CLOSED:
                raise
            return None

    def _on_success(self) -> None:
        with self._lock:
            self._failure_count = 0
            if self._state == CircuitState.HALF_OPEN:
                self._state = CircuitState.CLOSED
                logger.info("Circuit breaker recovered, closing circuit")

    def _on_failure(self) -> None:
        with self._lock:
            self._failure_count += 1
            self._last_failure_time = datetime.now()

            if self._failure_count >= self.failure_threshold:
                self._state = CircuitState.OPEN
                logger.warning(f"Circuit breaker opened after {self._failure_count} failures")


class CacheKeyBuilder:
    """Standardized cache key generation."""

    # Key prefixes for different domains
    PREFIXES = {
        "schedule": "sched",
        "room": "room",
        "user": "user",
    }

    @staticmethod
    def build(*parts: Union[str, int, date, time]) -> str:
        """
        Build a cache key from parts.

        Examples:
            build('schedule', 'date', date(2024, 1, 8)) -> 'sched:date:2024-01-08'
        """
        formatted_parts = []

        for part in parts:
            if isinstance(part, (date, datetime, time)):
                formatted_parts.append(part.isoformat())
            else:
                formatted_parts.append(str(part))

        if parts:
            first = parts[0]
            if isinstance(first, str) and first in CacheKeyBuilder.PREFIXES:
                formatted_parts[0] = CacheKeyBuilder.PREFIXES[first]

        return ":".join(formatted_parts)


class CacheService(BaseService):
    """
    Caching service with Redis and in-memory backends.

    Values are JSON-serialised for Redis; the in-memory backend stores the
    given object as-is.
    """

    def __init__(self, db: Optional[Session] = None, redis_client: Optional[Redis] = None):
        super().__init__(db)
        self.logger = logging.getLogger(__name__)

        self.circuit_breaker = CircuitBreaker(
            failure_threshold=5, recovery_timeout=60, expected_exception=RedisError
        )
        self.key_builder = CacheKeyBuilder()

        # In-memory fallback
        self._memory_cache: Dict[str, Any] = {}
        self._memory_expiry: Dict[str, datetime] = {}
        self._memory_lock = threading.Lock()

        self.redis: Optional[Redis] = redis_client
        self._stats: Dict[str, int] = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "deletes": 0,
            "errors": 0,
        }

    @property
    def backend(self) -> str:
        return "redis" if self.redis is not None else "memory"

    # Core Cache Operations

    @BaseService.measure_operation("cache_get")
    def get(self, key: str) -> Optional[Any]:
        """Get value from cache; returns None on miss or cache failure."""
        redis_client = self.redis

        def _get_from_redis() -> Optional[Any]:
            assert redis_client is not None
            value = redis_client.get(key)
            if value is not None:
                return json.loads(value)
            return None

        try:
            if redis_client is not None:
                if self.circuit_breaker.state != CircuitState.OPEN:
                    value = self.circuit_breaker.call(_get_from_redis)
                    if value is not None:
                        self._stats["hits"] += 1
                        return value
            else:
                with self._memory_lock:
                    if key in self._memory_cache:
                        if datetime.now() < self._memory_expiry[key]:
                            self._stats["hits"] += 1
                            return self._memory_cache[key]
                        del self._memory_cache[key]
                        del self._memory_expiry[key]

            self._stats["misses"] += 1
            return None

        except (RedisError, ValueError) as e:
            logger.error(f"Cache get error for key {key}: {e}")
            self._stats["errors"] += 1
            return None

    @BaseService.measure_operation("cache_set")
    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Set value in cache; returns False when the value could not be stored."""
        if ttl is None:
            ttl = settings.cache_ttl_seconds

        redis_client = self.redis

        try:
            if redis_client is not None:
                if self.circuit_breaker.state == CircuitState.OPEN:
                    return False
                serialized = json.dumps(value, default=str)
                result = self.circuit_breaker.call(redis_client.setex, key, ttl, serialized)
                if result:
                    self._stats["sets"] += 1
                    return True
                return False

            with self._memory_lock:
                self._memory_cache[key] = value
                self._memory_expiry[key] = datetime.now() + timedelta(seconds=ttl)
            self._stats["sets"] += 1
            return True

        except (RedisError, TypeError) as e:
            logger.error(f"Cache set error for key {key}: {e}")
            self._stats["errors"] += 1
            return False

    @BaseService.measure_operation("cache_delete")
    def delete(self, key: str) -> bool:
        redis_client = self.redis

        try:
            if redis_client is not None:
                if self.circuit_breaker.state == CircuitState.OPEN:
                    return False
                deleted = bool(self.circuit_breaker.call(redis_client.delete, key))
            else:
                with self._memory_lock:
                    deleted = key in self._memory_cache
                    self._memory_cache.pop(key, None)
                    self._memory_expiry.pop(key, None)

            if deleted:
                self._stats["deletes"] += 1
            return deleted

        except RedisError as e:
            logger.error(f"Cache delete error for key {key}: {e}")
            self._stats["errors"] += 1
            return False

    @BaseService.measure_operation("cache_delete_pattern")
    def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching a glob-style pattern."""
        try:
            if self.redis is not None:
                count = 0
                for key in self.redis.scan_iter(match=pattern):
                    if self.redis.delete(key):
                        count += 1
            else:
                with self._memory_lock:
                    keys_to_delete = [k for k in self._memory_cache if fnmatch.fnmatch(k, pattern)]
                    for key in keys_to_delete:
                        self._memory_cache.pop(key, None)
                        self._memory_expiry.pop(key, None)
                count = len(keys_to_delete)

            self._stats["deletes"] += count
            logger.debug(f"Deleted {count} keys matching pattern: {pattern}")
            return count

        except RedisError as e:
            logger.error(f"Cache delete pattern error: {e}")
            self._stats["errors"] += 1
            return 0

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics including circuit breaker state."""
        total_requests = self._stats["hits"] + self._stats["misses"]
        hit_rate = (self._stats["hits"] / total_requests * 100) if total_requests > 0 else 0

        return {
            **self._stats,
            "backend": self.backend,
            "hit_rate": f"{hit_rate:.2f}%",
            "total_requests": total_requests,
            "circuit_breaker": {
                "state": self.circuit_breaker.state.value,
                "failure_count": self.circuit_breaker._failure_count,
            },
        }


def get_cache_service() -> Optional[CacheService]:
    """
    Build the cache service described by settings.

    Returns None when caching is disabled. Falls back to the in-memory
    backend when Redis is not configured or not reachable.
    """
    if not settings.cache_enabled:
        logger.info("Caching disabled by configuration")
        return None

    redis_client: Optional[Redis] = None
    if settings.redis_url:
        try:
            redis_client = redis.from_url(
                settings.redis_url,
                decode_responses=True,
                socket_keepalive=True,
                socket_connect_timeout=5,
                retry_on_timeout=True,
                health_check_interval=30,
            )
            redis_client.ping()
            logger.info("Connected to Redis cache")
        except RedisError as e:
            logger.warning(f"Redis not available: {e}. Using in-memory fallback.")
            redis_client = None

    return CacheService(None, redis_client)
