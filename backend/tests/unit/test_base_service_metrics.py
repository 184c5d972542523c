# backend/tests/unit/test_base_service_metrics.py
"""
Unit tests for the metrics and transaction helpers in BaseService.

Run with: pytest backend/tests/unit/test_base_service_metrics.py -v
"""

import threading
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from classroom_scheduler.core.exceptions import NotFoundException, ServiceException
from classroom_scheduler.services import base as base_module
from classroom_scheduler.services.base import BaseService


class ExampleService(BaseService):
    """Example service for metrics testing."""

    @BaseService.measure_operation("fast_operation")
    def fast_operation(self):
        return "success"

    @BaseService.measure_operation("failing_operation")
    def failing_operation(self):
        raise ValueError("This operation always fails")

    @BaseService.measure_operation("async_operation")
    async def async_operation(self):
        return "async success"


class TestBaseServiceMetrics:
    """Test the metrics functionality."""

    @pytest.fixture
    def test_service(self, mock_db):
        return ExampleService(mock_db)

    def test_decorator_metrics_collection(self, test_service):
        assert test_service.get_metrics() == {}

        for _ in range(3):
            test_service.fast_operation()

        metrics = test_service.get_metrics()
        assert metrics["fast_operation"]["count"] == 3
        assert metrics["fast_operation"]["success_count"] == 3
        assert metrics["fast_operation"]["failure_count"] == 0
        assert metrics["fast_operation"]["success_rate"] == 1.0
        assert metrics["fast_operation"]["min_time"] <= metrics["fast_operation"]["max_time"]

    def test_slow_operation_warning(self, test_service, caplog, monkeypatch):
        """Operations over the threshold are logged as warnings."""
        monkeypatch.setattr(base_module, "SLOW_OPERATION_SECONDS", -1.0)

        test_service.fast_operation()

        assert "Slow operation detected" in caplog.text
        assert "fast_operation" in caplog.text

    def test_failing_operation_metrics(self, test_service):
        for _ in range(2):
            with pytest.raises(ValueError):
                test_service.failing_operation()

        metrics = test_service.get_metrics()
        assert metrics["failing_operation"]["count"] == 2
        assert metrics["failing_operation"]["failure_count"] == 2
        assert metrics["failing_operation"]["success_rate"] == 0.0

    def test_async_operation_is_measured(self, test_service):
        import asyncio

        assert asyncio.run(test_service.async_operation()) == "async success"
        assert test_service.get_metrics()["async_operation"]["count"] == 1

    def test_reset_metrics(self, test_service):
        test_service.fast_operation()
        assert len(test_service.get_metrics()) > 0

        test_service.reset_metrics()

        assert test_service.get_metrics() == {}

    def test_concurrent_operations(self, test_service):
        def run_operations():
            for _ in range(10):
                test_service.fast_operation()

        threads = [threading.Thread(target=run_operations) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert test_service.get_metrics()["fast_operation"]["count"] == 30


class TestTransaction:
    """Test commit/rollback behaviour of BaseService.transaction."""

    def test_commits_on_success(self, mock_db):
        service = ExampleService(mock_db)

        with service.transaction():
            pass

        mock_db.commit.assert_called_once()
        mock_db.rollback.assert_not_called()

    def test_database_error_becomes_service_exception(self, mock_db):
        service = ExampleService(mock_db)

        with pytest.raises(ServiceException):
            with service.transaction():
                raise OperationalError("UPDATE rooms", {}, Exception("database is locked"))

        mock_db.rollback.assert_called_once()
        mock_db.commit.assert_not_called()

    def test_domain_errors_propagate_unchanged(self, mock_db):
        service = ExampleService(mock_db)

        with pytest.raises(NotFoundException):
            with service.transaction():
                raise NotFoundException("Room not found with id: 1")

        mock_db.rollback.assert_called_once()


class TestCacheInvalidation:
    def test_without_cache_is_noop(self, mock_db):
        ExampleService(mock_db).invalidate_pattern("sched:*")

    def test_pattern_delegates_to_cache(self, mock_db):
        cache = Mock()
        cache.delete_pattern.return_value = 2

        ExampleService(mock_db, cache).invalidate_pattern("sched:*")

        cache.delete_pattern.assert_called_once_with("sched:*")

    def test_cache_failures_are_logged_not_raised(self, mock_db, caplog):
        cache = Mock()
        cache.delete.side_effect = RuntimeError("boom")

        ExampleService(mock_db, cache).invalidate_cache("sched:detail:1")

        assert "Failed to invalidate cache key sched:detail:1" in caplog.text
