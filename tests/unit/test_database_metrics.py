"""Tests for connection pool metrics."""

from unittest.mock import MagicMock, patch

import pytest

from src.monitoring.database_metrics import DatabaseMetricsCollector


@pytest.fixture
def mock_pool():
    pool = MagicMock()
    pool.get_max_size.return_value = 10
    pool.get_size.return_value = 4
    pool.get_idle_size.return_value = 1
    return pool


class TestDatabaseMetricsCollector:
    """Tests for DatabaseMetricsCollector."""

    def test_sample_records_usage(self, mock_pool):
        collector = DatabaseMetricsCollector(mock_pool)

        with patch("src.monitoring.database_metrics.record_database_metrics") as record:
            collector.sample()

        record.assert_called_once_with(
            database="postgres",
            connections_used=3,
            connections_available=7,
        )

    @pytest.mark.asyncio
    async def test_start_and_stop(self, mock_pool):
        collector = DatabaseMetricsCollector(mock_pool, interval=60)

        await collector.start()
        await collector.stop()

        assert collector._task is None
