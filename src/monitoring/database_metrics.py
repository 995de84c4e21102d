"""Connection pool metrics for the restaurant search service."""

import asyncio

import asyncpg
import structlog

from src.metrics import record_database_metrics

logger = structlog.get_logger()


class DatabaseMetricsCollector:
    """Periodically samples connection pool usage."""

    def __init__(self, pool: asyncpg.Pool, interval: float = 30.0):
        self._pool = pool
        self._interval = interval
        self._running = False
        self._task: asyncio.Task | None = None

    def sample(self) -> None:
        """Record the current pool usage once."""
        max_size = self._pool.get_max_size()
        idle = self._pool.get_idle_size()
        opened = self._pool.get_size()
        connections_used = max(opened - idle, 0)

        record_database_metrics(
            database="postgres",
            connections_used=connections_used,
            connections_available=max(max_size - connections_used, 0),
        )

    async def start(self) -> None:
        """Start collecting pool metrics in a background task."""
        if not self._running:
            self._running = True
            self._task = asyncio.create_task(self._collect_metrics())
            logger.info("database_metrics_collector_started", interval=self._interval)

    async def stop(self) -> None:
        """Stop collecting pool metrics."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("database_metrics_collector_stopped")

    async def _collect_metrics(self) -> None:
        while self._running:
            try:
                self.sample()
            except Exception as e:
                logger.error("database_metrics_collection_error", error=str(e))
            await asyncio.sleep(self._interval)
