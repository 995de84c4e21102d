"""asyncpg connection pool lifecycle."""

import structlog
import asyncpg

from src.config import Settings, get_settings

logger = structlog.get_logger()


async def create_pool(settings: Settings | None = None) -> asyncpg.Pool:
    """Create the shared connection pool.

    The pool is small and does not keep idle connections around, so a
    request may wait for a free connection under load.
    """
    settings = settings or get_settings()
    pool = await asyncpg.create_pool(
        settings.postgres_dsn,
        min_size=settings.postgres_pool_min_size,
        max_size=settings.postgres_pool_max_size,
        max_inactive_connection_lifetime=settings.postgres_pool_max_inactive_lifetime,
    )
    logger.info(
        "database_pool_created",
        min_size=settings.postgres_pool_min_size,
        max_size=settings.postgres_pool_max_size,
    )
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    """Close the connection pool."""
    if pool:
        await pool.close()
        logger.info("database_pool_closed")
