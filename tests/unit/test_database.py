"""Tests for schema creation and pool lifecycle."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.config.settings import Settings
from src.database import CATALOG_SCHEMA, close_pool, create_pool, create_schema


class TestCreateSchema:
    """Tests for catalog schema creation."""

    @pytest.mark.asyncio
    async def test_create_schema(self):
        """Test that create_schema executes schema SQL."""
        mock_conn = AsyncMock()

        @asynccontextmanager
        async def mock_acquire():
            yield mock_conn

        mock_pool = MagicMock()
        mock_pool.acquire = mock_acquire

        await create_schema(mock_pool)

        mock_conn.execute.assert_awaited_once_with(CATALOG_SCHEMA)

    def test_schema_includes_search_columns(self):
        required_columns = [
            "restaurant_name", "cost_for_two", "effective_discount",
            "is_duplicate", "geo geography(point, 4326)",
        ]
        for col in required_columns:
            assert col in CATALOG_SCHEMA.lower()

    def test_schema_includes_association_tables(self):
        assert "restaurant_cuisines" in CATALOG_SCHEMA
        assert "restaurant_meal_types" in CATALOG_SCHEMA

    def test_schema_includes_spatial_index(self):
        assert "using gist (geo)" in CATALOG_SCHEMA.lower()


class TestPool:
    """Tests for pool creation."""

    @pytest.mark.asyncio
    async def test_create_pool_uses_settings(self):
        settings = Settings(
            database_url="postgresql://u:p@db/eazyfind",
            postgres_pool_min_size=0,
            postgres_pool_max_size=5,
            postgres_pool_max_inactive_lifetime=2.0,
        )
        sentinel = MagicMock()

        with patch("src.database.pool.asyncpg.create_pool", AsyncMock(return_value=sentinel)) as create:
            pool = await create_pool(settings)

        assert pool is sentinel
        create.assert_awaited_once_with(
            "postgresql://u:p@db/eazyfind",
            min_size=0,
            max_size=5,
            max_inactive_connection_lifetime=2.0,
        )

    @pytest.mark.asyncio
    async def test_close_pool(self):
        pool = MagicMock()
        pool.close = AsyncMock()

        await close_pool(pool)
        await close_pool(None)

        pool.close.assert_awaited_once()
