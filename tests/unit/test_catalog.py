"""Tests for catalog lookups."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.search.catalog import CITY_LISTING_SQL, CatalogRepository, CityRequiredError


def make_bare_row(restaurant_id: int) -> tuple:
    return (
        restaurant_id, "Cafe Goa", "goa", "Anjuna", 1200, 4.0, 15.58, 73.74,
        None, 0.4, True, "Free dessert", None,
        '[{"id": 9, "cuisine_name": "Goan"}]', '[{"id": 1, "meal_type": "Lunch"}]',
    )


@pytest.fixture
def mock_conn():
    conn = AsyncMock()
    conn.fetch = AsyncMock(return_value=[])
    return conn


@pytest.fixture
def catalog(mock_conn):
    pool = MagicMock()

    @asynccontextmanager
    async def mock_acquire():
        yield mock_conn

    pool.acquire = mock_acquire
    return CatalogRepository(pool)


class TestRestaurantsByCity:
    """Tests for the city landing list."""

    def test_query_shape(self):
        assert "r.city ILIKE $1" in CITY_LISTING_SQL
        assert "r.is_duplicate = false" in CITY_LISTING_SQL
        assert "ORDER BY r.effective_discount DESC" in CITY_LISTING_SQL
        assert "LIMIT 10" in CITY_LISTING_SQL
        assert "distance" not in CITY_LISTING_SQL

    @pytest.mark.asyncio
    @pytest.mark.parametrize("city", ["", "   "])
    async def test_blank_city_rejected_before_query(self, catalog, mock_conn, city):
        with pytest.raises(CityRequiredError):
            await catalog.restaurants_by_city(city)

        mock_conn.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_city_is_empty(self, catalog, mock_conn):
        result = await catalog.restaurants_by_city("atlantis")

        assert result == []
        mock_conn.fetch.assert_awaited_once_with(CITY_LISTING_SQL, "atlantis")

    @pytest.mark.asyncio
    async def test_rows_decoded_without_distance(self, catalog, mock_conn):
        mock_conn.fetch.return_value = [make_bare_row(1), make_bare_row(2)[:5]]

        result = await catalog.restaurants_by_city("goa")

        assert len(result) == 1
        assert result[0].distance is None
        assert result[0].free is True
        assert result[0].cuisines[0].cuisine_name == "Goan"

    @pytest.mark.asyncio
    async def test_query_error_propagates(self, catalog, mock_conn):
        mock_conn.fetch.side_effect = Exception("connection reset")

        with pytest.raises(Exception, match="connection reset"):
            await catalog.restaurants_by_city("goa")


class TestReferenceLists:
    """Tests for cities, cuisines and meal types."""

    @pytest.mark.asyncio
    async def test_list_cities(self, catalog, mock_conn):
        mock_conn.fetch.return_value = [
            {"id": 1, "city_name": "mumbai", "latitude": 19.07, "longitude": 72.87, "geo_status": "RESOLVED"},
            {"id": 2, "city_name": "pune", "latitude": 0, "longitude": 0, "geo_status": "PENDING"},
        ]

        cities = await catalog.list_cities()

        assert [c.city_name for c in cities] == ["mumbai", "pune"]
        assert cities[0].geo_status == "RESOLVED"

    @pytest.mark.asyncio
    async def test_list_cuisines_skips_bad_rows(self, catalog, mock_conn):
        mock_conn.fetch.return_value = [
            {"id": 1, "cuisine_name": "Italian"},
            {"id": None, "cuisine_name": "Broken"},
        ]

        cuisines = await catalog.list_cuisines()

        assert [c.cuisine_name for c in cuisines] == ["Italian"]

    @pytest.mark.asyncio
    async def test_list_meal_types(self, catalog, mock_conn):
        mock_conn.fetch.return_value = [{"id": 1, "meal_type": "Breakfast"}]

        meal_types = await catalog.list_meal_types()

        assert meal_types[0].meal_type == "Breakfast"
        assert "ORDER BY id ASC" in mock_conn.fetch.call_args[0][0]
