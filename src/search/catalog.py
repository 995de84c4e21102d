"""Catalog lookups: city landing list and reference data."""

import time

import structlog
import asyncpg
from pydantic import BaseModel, ValidationError

from src.models.restaurant import City, Cuisine, MealType, Restaurant
from src.search.decoder import RowDecodeError, RowMode, decode_restaurant
from src.search.query_builder import CUISINES_AGGREGATE, MEAL_TYPES_AGGREGATE, RESTAURANT_COLUMNS
from src.metrics import record_database_query_performance, record_skipped_row

logger = structlog.get_logger()


CITY_LISTING_LIMIT = 10

_COLUMNS = ", ".join(RESTAURANT_COLUMNS)

CITY_LISTING_SQL = f"""
    SELECT {_COLUMNS},
           {CUISINES_AGGREGATE},
           {MEAL_TYPES_AGGREGATE}
    FROM restaurants r
    WHERE r.city ILIKE $1 AND r.is_duplicate = false
    ORDER BY r.effective_discount DESC
    LIMIT {CITY_LISTING_LIMIT}
"""

CITIES_SQL = """
    SELECT id, city_name, COALESCE(latitude, 0) AS latitude,
           COALESCE(longitude, 0) AS longitude,
           COALESCE(geo_status, 'PENDING') AS geo_status
    FROM cities
    ORDER BY id ASC
"""

CUISINES_SQL = "SELECT id, cuisine_name FROM cuisines ORDER BY id ASC"

MEAL_TYPES_SQL = "SELECT id, meal_type FROM meal_types ORDER BY id ASC"


class CityRequiredError(ValueError):
    """The city listing was requested without a city."""


class CatalogRepository:
    """Read-only queries over the restaurant catalog."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def _fetch(self, sql: str, *args, table: str) -> list:
        start_time = time.time()
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(sql, *args)
        except Exception as e:
            record_database_query_performance(
                "postgres", "select", table, time.time() - start_time, is_error=True
            )
            logger.error("catalog_query_error", table=table, error=str(e))
            raise
        record_database_query_performance("postgres", "select", table, time.time() - start_time)
        return rows

    async def restaurants_by_city(self, city: str) -> list[Restaurant]:
        """Top discounted, non-duplicate restaurants for a city.

        Raises:
            CityRequiredError: If ``city`` is blank; no query is run
        """
        if not city or not city.strip():
            raise CityRequiredError("City is required")

        rows = await self._fetch(CITY_LISTING_SQL, city, table="restaurants")

        restaurants = []
        for row in rows:
            try:
                restaurants.append(decode_restaurant(row, RowMode.BARE))
            except RowDecodeError as e:
                logger.warning("row_decode_skipped", city=city, error=str(e))
                record_skipped_row("city_listing")

        logger.info("city_listing_complete", city=city, result_count=len(restaurants))
        return restaurants

    async def _list(self, sql: str, model: type[BaseModel], table: str) -> list:
        rows = await self._fetch(sql, table=table)

        items = []
        for row in rows:
            try:
                items.append(model.model_validate(dict(row)))
            except ValidationError as e:
                logger.warning("lookup_row_skipped", table=table, error=str(e))
        return items

    async def list_cities(self) -> list[City]:
        return await self._list(CITIES_SQL, City, "cities")

    async def list_cuisines(self) -> list[Cuisine]:
        return await self._list(CUISINES_SQL, Cuisine, "cuisines")

    async def list_meal_types(self) -> list[MealType]:
        return await self._list(MEAL_TYPES_SQL, MealType, "meal_types")
