"""Paginated restaurant search: count, validate page, then fetch."""

import math
import time

import structlog
import asyncpg

from src.models.api import SearchResponse
from src.models.filters import FilterSet, SortKey
from src.search.decoder import RowDecodeError, RowMode, decode_restaurant
from src.search.query_builder import build_search_queries
from src.metrics import (
    record_database_query_performance,
    record_page_overflow,
    record_search_request,
    record_skipped_row,
)

logger = structlog.get_logger()


ORDER_BY = {
    SortKey.RATING_DESC.value: "ORDER BY r.rating DESC, r.id ASC",
    SortKey.COST_ASC.value: "ORDER BY r.cost_for_two ASC, r.id ASC",
}
DEFAULT_ORDER_BY = "ORDER BY r.effective_discount DESC, r.id ASC"


class SearchQueryError(Exception):
    """The result query failed; attributed to the shape of the request."""


def order_by_clause(sort: str) -> str:
    """Map a sort key to its ORDER BY clause; unknown keys sort by discount."""
    return ORDER_BY.get(sort, DEFAULT_ORDER_BY)


def total_pages(total_count: int, limit: int) -> int:
    return math.ceil(total_count / limit)


class RestaurantSearcher:
    """Execute restaurant searches against PostgreSQL."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    async def _count(self, sql: str, args: list) -> int:
        start_time = time.time()
        try:
            async with self.pool.acquire() as conn:
                total_count = await conn.fetchval(sql, *args)
        except Exception:
            record_database_query_performance(
                "postgres", "count", "restaurants", time.time() - start_time, is_error=True
            )
            raise
        record_database_query_performance("postgres", "count", "restaurants", time.time() - start_time)
        return int(total_count or 0)

    async def _fetch(self, sql: str, args: list) -> list:
        start_time = time.time()
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(sql, *args)
        except Exception:
            record_database_query_performance(
                "postgres", "fetch", "restaurants", time.time() - start_time, is_error=True
            )
            raise
        record_database_query_performance("postgres", "fetch", "restaurants", time.time() - start_time)
        return rows

    async def search(self, filters: FilterSet) -> SearchResponse:
        """Run a paginated search.

        A failed count is reported as an empty result, while a failed fetch
        raises SearchQueryError.

        Args:
            filters: Normalized search filters

        Returns:
            SearchResponse with the requested page, page count and total

        Raises:
            SearchQueryError: If the result query fails
        """
        start_time = time.time()
        queries = build_search_queries(filters)

        logger.info(
            "restaurant_search",
            page=filters.page,
            sort=filters.sort or SortKey.DISCOUNT.value,
            has_location=filters.has_location,
            arg_count=len(queries.args),
        )

        try:
            total_count = await self._count(queries.count_sql, queries.args)
        except Exception as e:
            logger.error("search_count_error", error=str(e))
            record_search_request("restaurants", time.time() - start_time, 0)
            return SearchResponse()

        pages = total_pages(total_count, filters.limit)
        if filters.page > pages and pages > 0:
            logger.info("search_page_out_of_range", page=filters.page, pages=pages)
            record_page_overflow()
            record_search_request("restaurants", time.time() - start_time, 0)
            return SearchResponse(pages=pages, total_count=total_count)

        # LIMIT and OFFSET are literals so args still matches the placeholders
        sql = (
            f"{queries.fetch_sql} {order_by_clause(filters.sort)} "
            f"LIMIT {filters.limit} OFFSET {filters.offset}"
        )

        try:
            rows = await self._fetch(sql, queries.args)
        except Exception as e:
            logger.error("search_fetch_error", error=str(e))
            record_search_request("restaurants", time.time() - start_time, 0)
            raise SearchQueryError("search result query failed") from e

        restaurants = []
        for row in rows:
            try:
                restaurants.append(decode_restaurant(row, RowMode.WITH_DISTANCE))
            except RowDecodeError as e:
                logger.warning("row_decode_skipped", error=str(e))
                record_skipped_row("search")

        duration = time.time() - start_time
        record_search_request("restaurants", duration, len(restaurants))
        logger.info(
            "restaurant_search_complete",
            result_count=len(restaurants),
            total_count=total_count,
            pages=pages,
            duration=duration,
        )

        return SearchResponse(restaurants=restaurants, pages=pages, total_count=total_count)
