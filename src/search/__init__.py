"""Restaurant search: parameter parsing, SQL generation, pagination."""

from src.search.params import first_values, parse_search_params
from src.search.query_builder import SearchQueries, build_search_queries
from src.search.paginator import RestaurantSearcher, SearchQueryError
from src.search.decoder import RowDecodeError, RowMode, decode_restaurant
from src.search.catalog import CatalogRepository, CityRequiredError

__all__ = [
    "first_values",
    "parse_search_params",
    "SearchQueries",
    "build_search_queries",
    "RestaurantSearcher",
    "SearchQueryError",
    "RowDecodeError",
    "RowMode",
    "decode_restaurant",
    "CatalogRepository",
    "CityRequiredError",
]
