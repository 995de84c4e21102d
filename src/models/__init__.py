"""Data models for the restaurant search service."""

from src.models.restaurant import City, Cuisine, MealType, Restaurant
from src.models.filters import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_RADIUS_METERS,
    ByIdList,
    ByName,
    ByNameList,
    FilterSet,
    GeoPoint,
    LookupFilter,
    SortKey,
)
from src.models.api import ErrorResponse, SearchResponse

__all__ = [
    # Catalog models
    "City",
    "Cuisine",
    "MealType",
    "Restaurant",
    # Filter models
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_RADIUS_METERS",
    "ByIdList",
    "ByName",
    "ByNameList",
    "FilterSet",
    "GeoPoint",
    "LookupFilter",
    "SortKey",
    # API models
    "ErrorResponse",
    "SearchResponse",
]
