"""Normalize raw search query parameters into a FilterSet.

The search endpoint is lenient: malformed numbers resolve to zero or to
their default and are never reported back to the client. Numbers are
plain ASCII decimals; surrounding spaces, digit separators and integers
outside the signed 64-bit range count as malformed.
"""

import math
import re
from collections.abc import Mapping

from src.models.filters import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_RADIUS_METERS,
    ByIdList,
    ByName,
    ByNameList,
    FilterSet,
    GeoPoint,
    LookupFilter,
)


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Largest page whose offset still fits in a BIGINT
MAX_PAGE = INT64_MAX // DEFAULT_PAGE_SIZE

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _to_int(value: str | None) -> int | None:
    """Parse a base-10 int64, or None when the text is not one."""
    if not value or not _INT_PATTERN.fullmatch(value):
        return None
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        return None
    return number


def _parse_int(value: str | None) -> int:
    number = _to_int(value)
    return 0 if number is None else number


def _parse_float(value: str | None) -> float:
    if not value or not _FLOAT_PATTERN.fullmatch(value):
        return 0.0
    number = float(value)
    return number if math.isfinite(number) else 0.0


def _split_list(value: str | None) -> list[str]:
    """Split a comma separated list, trimming entries and dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def first_values(params) -> dict[str, str]:
    """Collapse a multi-valued query string, keeping the first value of each key."""
    values: dict[str, str] = {}
    for key, value in params.multi_items():
        values.setdefault(key, value)
    return values


def _first_non_empty(query: Mapping[str, str], *keys: str) -> str:
    for key in keys:
        value = query.get(key)
        if value:
            return value
    return ""


def _first_nonzero_int(query: Mapping[str, str], *keys: str) -> int:
    """Parse the first key that yields a non-zero integer."""
    for key in keys:
        number = _parse_int(query.get(key))
        if number != 0:
            return number
    return 0


def parse_lookup_filters(
    name: str | None,
    names: str | None,
    ids: str | None,
) -> tuple[LookupFilter, ...]:
    """Build the filters for one lookup axis (cuisine or meal type).

    Every form that is present contributes one filter, in the order
    name, name list, id list.
    """
    filters: list[LookupFilter] = []

    if name and name.strip():
        filters.append(ByName(name.strip()))

    name_list = _split_list(names)
    if name_list:
        filters.append(ByNameList(tuple(name_list)))

    id_list = [number for number in map(_to_int, _split_list(ids)) if number is not None]
    if id_list:
        filters.append(ByIdList(tuple(id_list)))

    return tuple(filters)


def parse_geo(query: Mapping[str, str]) -> GeoPoint | None:
    """Return the search center when both lat and lon are supplied."""
    lat_raw, lon_raw = query.get("lat"), query.get("lon")
    if not lat_raw or not lon_raw:
        return None

    radius = _parse_float(query.get("radius"))
    if radius <= 0:
        radius = DEFAULT_RADIUS_METERS

    return GeoPoint(
        lat=_parse_float(lat_raw),
        lon=_parse_float(lon_raw),
        radius=radius,
    )


def parse_search_params(query: Mapping[str, str]) -> FilterSet:
    """Extract and normalize restaurant search filters from a query mapping.

    Args:
        query: Query parameters (e.g. Starlette ``QueryParams`` or a dict)

    Returns:
        FilterSet with every field defaulted
    """
    page = _parse_int(query.get("page"))
    if page <= 0 or page > MAX_PAGE:
        page = 1

    discount = _parse_float(query.get("discount"))

    return FilterSet(
        page=page,
        limit=DEFAULT_PAGE_SIZE,
        name=_first_non_empty(query, "name", "q"),
        min_cost=_first_nonzero_int(query, "minCost", "min_cost"),
        max_cost=_first_nonzero_int(query, "maxCost", "max_cost"),
        rating=_parse_float(query.get("rating")),
        discount=discount / 100.0 if discount > 0 else 0.0,
        free=query.get("free") == "true",
        city=query.get("city") or "",
        area=query.get("area") or "",
        cuisines=parse_lookup_filters(
            query.get("cuisine"),
            query.get("cuisines"),
            query.get("cuisineIds"),
        ),
        meal_types=parse_lookup_filters(
            _first_non_empty(query, "mealtype", "meal_type"),
            query.get("mealtypes"),
            query.get("mealtypeIds"),
        ),
        geo=parse_geo(query),
        sort=query.get("sort") or "",
    )
