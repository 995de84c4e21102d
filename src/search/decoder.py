"""Decode database rows into Restaurant models."""

import json
from collections.abc import Sequence
from enum import Enum
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from src.models.restaurant import Cuisine, MealType, Restaurant

logger = structlog.get_logger()


BASE_FIELDS = (
    "id",
    "restaurant_name",
    "city",
    "area",
    "cost_for_two",
    "rating",
    "latitude",
    "longitude",
    "image_url",
    "effective_discount",
    "free",
    "offer",
    "percentage",
)

_cuisines_adapter = TypeAdapter(list[Cuisine])
_meal_types_adapter = TypeAdapter(list[MealType])


class RowMode(str, Enum):
    """Column layout of a restaurant row.

    WITH_DISTANCE rows come from the search query and carry a distance
    column between the base fields and the aggregates. BARE rows come from
    the city listing and have no distance.
    """

    WITH_DISTANCE = "with_distance"
    BARE = "bare"

    @property
    def fields(self) -> tuple[str, ...]:
        extra = ("distance",) if self is RowMode.WITH_DISTANCE else ()
        return BASE_FIELDS + extra + ("cuisines", "meal_types")


class RowDecodeError(Exception):
    """Raised when a row cannot be turned into a Restaurant."""


def _decode_aggregate(raw: Any, adapter: TypeAdapter) -> list:
    """Decode a json_agg column, falling back to an empty list."""
    if raw is None:
        return []
    try:
        if isinstance(raw, (str, bytes)):
            raw = json.loads(raw)
        return adapter.validate_python(raw)
    except (ValueError, TypeError, ValidationError) as e:
        logger.warning("aggregate_decode_failed", error=str(e))
        return []


def decode_restaurant(record: Sequence[Any], mode: RowMode) -> Restaurant:
    """Decode one result row.

    Args:
        record: Row values in the column order of ``mode``
        mode: Which query produced the row

    Returns:
        Restaurant with cuisines and meal types attached

    Raises:
        RowDecodeError: If the column count does not match the mode or a
            scalar column is invalid
    """
    fields = mode.fields
    values = tuple(record)
    if len(values) != len(fields):
        raise RowDecodeError(
            f"expected {len(fields)} columns for {mode.value} row, got {len(values)}"
        )

    row = dict(zip(fields, values))
    cuisines = _decode_aggregate(row.pop("cuisines"), _cuisines_adapter)
    meal_types = _decode_aggregate(row.pop("meal_types"), _meal_types_adapter)

    # NULL columns fall back to the model defaults
    scalars = {key: value for key, value in row.items() if value is not None}

    try:
        return Restaurant(**scalars, cuisines=cuisines, meal_types=meal_types)
    except ValidationError as e:
        raise RowDecodeError(str(e)) from e
