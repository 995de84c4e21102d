"""Typed search filters produced from raw query parameters."""

from dataclasses import dataclass, field
from enum import Enum


DEFAULT_PAGE_SIZE = 12
DEFAULT_RADIUS_METERS = 50000.0


class SortKey(str, Enum):
    """Supported result orderings."""

    DISCOUNT = "discount"
    RATING_DESC = "rating_desc"
    COST_ASC = "cost_asc"


@dataclass(frozen=True)
class ByName:
    """Match a single lookup entry by name (case-insensitive)."""

    name: str


@dataclass(frozen=True)
class ByNameList:
    """Match any of several lookup entries by exact name."""

    names: tuple[str, ...]


@dataclass(frozen=True)
class ByIdList:
    """Match any of several lookup entries by id."""

    ids: tuple[int, ...]


LookupFilter = ByName | ByNameList | ByIdList


@dataclass(frozen=True)
class GeoPoint:
    """Search center and radius. Present only when both coordinates were given."""

    lat: float
    lon: float
    radius: float = DEFAULT_RADIUS_METERS


@dataclass(frozen=True)
class FilterSet:
    """Normalized restaurant search filters.

    Zero-valued numeric thresholds mean "unset". Each lookup axis holds zero
    or more filters which are all applied together.
    """

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    name: str = ""
    min_cost: int = 0
    max_cost: int = 0
    rating: float = 0.0
    discount: float = 0.0
    free: bool = False
    city: str = ""
    area: str = ""
    cuisines: tuple[LookupFilter, ...] = field(default_factory=tuple)
    meal_types: tuple[LookupFilter, ...] = field(default_factory=tuple)
    geo: GeoPoint | None = None
    sort: str = ""

    @property
    def offset(self) -> int:
        """Row offset of the requested page."""
        return (self.page - 1) * self.limit

    @property
    def has_location(self) -> bool:
        return self.geo is not None

    @property
    def is_default_sort(self) -> bool:
        """Whether results are ordered by the default best-deals sort."""
        return self.sort in ("", SortKey.DISCOUNT.value)
