"""SQL generation for restaurant search.

Predicates and their positional arguments are accumulated together in a
QueryBuilder so that placeholder ``$N`` always refers to argument N. The
count and fetch queries share the same WHERE clause and argument list.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from src.models.filters import ByIdList, ByName, ByNameList, FilterSet, LookupFilter


PROXIMITY_CUTOFF_METERS = 100000

RESTAURANT_COLUMNS = (
    "r.id",
    "r.restaurant_name",
    "r.city",
    "r.area",
    "r.cost_for_two",
    "r.rating",
    "r.latitude",
    "r.longitude",
    "r.image_url",
    "r.effective_discount",
    "r.free",
    "r.offer",
    "r.percentage",
)

CUISINES_AGGREGATE = (
    "COALESCE((SELECT json_agg(json_build_object('id', c.id, 'cuisine_name', c.cuisine_name)) "
    "FROM restaurant_cuisines rc JOIN cuisines c ON rc.cuisine_id = c.id "
    "WHERE rc.restaurant_id = r.id), '[]') AS cuisines"
)

MEAL_TYPES_AGGREGATE = (
    "COALESCE((SELECT json_agg(json_build_object('id', m.id, 'meal_type', m.meal_type)) "
    "FROM restaurant_meal_types rmt JOIN meal_types m ON rmt.meal_type_id = m.id "
    "WHERE rmt.restaurant_id = r.id), '[]') AS meal_types"
)


@dataclass(frozen=True)
class Association:
    """Many-to-many link between restaurants and a lookup table."""

    link_table: str
    link_column: str
    lookup_table: str
    name_column: str


CUISINE_ASSOCIATION = Association(
    link_table="restaurant_cuisines",
    link_column="cuisine_id",
    lookup_table="cuisines",
    name_column="cuisine_name",
)

MEAL_TYPE_ASSOCIATION = Association(
    link_table="restaurant_meal_types",
    link_column="meal_type_id",
    lookup_table="meal_types",
    name_column="meal_type",
)


@dataclass
class QueryBuilder:
    """Accumulates WHERE conditions and their positional arguments."""

    conditions: list[str] = field(default_factory=list)
    args: list[Any] = field(default_factory=list)

    def bind(self, value: Any) -> str:
        """Append an argument and return its placeholder."""
        self.args.append(value)
        return f"${len(self.args)}"

    def bind_all(self, values) -> str:
        """Bind each value and return the comma separated placeholders."""
        return ", ".join(self.bind(value) for value in values)

    def where(self, condition: str) -> None:
        self.conditions.append(condition)

    @property
    def where_clause(self) -> str:
        return "WHERE " + " AND ".join(self.conditions)


@dataclass(frozen=True)
class SearchQueries:
    """Count and fetch templates sharing one argument list."""

    count_sql: str
    fetch_sql: str
    args: list[Any]


def _point(lon_placeholder: str, lat_placeholder: str) -> str:
    return f"ST_SetSRID(ST_MakePoint({lon_placeholder}, {lat_placeholder}), 4326)::geography"


def lookup_condition(association: Association, lookup: LookupFilter, builder: QueryBuilder) -> str:
    """Render a membership subquery for one cuisine or meal type filter."""
    a = association
    by_name_subquery = (
        f"SELECT lt.restaurant_id FROM {a.link_table} lt "
        f"JOIN {a.lookup_table} lk ON lt.{a.link_column} = lk.id "
    )

    if isinstance(lookup, ByName):
        return f"r.id IN ({by_name_subquery}WHERE lk.{a.name_column} ILIKE {builder.bind(lookup.name)})"
    if isinstance(lookup, ByNameList):
        return f"r.id IN ({by_name_subquery}WHERE lk.{a.name_column} IN ({builder.bind_all(lookup.names)}))"
    if isinstance(lookup, ByIdList):
        return (
            f"r.id IN (SELECT restaurant_id FROM {a.link_table} "
            f"WHERE {a.link_column} IN ({builder.bind_all(lookup.ids)}))"
        )
    raise TypeError(f"Unsupported lookup filter: {lookup!r}")


def _add_location(builder: QueryBuilder, filters: FilterSet) -> str:
    """Add location predicates and return the distance expression.

    Longitude and latitude always take the first two placeholders so the
    distance can be selected even when the city filter replaces the radius.
    """
    geo = filters.geo
    if geo is None:
        if filters.city:
            builder.where(f"r.city ILIKE {builder.bind(filters.city)}")
        return "NULL::float8"

    point = _point(builder.bind(geo.lon), builder.bind(geo.lat))
    distance = f"ST_Distance(r.geo, {point})"

    # Best-deals ordering is always limited to a fixed 100 km around the user
    if filters.is_default_sort:
        builder.where(f"ST_DWithin(r.geo, {point}, {PROXIMITY_CUTOFF_METERS})")

    if filters.city:
        builder.where(f"r.city ILIKE {builder.bind(filters.city)}")
    else:
        builder.where(f"ST_DWithin(r.geo, {point}, {builder.bind(geo.radius)})")

    return distance


def _add_text(builder: QueryBuilder, filters: FilterSet) -> None:
    if filters.name:
        placeholder = builder.bind(f"%{filters.name}%")
        builder.where(f"(r.restaurant_name ILIKE {placeholder} OR r.area ILIKE {placeholder})")

    if filters.area:
        builder.where(f"r.area ILIKE {builder.bind(f'%{filters.area}%')}")


def _add_lookups(builder: QueryBuilder, filters: FilterSet) -> None:
    for lookup in filters.cuisines:
        builder.where(lookup_condition(CUISINE_ASSOCIATION, lookup, builder))
    for lookup in filters.meal_types:
        builder.where(lookup_condition(MEAL_TYPE_ASSOCIATION, lookup, builder))


def _add_thresholds(builder: QueryBuilder, filters: FilterSet) -> None:
    if filters.min_cost > 0:
        builder.where(f"r.cost_for_two >= {builder.bind(filters.min_cost)}")
    if filters.max_cost > 0:
        builder.where(f"r.cost_for_two <= {builder.bind(filters.max_cost)}")
    if filters.rating > 0:
        # rating is NUMERIC(2,1)
        builder.where(f"r.rating >= {builder.bind(Decimal(str(filters.rating)))}")
    if filters.discount > 0:
        builder.where(f"r.effective_discount >= {builder.bind(filters.discount)}")
    if filters.free:
        builder.where("r.free = true")


def build_search_queries(filters: FilterSet) -> SearchQueries:
    """Generate the count and fetch queries for a search.

    Args:
        filters: Normalized search filters

    Returns:
        SearchQueries whose templates reference ``$1..$N`` of ``args``.
        The fetch template has no ORDER BY or LIMIT yet.
    """
    builder = QueryBuilder()

    distance = _add_location(builder, filters)
    _add_text(builder, filters)
    _add_lookups(builder, filters)
    _add_thresholds(builder, filters)
    builder.where("r.is_duplicate = false")

    where = builder.where_clause
    columns = ", ".join(RESTAURANT_COLUMNS)
    # The count selects the distance too so that $1 and $2 are always typed
    count_sql = f"SELECT COUNT(*) FROM (SELECT {distance} AS distance FROM restaurants r {where}) AS matched"
    fetch_sql = f"""
        SELECT {columns},
               {distance} AS distance,
               {CUISINES_AGGREGATE},
               {MEAL_TYPES_AGGREGATE}
        FROM restaurants r
        {where}
    """

    return SearchQueries(count_sql=count_sql, fetch_sql=fetch_sql, args=builder.args)
