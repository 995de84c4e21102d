"""PostgreSQL connection pool and schema."""

from src.database.pool import close_pool, create_pool
from src.database.schema import CATALOG_SCHEMA, create_schema

__all__ = [
    "close_pool",
    "create_pool",
    "CATALOG_SCHEMA",
    "create_schema",
]
