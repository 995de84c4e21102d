#!/usr/bin/env python3
"""Script to create the restaurant catalog schema."""

import asyncio
import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import configure_logging, get_settings
from src.database import CATALOG_SCHEMA, close_pool, create_pool, create_schema


async def main():
    parser = argparse.ArgumentParser(
        description="Create the restaurant catalog tables and indexes (PostGIS required)"
    )
    parser.add_argument(
        "--dsn",
        help="PostgreSQL connection string (default: DATABASE_URL / POSTGRES_* settings)",
    )
    parser.add_argument(
        "--print-sql",
        action="store_true",
        help="Print the schema SQL and exit without connecting",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args()

    if args.print_sql:
        print(CATALOG_SCHEMA)
        return

    settings = get_settings()
    if args.dsn:
        settings = settings.model_copy(update={"database_url": args.dsn})

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    pool = None
    try:
        pool = await create_pool(settings)
        await create_schema(pool)
        print("Catalog schema is up to date.")
    except Exception as e:
        print(f"\nError creating schema: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)
    finally:
        await close_pool(pool)


if __name__ == "__main__":
    asyncio.run(main())
