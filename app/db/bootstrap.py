"""
Database bootstrap, run once on startup.

1. Probe the configured database.
2. Reachable: create missing tables, optionally seed the demo dataset
   into an empty database.
3. Unreachable: with MOCK_FALLBACK enabled, bind to an in-memory SQLite
   database holding the demo dataset. Otherwise fail startup.
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import get_settings
from app.db import postgres
from app.db.mock_data import seed_mock_data
from app.models.tables import TABLE_NAMES, create_schema, drop_schema

logger = logging.getLogger(__name__)


class DatabaseUnavailableError(RuntimeError):
    pass


def _is_empty() -> bool:
    rows = postgres.execute_raw_sql("SELECT COUNT(*) AS n FROM users")
    return rows[0]["n"] == 0


def reset_database(seed: bool = True) -> None:
    """Drop and recreate every table on the bound engine."""
    engine = postgres.get_engine()
    drop_schema(engine)
    create_schema(engine)
    if seed:
        seed_mock_data()


def init_database() -> str:
    """
    Prepare the database for serving requests.

    Returns:
        "database" when the configured database is used,
        "mock" when the in-memory demo dataset is used.
    """
    settings = get_settings()

    if postgres.test_postgres_connection():
        create_schema(postgres.get_engine())
        if (postgres.is_in_memory() or settings.seed_demo_data) and _is_empty():
            seed_mock_data()
        logger.info("Database ready")
        return "database"

    if not settings.mock_fallback:
        raise DatabaseUnavailableError("Database unreachable and MOCK_FALLBACK is disabled")

    logger.warning("Database unreachable, falling back to the in-memory demo dataset")
    postgres.use_in_memory_database()
    create_schema(postgres.get_engine())
    seed_mock_data()
    return "mock"


def table_counts() -> dict:
    """Row count for each table, None where the query fails."""
    counts = {}
    for table in TABLE_NAMES:
        try:
            with postgres.get_db_session() as db:
                counts[table] = db.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar()
        except SQLAlchemyError as e:
            logger.error("Counting rows of %s failed: %s", table, e)
            counts[table] = None
    return counts
