import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

IN_MEMORY_URL = "sqlite://"


def build_engine(url: str) -> Engine:
    """
    Create an engine for the given URL.

    PostgreSQL gets a connection pool (pool_size=5, max_overflow=10).
    SQLite (fallback and tests) shares one connection so an in-memory
    database survives across sessions.
    """
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool
        )
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True
    )


engine: Engine = build_engine(settings.sqlalchemy_url)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_engine() -> Engine:
    return engine


def bind_engine(new_engine: Engine) -> Engine:
    """Point the session factory at another engine (used by the mock fallback)."""
    global engine
    old = engine
    engine = new_engine
    SessionLocal.configure(bind=new_engine)
    if old is not new_engine:
        old.dispose()
    logger.info("Database bound to %s", new_engine.url.render_as_string(hide_password=True))
    return new_engine


def use_in_memory_database() -> Engine:
    """Swap the configured database for a fresh in-memory SQLite one."""
    return bind_engine(build_engine(IN_MEMORY_URL))


def is_in_memory() -> bool:
    return engine.url.drivername.startswith("sqlite") and not engine.url.database


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM research_positions"))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def test_postgres_connection() -> bool:
    """
    Test if the database is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.warning("Database connection failed: %s", e)
        return False


def execute_raw_sql(sql: str, params: dict = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    """
    with get_db_session() as db:
        result = db.execute(text(sql), params or {})
        columns = result.keys()
        return [dict(zip(columns, row)) for row in result.fetchall()]
