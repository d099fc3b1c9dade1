"""
PostgreSQL connection utility.

One engine per process, created on first use and drained once on shutdown.
Every statement goes through execute_raw_sql(), which classifies driver
failures (unique violations -> ConflictError) before they reach a route.
"""

import threading
from contextlib import contextmanager
from typing import Optional, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import sessionmaker

from app.core.config import get_settings
from app.core.errors import classify_store_error
from app.core.logging_config import get_logger

logger = get_logger(__name__)

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None
# Sync routes share the pool from FastAPI's threadpool
_engine_lock = threading.Lock()


def _init_engine() -> Tuple[Engine, sessionmaker]:
    global _engine, _session_factory
    with _engine_lock:
        if _engine is None:
            settings = get_settings()
            # Fixed-size pool; connections older than the recycle window are replaced
            engine = create_engine(
                settings.postgres_url,
                pool_size=settings.db_pool_size,
                max_overflow=0,
                pool_recycle=settings.db_pool_recycle_seconds,
                pool_pre_ping=True,
                connect_args=settings.postgres_connect_args,
                echo=settings.debug
            )
            # factory is published first so readers of _engine always find it
            _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
            _engine = engine
            logger.info("PostgreSQL pool created (size=%s)", settings.db_pool_size)
        return _engine, _session_factory


def get_engine() -> Engine:
    """Get or create the pooled engine (singleton pattern)"""
    engine = _engine
    if engine is None:
        engine, _ = _init_engine()
    return engine


def dispose_engine() -> None:
    """Close every pooled connection. Called once on application shutdown."""
    global _engine, _session_factory
    with _engine_lock:
        if _engine is not None:
            _engine.dispose()
            logger.info("PostgreSQL pool drained")
        _engine = None
        _session_factory = None


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM users"))
    """
    factory = _session_factory
    if factory is None:
        _, factory = _init_engine()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def execute_raw_sql(sql: str, params: dict = None, conflict_message: str = None) -> list:
    """
    Execute one parameterized statement and return results as list of dicts.

    Statements without a result set return an empty list. Driver errors are
    re-raised as AppError subclasses; conflict_message is used when the
    store reports a unique violation.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text(sql), params or {})
            if not result.returns_rows:
                return []
            return [dict(row._mapping) for row in result.fetchall()]
    except DBAPIError as exc:
        raise classify_store_error(exc, conflict_message) from exc


def check_postgres() -> dict:
    """Round-trip a trivial query; raises on failure."""
    rows = execute_raw_sql("SELECT 1 AS ok")
    return rows[0]


def test_postgres_connection() -> bool:
    """
    Test if PostgreSQL is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        return check_postgres().get("ok") == 1
    except Exception as e:
        logger.warning("PostgreSQL connection failed: %s", e)
        return False
