"""
Database module - PostgreSQL connection pool and raw SQL execution.
"""
from app.db.postgres import get_engine, dispose_engine, execute_raw_sql, check_postgres

__all__ = [
    "get_engine",
    "dispose_engine",
    "execute_raw_sql",
    "check_postgres"
]
