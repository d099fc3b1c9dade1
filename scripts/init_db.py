#!/usr/bin/env python3
"""
Schema Setup Script

Creates the admin_users, users, clients, jobs and applications tables.
Statements use IF NOT EXISTS, so running it twice is harmless.
Usage: python scripts/init_db.py
"""
import sys
from pathlib import Path
sys.path.insert(0, '.')

from sqlalchemy import text

from app.db.postgres import get_db_session, dispose_engine

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "app" / "db" / "schema.sql"


def main():
    statements = [s.strip() for s in SCHEMA_PATH.read_text().split(";") if s.strip()]
    with get_db_session() as db:
        for statement in statements:
            db.execute(text(statement))
    dispose_engine()
    print(f"Applied {len(statements)} statements from {SCHEMA_PATH.name}")


if __name__ == "__main__":
    main()
