"""
Database module - PostgreSQL engine, sessions and table definitions.
"""
from portal.db.postgres import get_db, get_db_session, init_db, test_postgres_connection

__all__ = [
    "get_db",
    "get_db_session",
    "init_db",
    "test_postgres_connection"
]
