"""Database factory functions for creating database instances."""

from typing import Optional

from bankroll.config import resolve_database_path
from bankroll.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks BANKROLL_DB_PATH
            environment variable, then defaults to ~/.bankroll/bankroll.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    database_path = resolve_database_path(database_path)
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
