"""Database layer for bankroll application."""

from bankroll.database.base import Database
from bankroll.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
