"""Database layer for yardroute application."""

from yardroute.database.base import Database
from yardroute.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
