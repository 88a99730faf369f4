"""Store layer for cashplan."""

from cashplan.database.base import Database
from cashplan.database.factories import create_memory_database

__all__ = ["Database", "create_memory_database"]
