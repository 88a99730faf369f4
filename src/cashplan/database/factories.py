"""Database factory functions for creating store instances."""

from typing import Optional

from cashplan.database.sqlalchemy_db import SQLAlchemyDatabase

IN_MEMORY_URL = "sqlite://"


def create_memory_database(database_url: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a session-scoped store.

    Args:
        database_url: SQLAlchemy URL. Defaults to an in-memory SQLite
            database that lives as long as the returned instance.

    Returns:
        SQLAlchemyDatabase instance
    """
    return SQLAlchemyDatabase(database_url or IN_MEMORY_URL)
