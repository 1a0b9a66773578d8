"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from bankrec.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "BANKREC_DB_PATH"
DEFAULT_DB_DIR = ".bankrec"
DEFAULT_DB_NAME = "bankrec.db"


def create_database(database_url: str) -> SQLAlchemyDatabase:
    """Create a database instance for any SQLAlchemy URL."""
    return SQLAlchemyDatabase(database_url)


def default_database_path() -> str:
    """~/.bankrec/bankrec.db, creating the directory if needed."""
    db_dir = Path.home() / DEFAULT_DB_DIR
    db_dir.mkdir(exist_ok=True)
    return str(db_dir / DEFAULT_DB_NAME)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, the BANKREC_DB_PATH
            environment variable is used, then ~/.bankrec/bankrec.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV) or default_database_path()
    return create_database(f"sqlite:///{database_path}")
