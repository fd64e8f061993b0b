"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional


DATABASE_PATH: Optional[str] = None


def configure_database(path: Optional[str]) -> None:
    """
    Point the connection helpers at a database file.
    """
    global DATABASE_PATH
    DATABASE_PATH = path


def init_database() -> None:
    """
    Initialize database and create tables if they don't exist.
    """
    if DATABASE_PATH is None:
        raise RuntimeError("Database path is not configured")

    db_path = Path(DATABASE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection() as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS descriptors (
                registry_key TEXT PRIMARY KEY,
                position INTEGER NOT NULL UNIQUE,
                name TEXT NOT NULL,
                file_type TEXT NOT NULL,
                size TEXT NOT NULL,
                owner TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_descriptors_name
            ON descriptors(name)
        """)

        conn.commit()


@contextmanager
def get_db_connection() -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.
    """
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()
