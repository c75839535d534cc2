"""
SQLite foundation for the durable key-value medium.
"""

import sqlite3
from contextlib import contextmanager
from typing import Generator, Optional
from .config import get_store_path, ensure_store_directory


@contextmanager
def get_db(path: Optional[str] = None) -> Generator[sqlite3.Connection, None, None]:
    """Get a SQLite database connection."""
    conn = sqlite3.connect(path or get_store_path())
    try:
        yield conn
    finally:
        conn.close()


def init_db(path: Optional[str] = None):
    """Initialize the database with the kv table."""
    ensure_store_directory(path)
    with get_db(path) as conn:
        cursor = conn.cursor()

        # One row per persisted record; value holds the record's JSON text
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        conn.commit()


def health_check(path: Optional[str] = None):
    """Check database health."""
    try:
        with get_db(path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table';")
            tables = cursor.fetchall()

            table_names = [table[0] for table in tables]
            return 'kv' in table_names
    except Exception:
        return False
