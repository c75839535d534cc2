"""
Persistence media for the state layer.

A medium is a string-keyed, string-valued mapping that lives outside the
process (SQLite file) or inside it (dict). Media raise on failure; callers go
through SafeStore, which turns every failure into a fallback.
"""

import sqlite3
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .config import get_store_backend, get_store_path
from .db import get_db, init_db
from .errors import MediumUnavailableError, QuotaExceededError

from util.logging import logger


class Medium(ABC):
    """localStorage-shaped key-value medium."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the raw text stored under key, or None if absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store raw text under key, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key. Removing an absent key is not an error."""

    @abstractmethod
    def clear(self) -> None:
        """Delete every key in the namespace."""

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys."""


class MemoryMedium(Medium):
    """Process-local medium with an optional byte quota."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self._items: Dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def _usage_with(self, key: str, value: str) -> int:
        usage = 0
        for k, v in self._items.items():
            if k != key:
                usage += len(k.encode("utf-8")) + len(v.encode("utf-8"))
        return usage + len(key.encode("utf-8")) + len(value.encode("utf-8"))

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            needed = self._usage_with(key, value)
            if needed > self.quota_bytes:
                raise QuotaExceededError(key, needed, self.quota_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> List[str]:
        return list(self._items.keys())


class SQLiteMedium(Medium):
    """Durable medium backed by the kv table of a SQLite file."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or get_store_path()
        try:
            init_db(self.path)
        except (sqlite3.Error, OSError) as e:
            raise MediumUnavailableError(f"Cannot open store at {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        with get_db(self.path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        with get_db(self.path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
                (key, value)
            )
            conn.commit()

    def remove_item(self, key: str) -> None:
        with get_db(self.path) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()

    def clear(self) -> None:
        with get_db(self.path) as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM kv")
            conn.commit()

    def keys(self) -> List[str]:
        with get_db(self.path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT key FROM kv ORDER BY key")
            return [row[0] for row in cursor.fetchall()]


def get_medium(backend: Optional[str] = None, path: Optional[str] = None) -> Medium:
    """Get configured medium implementation.

    An unopenable SQLite file degrades to an in-memory medium so the
    application keeps running for the current process.
    """
    backend = (backend or get_store_backend()).lower()

    if backend == "memory":
        return MemoryMedium()
    elif backend == "sqlite":
        try:
            return SQLiteMedium(path)
        except MediumUnavailableError as e:
            logger.log_store_failure("open", error=e)
            return MemoryMedium()
    else:
        logger.warning(f"Unknown store backend '{backend}', using in-memory medium")
        return MemoryMedium()
