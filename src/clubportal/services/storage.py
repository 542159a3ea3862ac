"""Key-value blob storage for durable slots."""

import os
import sqlite3
from abc import ABC
from abc import abstractmethod

from clubportal.error_codes import ErrorCode
from clubportal.exceptions import StorageError
from clubportal.utils.logging_utils import EnhancedLoggerMixin


class KeyValueStore(ABC):
    """Named slots holding text blobs. Writes overwrite the whole slot."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the slot content, or None when the slot is empty."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrite the slot content."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the slot if present."""

    @abstractmethod
    def keys(self) -> list[str]:
        """Names of all populated slots."""


class MemoryKeyValueStore(KeyValueStore):
    """Dictionary backed store, lives as long as the object."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._slots: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value

    def delete(self, key: str) -> None:
        self._slots.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._slots)


class SQLiteKeyValueStore(KeyValueStore, EnhancedLoggerMixin):
    """Store backed by a single table in a SQLite file."""

    def __init__(self, db_path: str):
        """Initialize store.

        Args:
            db_path: Path to SQLite database file
        """
        EnhancedLoggerMixin.__init__(self)
        self.db_path = db_path
        self.set_log_context(db_path=db_path)

        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        self._init_db()

    def _init_db(self) -> None:
        """Initialize database tables."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS slots (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                    )
                """)
                conn.commit()
        except sqlite3.Error as e:
            self.error("Failed to initialize storage", exc_info=e)
            raise StorageError(
                f"Unable to open storage: {e!s}", "*", ErrorCode.STORAGE_UNAVAILABLE
            ) from e

    def get(self, key: str) -> str | None:
        try:
            with sqlite3.connect(self.db_path) as conn:
                row = conn.execute(
                    "SELECT value FROM slots WHERE key = ?", (key,)
                ).fetchone()
        except sqlite3.Error as e:
            self.error("Failed to read slot", exc_info=e, slot=key)
            raise StorageError(
                f"Unable to read slot {key}: {e!s}", key, ErrorCode.STORAGE_UNAVAILABLE
            ) from e
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO slots (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)",
                    (key, value)
                )
                conn.commit()
        except sqlite3.Error as e:
            self.error("Failed to write slot", exc_info=e, slot=key)
            raise StorageError(
                f"Unable to write slot {key}: {e!s}", key, ErrorCode.STORAGE_UNAVAILABLE
            ) from e
        self.debug("Wrote slot", slot=key, size=len(value))

    def delete(self, key: str) -> None:
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute("DELETE FROM slots WHERE key = ?", (key,))
                conn.commit()
        except sqlite3.Error as e:
            self.error("Failed to delete slot", exc_info=e, slot=key)
            raise StorageError(
                f"Unable to delete slot {key}: {e!s}", key, ErrorCode.STORAGE_UNAVAILABLE
            ) from e

    def keys(self) -> list[str]:
        try:
            with sqlite3.connect(self.db_path) as conn:
                rows = conn.execute("SELECT key FROM slots ORDER BY key").fetchall()
        except sqlite3.Error as e:
            self.error("Failed to list slots", exc_info=e)
            raise StorageError(
                f"Unable to list slots: {e!s}", "*", ErrorCode.STORAGE_UNAVAILABLE
            ) from e
        return [row[0] for row in rows]
