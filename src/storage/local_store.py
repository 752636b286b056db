# src/storage/local_store.py

"""SQLite-backed key-value store holding serialized application state."""

import logging
import sqlite3
from pathlib import Path

from src.config.settings import Settings

logger = logging.getLogger("stock_tracker.storage")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS kv (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


class LocalStore:
    """A tiny persistent string-to-string map.

    One row per key; writes overwrite the previous value in full.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        path = db_path or Settings.STORE_DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)
        logger.debug("LocalStore opened at %s", path)

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    def get(self, key: str) -> str | None:
        """Return the value stored under *key*, or ``None`` if absent."""
        row = self._conn.execute(
            "SELECT value FROM kv WHERE key = ?",
            (key,),
        ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        self._conn.execute(
            "INSERT INTO kv (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET "
            "value=excluded.value, updated_at=datetime('now')",
            (key, value),
        )
        self._conn.commit()
        logger.debug("Wrote %d chars under '%s'", len(value), key)
