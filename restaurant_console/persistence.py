"""Session-scoped key-value storage for auth, theme and navigation state."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Protocol

from restaurant_console.config import SESSION_DB_PATH

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Dict-backed store; the default for tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._values)


def _connect(db_path: str) -> sqlite3.Connection:
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(db_path)


class SqliteKeyValueStore:
    """
    SQLite-backed store holding one connection for its lifetime.

    With the default ``:memory:`` path the values disappear with the process,
    matching a browser session store. A file path keeps them across runs.
    """

    def __init__(self, db_path: str = SESSION_DB_PATH) -> None:
        self.db_path = db_path
        self._conn = _connect(db_path)
        self.bootstrap_schema()

    def bootstrap_schema(self) -> None:
        """Create the key-value table if it does not already exist."""
        with self._conn:
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS session_values (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get(self, key: str) -> str | None:
        row = self._conn.execute("SELECT value FROM session_values WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return str(row[0])

    def set(self, key: str, value: str) -> None:
        with self._conn:
            self._conn.execute(
                """
                INSERT INTO session_values (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
        logger.debug("stored key=%s", key)

    def remove(self, key: str) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM session_values WHERE key = ?", (key,))
        logger.debug("removed key=%s", key)

    def close(self) -> None:
        self._conn.close()
