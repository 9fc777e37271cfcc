"""Key-value stores for JSON-serializable objects (user record, persona)."""

import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Protocol

from ..config import ReaderConfig

USER_KEY = "user"
PERSONA_KEY = "userPersona"


class KeyValueStore(Protocol):
    """A persisted mapping from fixed string keys to JSON objects."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class JsonFileStore:
    """
    Persists all keys in a single JSON document.

    The whole document is rewritten on every change; the reader is the only
    writer, so last write wins.
    """

    DEFAULT_PATH = "data/reader_store.json"

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or self.DEFAULT_PATH)
        self._data: dict = {}
        self._load()

    def _load(self):
        """Load the document from file."""
        if self.path.exists():
            with open(self.path, "r") as f:
                self._data = json.load(f)
        else:
            self._data = {}

    def _save(self):
        """Save the document to file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(self._data, f, indent=2)

    def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._save()

    def delete(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._save()


class SqliteStore:
    """
    SQLite-backed key-value store.

    Tables:
    - kv: one row per key, value stored as JSON text
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = Path(db_path or "data/reader_store.db")
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    @contextmanager
    def _get_conn(self):
        """Context manager for database connections."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self):
        """Initialize database schema."""
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)

    def get(self, key: str) -> Optional[Any]:
        with self._get_conn() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            if row:
                return json.loads(row["value"])
        return None

    def set(self, key: str, value: Any) -> None:
        with self._get_conn() as conn:
            conn.execute("""
                INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
            """, (key, json.dumps(value), datetime.now().isoformat()))

    def delete(self, key: str) -> None:
        with self._get_conn() as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))


def create_store(config: ReaderConfig) -> KeyValueStore:
    """Build the store selected by configuration."""
    if config.store_backend == "sqlite":
        return SqliteStore(config.store_path)
    if config.store_backend == "json":
        return JsonFileStore(config.store_path)
    raise ValueError(f"Unknown store backend: {config.store_backend!r}")
