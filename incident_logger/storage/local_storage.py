from __future__ import annotations

"""
Durable string key-value store in the spirit of the browser's localStorage.

STORAGE_URL format:
  sqlite:///./data/incident_logger.db   (relative path)
  sqlite:////var/lib/incidents.db       (absolute path)
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator


class LocalStorage:
    def __init__(self, url: str) -> None:
        if not url.startswith("sqlite:///"):
            raise ValueError(f"Unsupported STORAGE_URL: {url}")
        self._url = url
        self._db_path = Path(url.removeprefix("sqlite:///"))
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    @property
    def path(self) -> Path:
        return self._db_path

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS local_storage (
                    key     TEXT    PRIMARY KEY,
                    value   TEXT    NOT NULL
                )
            """)

    def get_item(self, key: str) -> str | None:
        with self._conn() as conn:
            row = conn.execute(
                "SELECT value FROM local_storage WHERE key = ? LIMIT 1", (key,)
            ).fetchone()
        return None if row is None else row[0]

    def set_item(self, key: str, value: str) -> None:
        with self._conn() as conn:
            conn.execute(
                """INSERT INTO local_storage (key, value) VALUES (?, ?)
                   ON CONFLICT (key) DO UPDATE SET value = excluded.value""",
                (key, str(value)),
            )

    def remove_item(self, key: str) -> None:
        with self._conn() as conn:
            conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))

    def clear(self) -> None:
        with self._conn() as conn:
            conn.execute("DELETE FROM local_storage")

    def keys(self) -> list[str]:
        with self._conn() as conn:
            rows = conn.execute("SELECT key FROM local_storage ORDER BY key").fetchall()
        return [r[0] for r in rows]
