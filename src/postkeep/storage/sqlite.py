"""
SQLite-backed key-value store.
"""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass
from typing import Iterator, Optional

from ..utils import get_logger, time_call
from .base import StorageConfig, StorageConfigurationError, StorageError, StorageQuotaExceeded

_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(slots=True)
class SQLiteConnectionState:
    connection: sqlite3.Connection


class SQLiteStore:
    """
    Store wrapping the Python stdlib sqlite3 module. Each key is one row.
    """

    def __init__(self, config: StorageConfig) -> None:
        if not _TABLE_NAME_RE.match(config.table):
            raise StorageConfigurationError(f"Invalid table name {config.table!r}")
        self.config = config
        self.table = config.table
        self._state: SQLiteConnectionState | None = None
        self.logger = get_logger("storage.sqlite")
        self.connect()

    # ------------------------------------------------------------------ #
    # Connection management
    # ------------------------------------------------------------------ #
    def connect(self) -> sqlite3.Connection:
        path = self.config.path or ":memory:"
        timeout = self.config.timeout if self.config.timeout is not None else 5.0
        try:
            connection = sqlite3.connect(path, isolation_level=None, timeout=timeout)
            if not self.config.durable:
                connection.execute("PRAGMA synchronous = OFF")
            connection.execute(
                f'CREATE TABLE IF NOT EXISTS "{self.table}" (key TEXT PRIMARY KEY, value TEXT NOT NULL)'
            )
        except sqlite3.Error as exc:
            raise StorageError(f"Could not open store at {self.config.redacted_dsn()}: {exc}") from exc
        self._state = SQLiteConnectionState(connection)
        return connection

    def close(self) -> None:
        if self._state:
            self._state.connection.close()
            self._state = None

    def _ensure_connection(self) -> sqlite3.Connection:
        if not self._state:
            raise StorageError("SQLiteStore is not connected.")
        return self._state.connection

    # ------------------------------------------------------------------ #
    # Key-value operations
    # ------------------------------------------------------------------ #
    def get_item(self, key: str) -> Optional[str]:
        row = self._execute(f'SELECT value FROM "{self.table}" WHERE key = ?', (key,), key=key).fetchone()
        if row is None:
            return None
        return row[0]

    def set_item(self, key: str, value: str) -> None:
        if self.config.quota_bytes is not None:
            projected = self._usage(exclude=key) + len(key.encode("utf-8")) + len(value.encode("utf-8"))
            if projected > self.config.quota_bytes:
                raise StorageQuotaExceeded(
                    f"Writing '{key}' needs {projected} bytes; quota is {self.config.quota_bytes}."
                )
        self._execute(
            f'INSERT INTO "{self.table}" (key, value) VALUES (?, ?) '
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value),
            key=key,
        )

    def remove_item(self, key: str) -> None:
        self._execute(f'DELETE FROM "{self.table}" WHERE key = ?', (key,), key=key)

    def keys(self) -> Iterator[str]:
        rows = self._execute(f'SELECT key FROM "{self.table}" ORDER BY key').fetchall()
        return iter([row[0] for row in rows])

    def clear(self) -> None:
        self._execute(f'DELETE FROM "{self.table}"')

    # ------------------------------------------------------------------ #
    def _usage(self, *, exclude: str) -> int:
        row = self._execute(
            f'SELECT COALESCE(SUM(LENGTH(CAST(key AS BLOB)) + LENGTH(CAST(value AS BLOB))), 0) '
            f'FROM "{self.table}" WHERE key != ?',
            (exclude,),
        ).fetchone()
        return int(row[0])

    def _execute(self, sql: str, params: tuple = (), *, key: str | None = None) -> sqlite3.Cursor:
        connection = self._ensure_connection()
        try:
            with time_call("sqlite.execute", self.logger, key=key):
                return connection.execute(sql, params)
        except sqlite3.Error as exc:
            raise StorageError(f"SQLite store operation failed: {exc}") from exc
