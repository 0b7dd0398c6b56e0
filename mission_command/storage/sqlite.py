"""
SQLite mission store.

The collection is one row of ``kv_store`` keyed by ``storage_key``. Each
call opens its own connection via ``get_connection()``, applies the schema
idempotently, and commits on exit.
"""

from __future__ import annotations

import logging
from typing import Optional

from mission_command.db.connection import get_connection
from mission_command.db.schema import apply_schema
from mission_command.storage.base import DEFAULT_STORAGE_KEY, MissionStore

logger = logging.getLogger(__name__)


class SqliteMissionStore(MissionStore):
    """Persist the mission collection in a SQLite key/value table.

    Attributes:
        db_path: SQLite file path. ``":memory:"`` is not useful here since
            every call opens a fresh connection.
        wal_mode: Enable WAL journaling.
        busy_timeout_ms: Lock wait before ``OperationalError``.
    """

    def __init__(
        self,
        db_path: str,
        storage_key: str = DEFAULT_STORAGE_KEY,
        wal_mode: bool = True,
        busy_timeout_ms: int = 5000,
    ) -> None:
        super().__init__(storage_key)
        self.db_path = db_path
        self.wal_mode = wal_mode
        self.busy_timeout_ms = busy_timeout_ms

    def describe(self) -> str:
        return f"sqlite:{self.db_path}[{self.storage_key}]"

    def _connect(self):
        return get_connection(
            self.db_path,
            wal_mode=self.wal_mode,
            busy_timeout_ms=self.busy_timeout_ms,
        )

    def _read_raw(self) -> Optional[str]:
        with self._connect() as conn:
            apply_schema(conn)
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?;", (self.storage_key,)
            ).fetchone()
        return row["value"] if row is not None else None

    def _write_raw(self, payload: str) -> None:
        with self._connect() as conn:
            apply_schema(conn)
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at;
                """,
                (self.storage_key, payload),
            )
