"""
SQLite connections for the mission store.

``get_connection()`` opens one short-lived connection per unit of work::

    with get_connection("data/db/mission_command.db") as conn:
        apply_schema(conn)
        conn.execute("SELECT value FROM kv_store WHERE key = ?;", (key,))

The block runs as one transaction: it commits when the block exits
normally and rolls back if it raises. Rows come back as ``sqlite3.Row``.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"


def _open(db_path: str, wal_mode: bool, busy_timeout_ms: int) -> sqlite3.Connection:
    in_memory = db_path == MEMORY_DB
    if not in_memory:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, timeout=busy_timeout_ms / 1000)
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA busy_timeout = {int(busy_timeout_ms)};")
    # WAL needs a file; in-memory databases keep their default journal
    if wal_mode and not in_memory:
        conn.execute("PRAGMA journal_mode = WAL;")
    return conn


@contextmanager
def get_connection(
    db_path: str | Path,
    wal_mode: bool = True,
    busy_timeout_ms: int = 5000,
) -> Iterator[sqlite3.Connection]:
    """Yield a configured connection wrapped in a single transaction.

    Args:
        db_path: Database file, created along with its parent directories
            if missing. ``":memory:"`` gives a private database that is
            discarded when the block exits.
        wal_mode: Switch file databases to WAL journaling.
        busy_timeout_ms: How long to wait on a locked database before
            ``sqlite3.OperationalError``.

    Raises:
        sqlite3.OperationalError: If the file cannot be opened or stays locked.
    """
    conn = _open(str(db_path), wal_mode, busy_timeout_ms)
    try:
        yield conn
    except BaseException:
        conn.rollback()
        logger.debug("Rolled back transaction on %s", db_path)
        raise
    else:
        conn.commit()
    finally:
        conn.close()
