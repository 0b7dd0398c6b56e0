"""
SQLite schema DDL.

Mission storage keeps the whole mission collection as one serialized
value under one key, so the schema is a single key/value table. All
statements use ``IF NOT EXISTS`` so ``apply_schema()`` is idempotent.
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

_DDL_KV_STORE = """
CREATE TABLE IF NOT EXISTS kv_store (
    key         TEXT    PRIMARY KEY,
    value       TEXT    NOT NULL,
    updated_at  TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);
"""

ALL_TABLE_NAMES: tuple[str, ...] = ("kv_store",)

_ALL_DDL: tuple[str, ...] = (_DDL_KV_STORE,)


def apply_schema(conn: sqlite3.Connection) -> None:
    """Create every table if missing. Safe to call repeatedly."""
    for ddl in _ALL_DDL:
        conn.execute(ddl)
    logger.debug("Schema applied (%d tables).", len(ALL_TABLE_NAMES))
