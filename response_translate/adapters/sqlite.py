"""SQLite adapter (sqlite3 stdlib)."""

from __future__ import annotations

import sqlite3
from typing import Any

from response_translate.core.connection import ConnectionConfig


class SqliteSyncAdapter:
    """Lookup adapter for SQLite databases.

    ``config.database`` may be a path, ``:memory:``, or a ``file:`` URI (e.g.
    ``file:lookup.db?mode=ro`` for a read-only dictionary database).
    ``config.extra`` is passed to ``sqlite3.connect``.
    """

    @property
    def paramstyle(self) -> str:
        return "named"

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        # Pooled connections serve whichever worker thread checks them out.
        return sqlite3.connect(
            config.database,
            check_same_thread=False,
            uri=config.database.startswith("file:"),
            **config.extra,
        )

    def fetch_pairs(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> list[tuple[Any, Any]]:
        cursor = connection.execute(sql, params or {})
        try:
            return [(row[0], row[1]) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def is_alive(self, connection: sqlite3.Connection) -> bool:
        try:
            connection.execute("SELECT 1").close()
        except sqlite3.Error:
            return False
        return True

    def close(self, connection: sqlite3.Connection) -> None:
        connection.close()
