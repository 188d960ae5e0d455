"""Database adapter protocol.

SqlTableStore reaches a database only through this protocol, so a lookup
table can live in SQLite, PostgreSQL, or any backend with an adapter. Pooling
belongs to ConnectionManager; adapters deal with single connections.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from response_translate.core.connection import ConnectionConfig


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """Parameter binding style: 'named' (:name) or 'pyformat' (%(name)s)."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open one connection."""
        ...

    def fetch_pairs(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> list[tuple[Any, Any]]:
        """Run a two-column SELECT and return its rows as ``(key, value)`` tuples."""
        ...

    def is_alive(self, connection: Any) -> bool:
        """Whether *connection* can still serve queries after an error."""
        ...

    def close(self, connection: Any) -> None:
        """Close one connection."""
        ...
