"""PostgreSQL adapter using psycopg (v3+). Install with the ``postgresql`` extra."""

from __future__ import annotations

from typing import Any

from response_translate.core.connection import ConnectionConfig


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    fields = (
        ("host", config.host),
        ("port", config.port),
        ("user", config.user),
        ("password", config.password),
        ("dbname", config.database),
    )
    return " ".join(f"{key}={value}" for key, value in fields if value is not None)


class PostgresqlSyncAdapter:
    """Lookup adapter for PostgreSQL.

    Connections run in autocommit mode: lookups are single reads and must not
    hold a transaction open while the connection sits idle in the pool.
    """

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    def connect(self, config: ConnectionConfig) -> Any:
        import psycopg

        return psycopg.connect(_build_conninfo(config), autocommit=True, **config.extra)

    def fetch_pairs(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> list[tuple[Any, Any]]:
        with connection.cursor() as cursor:
            cursor.execute(sql, params)
            return [(row[0], row[1]) for row in cursor.fetchall()]

    def is_alive(self, connection: Any) -> bool:
        return not (connection.closed or connection.broken)

    def close(self, connection: Any) -> None:
        connection.close()
