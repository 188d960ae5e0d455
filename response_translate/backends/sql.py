"""TableStore over a pooled database connection."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from response_translate.core.connection import ConnectionConfig, ConnectionManager
from response_translate.core.params import build_lookup_query
from response_translate.core.sanitizer import TableLookup

logger = logging.getLogger(__name__)


def _to_mapping(pairs: Iterable[tuple[Any, Any]]) -> dict[Any, Any]:
    """Collect ``{key: value}`` from row pairs, skipping NULL keys."""
    return {key: value for key, value in pairs if key is not None}


class SqlTableStore:
    """Look up display values with ``SELECT key, value FROM table WHERE key IN (...)``.

    Identifiers are validated before any SQL is built; codes are always
    bound as parameters.

    Raises:
        IdentifierValidationError: From ``query`` when an identifier is unsafe.
    """

    def __init__(self, connection_manager: ConnectionManager) -> None:
        self._connection_manager = connection_manager

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> SqlTableStore:
        return cls(ConnectionManager(config))

    @property
    def connection_manager(self) -> ConnectionManager:
        return self._connection_manager

    def query(
        self,
        table: str,
        key_column: str,
        value_column: str,
        codes: Sequence[Any],
    ) -> dict[Any, Any]:
        lookup = TableLookup(table, key_column, value_column)
        if not codes:
            return {}

        adapter = self._connection_manager.adapter
        sql, params = build_lookup_query(lookup, codes, adapter.paramstyle)
        logger.debug("Table lookup on %s for %d code(s)", lookup.table, len(codes))

        with self._connection_manager.get_connection() as conn:
            return _to_mapping(adapter.fetch_pairs(conn, sql, params))

    def close(self) -> None:
        self._connection_manager.close_pool()
