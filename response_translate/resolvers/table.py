"""TABLE strategy: key/value lookup in a relational table.

Translates foreign-key-like values without joins in business SQL. The cache
is consulted first; remaining misses are queried in fixed-size chunks so the
``IN (...)`` list stays bounded.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any

from response_translate.core.context import TranslationContext
from response_translate.core.descriptor import TranslateField
from response_translate.core.enums import TranslateStrategy
from response_translate.core.keys import table_namespace
from response_translate.core.params import chunked
from response_translate.core.sanitizer import TableLookup
from response_translate.resolvers.base import Resolver, restrict, unique_present
from response_translate.resolvers.protocol import DictionaryCache, TableStore

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 500


class TableResolver(Resolver):
    """Resolve codes from ``descriptor.table``.

    Args:
        store: Backing table store. ``None`` limits resolution to cache hits.
        cache: Optional cache consulted before the store, under the
            ``table:{table}:{key_column}:{value_column}`` namespace. If it
            exposes ``put_batch``, rows fetched from the store are written back.
        chunk_size: Maximum number of codes per store query.
    """

    strategy = TranslateStrategy.TABLE

    def __init__(
        self,
        store: TableStore | None = None,
        cache: DictionaryCache | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._store = store
        self._cache = cache
        self._chunk_size = chunk_size

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def batch_resolve(
        self,
        raw_values: Collection[Any],
        descriptor: TranslateField,
        context: TranslationContext,
    ) -> dict[Any, Any]:
        lookup = TableLookup.checked(
            descriptor.table, descriptor.key_column, descriptor.value_column
        )
        if lookup is None:
            logger.debug(
                "Rejected table lookup %r(%r -> %r): unsafe or missing identifier",
                descriptor.table,
                descriptor.key_column,
                descriptor.value_column,
            )
            return {}

        codes = unique_present(raw_values)
        if not codes:
            return {}

        namespace = table_namespace(lookup.table, lookup.key_column, lookup.value_column)
        result = self._from_cache(namespace, codes)
        pending = [code for code in codes if code not in result]

        if pending and self._store is not None:
            fetched = self._from_store(self._store, lookup, pending)
            result.update(fetched)
            if fetched:
                self._warm_cache(namespace, fetched)

        return result

    def _from_cache(self, namespace: str, codes: list[Any]) -> dict[Any, Any]:
        cache = self._cache
        if cache is None:
            return {}
        cached = self._guarded(
            f"cache lookup in '{namespace}'",
            lambda: cache.get_batch(namespace, codes),
            {},
        )
        return restrict(codes, cached)

    def _from_store(
        self, store: TableStore, lookup: TableLookup, pending: list[Any]
    ) -> dict[Any, Any]:
        result: dict[Any, Any] = {}
        for chunk in chunked(pending, self._chunk_size):
            rows = self._guarded(
                f"query on '{lookup.table}'",
                lambda chunk=chunk: store.query(
                    lookup.table, lookup.key_column, lookup.value_column, list(chunk)
                ),
                {},
            )
            result.update(restrict(chunk, rows))
        return result

    def _warm_cache(self, namespace: str, rows: dict[Any, Any]) -> None:
        put_batch = getattr(self._cache, "put_batch", None)
        if put_batch is None:
            return
        self._guarded(f"cache warm-up of '{namespace}'", lambda: put_batch(namespace, rows), None)
