"""In-memory dictionary cache.

Backs the CACHE strategy (and the cache-first step of the TABLE strategy)
for tests, single-process deployments, or as a local tier in front of a
shared store.
"""

from __future__ import annotations

import threading
from collections.abc import Collection, Mapping
from typing import Any, Union

from cachetools import LRUCache, TTLCache

from response_translate.core.config import CacheSettings, CacheType
from response_translate.core.keys import dict_namespace, entry_key


class MemoryDictionaryCache:
    """A thread-safe dictionary cache on top of cachetools.

    Entries are stored under ``{namespace}:{code}``. The CACHE resolver asks
    for namespace ``dict:{dict_key}``, the TABLE resolver for
    ``table:{table}:{key_column}:{value_column}``.
    """

    def __init__(self, settings: CacheSettings | None = None) -> None:
        self.settings = settings or CacheSettings()
        self._lock = threading.Lock()
        self._cache: Union[LRUCache[str, Any], TTLCache[str, Any]]
        self._initialize_cache()

    def _initialize_cache(self) -> None:
        if self.settings.cache_type is CacheType.TTL:
            self._cache = TTLCache(maxsize=self.settings.maxsize, ttl=self.settings.ttl)
        else:
            self._cache = LRUCache(maxsize=self.settings.maxsize)

    def get_batch(self, namespace: str, codes: Collection[Any]) -> dict[Any, Any]:
        """Return the cached ``{code: display}`` hits for *codes*."""
        result: dict[Any, Any] = {}
        with self._lock:
            for code in codes:
                value = self._cache.get(entry_key(namespace, code))
                if value is not None:
                    result[code] = value
        return result

    def put(self, namespace: str, code: Any, value: Any) -> None:
        with self._lock:
            self._cache[entry_key(namespace, code)] = value

    def put_batch(self, namespace: str, values: Mapping[Any, Any]) -> None:
        with self._lock:
            for code, value in values.items():
                if value is not None:
                    self._cache[entry_key(namespace, code)] = value

    def load_dictionary(self, dict_key: str, values: Mapping[Any, Any]) -> None:
        """Store a whole dictionary under the CACHE strategy's namespace."""
        self.put_batch(dict_namespace(dict_key), values)

    def clear(self) -> None:
        with self._lock:
            self._initialize_cache()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
