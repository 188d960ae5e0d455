"""CACHE strategy: dictionary lookup through an injected DictionaryCache."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from response_translate.core.context import TranslationContext
from response_translate.core.descriptor import TranslateField
from response_translate.core.enums import TranslateStrategy
from response_translate.core.keys import dict_key, dict_namespace
from response_translate.resolvers.base import Resolver, restrict, unique_present
from response_translate.resolvers.protocol import DictionaryCache


class DictionaryResolver(Resolver):
    """Resolve codes from the ``dict:{dict_key}`` namespace of a cache.

    Args:
        cache: Dictionary store. ``None`` makes every lookup return nothing.
    """

    strategy = TranslateStrategy.CACHE

    def __init__(self, cache: DictionaryCache | None = None) -> None:
        self._cache = cache

    def batch_resolve(
        self,
        raw_values: Collection[Any],
        descriptor: TranslateField,
        context: TranslationContext,
    ) -> dict[Any, Any]:
        if self._cache is None or not descriptor.dict_key:
            return {}

        codes = unique_present(raw_values)
        if not codes:
            return {}

        cache = self._cache
        namespace = dict_namespace(descriptor.dict_key)
        fetched = self._guarded(
            f"cache lookup in '{namespace}'",
            lambda: cache.get_batch(namespace, codes),
            {},
        )
        return restrict(codes, fetched)

    @staticmethod
    def build_cache_key(namespace: str, code: Any) -> str:
        """Key under which one entry of dictionary *namespace* is stored."""
        return dict_key(namespace, code)
