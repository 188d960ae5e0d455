"""Resolver Registry - maps each translation strategy to its resolver.

Register once at startup, then read-only access for the lifetime of the
application. Lookups never raise: an unregistered strategy simply means the
field is skipped.
"""

from __future__ import annotations

import threading

from response_translate.core.config import TranslationSettings
from response_translate.core.enums import TranslateStrategy
from response_translate.core.exceptions import DuplicateResolverError
from response_translate.resolvers.base import Resolver
from response_translate.resolvers.dictionary import DictionaryResolver
from response_translate.resolvers.enumeration import EnumResolver
from response_translate.resolvers.protocol import DictionaryCache, RemoteClient, TableStore
from response_translate.resolvers.remote import RemoteResolver
from response_translate.resolvers.table import TableResolver


class ResolverRegistry:
    """Strategy -> resolver lookup table."""

    def __init__(self) -> None:
        self._resolvers: dict[TranslateStrategy, Resolver] = {}
        self._lock = threading.Lock()

    def register(self, resolver: Resolver, *, replace: bool = False) -> None:
        """Register *resolver* under its ``strategy``.

        Raises:
            DuplicateResolverError: If the strategy already has a resolver and
                ``replace`` is False.
        """
        strategy = TranslateStrategy.coerce(resolver.strategy)
        with self._lock:
            existing = self._resolvers.get(strategy)
            if existing is not None and not replace:
                raise DuplicateResolverError(strategy.value, repr(existing), repr(resolver))
            self._resolvers[strategy] = resolver

    def get(self, strategy: TranslateStrategy | str | None) -> Resolver | None:
        """Return the resolver for *strategy*, or None if none is registered."""
        if strategy is None:
            return None
        try:
            key = TranslateStrategy.coerce(strategy)
        except ValueError:
            return None
        return self._resolvers.get(key)

    def has(self, strategy: TranslateStrategy | str) -> bool:
        """Check if a strategy has a registered resolver."""
        return self.get(strategy) is not None

    @property
    def strategies(self) -> list[str]:
        """Registered strategy identifiers, sorted alphabetically."""
        return sorted(s.value for s in self._resolvers)

    def __len__(self) -> int:
        return len(self._resolvers)


def build_default_registry(
    cache: DictionaryCache | None = None,
    table_store: TableStore | None = None,
    remote_client: RemoteClient | None = None,
    settings: TranslationSettings | None = None,
) -> ResolverRegistry:
    """Register the four reference resolvers.

    Missing collaborators are allowed: the matching resolver then returns
    empty results and fields fall back to their fallback or raw value.
    """
    settings = settings or TranslationSettings()
    registry = ResolverRegistry()
    registry.register(EnumResolver())
    registry.register(DictionaryResolver(cache))
    registry.register(
        TableResolver(table_store, cache, chunk_size=settings.table_chunk_size)
    )
    registry.register(RemoteResolver(remote_client))
    return registry
