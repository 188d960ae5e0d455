"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Collection, Iterator
from typing import Any

import pytest

from response_translate.backends.memory import MemoryDictionaryCache
from response_translate.backends.sql import SqlTableStore
from response_translate.core.connection import ConnectionConfig, ConnectionManager
from response_translate.core.context import TranslationContext
from response_translate.core.descriptor import TranslateField
from response_translate.core.engine import TranslationEngine
from response_translate.core.enums import TranslateStrategy
from response_translate.core.introspection import clear_field_plan_cache
from response_translate.core.registry import ResolverRegistry
from response_translate.resolvers.base import Resolver


class RecordingResolver(Resolver):
    """Resolver backed by a fixed mapping that records every batch it receives."""

    def __init__(
        self,
        mapping: dict[Any, Any] | None = None,
        strategy: TranslateStrategy = TranslateStrategy.CACHE,
        fail: bool = False,
    ) -> None:
        self.strategy = strategy  # type: ignore[misc]
        self.mapping = mapping or {}
        self.fail = fail
        self.calls: list[set[Any]] = []

    def batch_resolve(
        self,
        raw_values: Collection[Any],
        descriptor: TranslateField,
        context: TranslationContext,
    ) -> dict[Any, Any]:
        self.calls.append(set(raw_values))
        if self.fail:
            raise RuntimeError("backend unavailable")
        return {v: self.mapping[v] for v in raw_values if v in self.mapping}


@pytest.fixture(autouse=True)
def clean_translation_state() -> Iterator[None]:
    """Every test starts with translation globally on and no current context."""
    TranslationContext.set_global_enabled(True)
    TranslationContext.clear()
    yield
    TranslationContext.set_global_enabled(True)
    TranslationContext.clear()
    clear_field_plan_cache()


@pytest.fixture
def recording_resolver():
    """Factory for RecordingResolver instances."""

    def _make(
        mapping: dict[Any, Any] | None = None,
        strategy: TranslateStrategy = TranslateStrategy.CACHE,
        fail: bool = False,
    ) -> RecordingResolver:
        return RecordingResolver(mapping, strategy, fail)

    return _make


@pytest.fixture
def registry() -> ResolverRegistry:
    return ResolverRegistry()


@pytest.fixture
def engine(registry: ResolverRegistry) -> TranslationEngine:
    return TranslationEngine(registry)


@pytest.fixture
def memory_cache() -> MemoryDictionaryCache:
    return MemoryDictionaryCache()


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config (one connection, one database)."""
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def org_store(sqlite_config: ConnectionConfig) -> Iterator[SqlTableStore]:
    """SqlTableStore over an ``org(id, name)`` table holding ids 10 and 20."""
    manager = ConnectionManager(sqlite_config)
    with manager.get_connection() as conn:
        conn.execute("CREATE TABLE org (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
        conn.execute("INSERT INTO org (id, name) VALUES (10, 'Alpha'), (20, 'Beta')")
        conn.commit()
    store = SqlTableStore(manager)
    yield store
    store.close()
