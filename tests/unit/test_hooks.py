"""Unit tests for translation_scope and translate_response."""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

import pytest

from response_translate.core.context import TranslationContext
from response_translate.core.descriptor import TranslateField
from response_translate.core.engine import TranslationEngine
from response_translate.core.enums import TranslateStrategy
from response_translate.core.hooks import translate_response, translation_scope
from response_translate.core.registry import ResolverRegistry
from response_translate.resolvers.base import Resolver
from response_translate.resolvers.enumeration import EnumResolver


class UserStatus(Enum):
    DISABLED = (0, "Disabled")
    ENABLED = (1, "Enabled")

    def __init__(self, code: int, desc: str) -> None:
        self.code = code
        self.desc = desc


@dataclass
class UserView:
    status: Annotated[int, TranslateField("enum", target="status_name", enum_type=UserStatus)]
    status_name: str | None = None


@dataclass
class Badge:
    dept_code: Annotated[str, TranslateField("cache", target="dept_name", dict_key="dept")]
    dept_name: str | None = None


class SlowDeptResolver(Resolver):
    """Blocks like a table lookup and records which thread ran it."""

    strategy = TranslateStrategy.CACHE

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self.threads: list[int] = []

    def batch_resolve(
        self,
        raw_values: Collection[Any],
        descriptor: TranslateField,
        context: TranslationContext,
    ) -> dict[Any, Any]:
        self.threads.append(threading.get_ident())
        time.sleep(self.delay)
        return {code: f"Dept {code}" for code in raw_values}


@pytest.fixture
def enum_engine(registry: ResolverRegistry, engine: TranslationEngine) -> TranslationEngine:
    registry.register(EnumResolver())
    return engine


class TestTranslationScope:
    def test_installs_fresh_context(self) -> None:
        outer = TranslationContext.current()
        with translation_scope() as ctx:
            assert TranslationContext.current() is ctx
            assert ctx is not outer
        assert TranslationContext.current() is outer

    def test_overrides(self) -> None:
        with translation_scope(enabled=False, strategies=["enum"]) as ctx:
            assert ctx.request_enabled is False
            assert ctx.allowed_strategies == frozenset({"enum"})

    def test_inherits_global_flag(self) -> None:
        TranslationContext.set_global_enabled(False)
        with translation_scope() as ctx:
            assert ctx.request_enabled is False

    def test_restored_on_error(self) -> None:
        outer = TranslationContext.current()
        with pytest.raises(RuntimeError):
            with translation_scope(enabled=False):
                raise RuntimeError("handler failed")
        assert TranslationContext.current() is outer
        assert outer.is_enabled() is True

    def test_copies_upstream_overrides(self) -> None:
        outer = TranslationContext.current()
        outer.set_request_enabled(False)
        outer.set_allowed_strategies(["remote"])
        with translation_scope() as ctx:
            assert ctx.request_enabled is False
            assert ctx.allowed_strategies == frozenset({"remote"})

    def test_changes_do_not_reach_upstream(self) -> None:
        outer = TranslationContext.current()
        outer.set_allowed_strategies(["enum"])
        with translation_scope(enabled=False) as ctx:
            ctx.set_allowed_strategies(["remote"])
        assert outer.request_enabled is True
        assert outer.allowed_strategies == frozenset({"enum"})

    def test_does_not_create_upstream_context(self) -> None:
        with translation_scope():
            pass
        assert TranslationContext.peek() is None


class TestTranslateResponse:
    def test_sync_handler(self, enum_engine: TranslationEngine) -> None:
        @translate_response(enum_engine)
        def get_user() -> UserView:
            return UserView(status=1)

        assert get_user().status_name == "Enabled"

    def test_wraps_metadata(self, enum_engine: TranslationEngine) -> None:
        @translate_response(enum_engine)
        def list_users() -> list[UserView]:
            """List users."""
            return []

        assert list_users.__name__ == "list_users"
        assert list_users.__doc__ == "List users."

    def test_handler_can_disable_translation(self, enum_engine: TranslationEngine) -> None:
        @translate_response(enum_engine)
        def export_users() -> list[UserView]:
            TranslationContext.current().set_request_enabled(False)
            return [UserView(status=0)]

        assert export_users()[0].status_name is None
        # The override does not leak into the caller's context.
        assert TranslationContext.current().is_enabled() is True

    def test_handler_restricts_strategies(self, enum_engine: TranslationEngine) -> None:
        @translate_response(enum_engine)
        def get_user() -> UserView:
            TranslationContext.current().set_allowed_strategies(["remote"])
            return UserView(status=1)

        assert get_user().status_name is None

    async def test_async_handler(self, enum_engine: TranslationEngine) -> None:
        @translate_response(enum_engine)
        async def get_users() -> list[UserView]:
            await asyncio.sleep(0)
            return [UserView(status=0), UserView(status=1)]

        users = await get_users()
        assert [u.status_name for u in users] == ["Disabled", "Enabled"]

    async def test_concurrent_async_handlers_isolated(self, enum_engine: TranslationEngine) -> None:
        @translate_response(enum_engine)
        async def get_user(translate: bool) -> UserView:
            TranslationContext.current().set_request_enabled(translate)
            await asyncio.sleep(0)
            return UserView(status=1)

        plain, translated = await asyncio.gather(get_user(False), get_user(True))
        assert plain.status_name is None
        assert translated.status_name == "Enabled"

    def test_upstream_disable_applies_to_handler(self, enum_engine: TranslationEngine) -> None:
        @translate_response(enum_engine)
        def get_user() -> UserView:
            return UserView(status=1)

        TranslationContext.current().set_request_enabled(False)
        assert get_user().status_name is None

    def test_upstream_allow_list_applies_to_handler(self, enum_engine: TranslationEngine) -> None:
        @translate_response(enum_engine)
        def get_user() -> UserView:
            return UserView(status=1)

        TranslationContext.current().set_allowed_strategies(["remote"])
        assert get_user().status_name is None

    async def test_upstream_disable_applies_to_async_handler(
        self, enum_engine: TranslationEngine
    ) -> None:
        @translate_response(enum_engine)
        async def get_user() -> UserView:
            return UserView(status=1)

        TranslationContext.current().set_request_enabled(False)
        assert (await get_user()).status_name is None


class TestAsyncOffload:
    @pytest.fixture
    def slow_resolver(self, registry: ResolverRegistry) -> SlowDeptResolver:
        resolver = SlowDeptResolver(delay=0.2)
        registry.register(resolver)
        return resolver

    async def test_translation_runs_off_the_event_loop(
        self, engine: TranslationEngine, slow_resolver: SlowDeptResolver
    ) -> None:
        @translate_response(engine)
        async def get_badge() -> Badge:
            return Badge(dept_code="HR")

        badge = await get_badge()
        assert badge.dept_name == "Dept HR"
        assert slow_resolver.threads
        assert threading.get_ident() not in slow_resolver.threads

    async def test_event_loop_stays_responsive(
        self, engine: TranslationEngine, slow_resolver: SlowDeptResolver
    ) -> None:
        @translate_response(engine)
        async def get_badge() -> Badge:
            return Badge(dept_code="ENG")

        ticks: list[float] = []

        async def ticker() -> None:
            for _ in range(5):
                await asyncio.sleep(0.01)
                ticks.append(time.monotonic())

        async def timed_request() -> float:
            await get_badge()
            return time.monotonic()

        finished, _ = await asyncio.gather(timed_request(), ticker())
        assert len(ticks) == 5
        assert all(tick < finished for tick in ticks)
