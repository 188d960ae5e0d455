"""Trigger helpers for frameworks without a response hook of their own.

A web framework normally calls ``engine.translate(body)`` once, after the
handler produced its response and before serialization. These helpers give
any function-based handler that behaviour, with its own TranslationContext
per call.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from response_translate.core.context import TranslationContext
from response_translate.core.engine import TranslationEngine
from response_translate.core.enums import TranslateStrategy

F = TypeVar("F", bound=Callable[..., Any])


@contextmanager
def translation_scope(
    enabled: bool | None = None,
    strategies: Iterable[TranslateStrategy | str] | None = None,
) -> Iterator[TranslationContext]:
    """Run a block as one execution unit with its own TranslationContext.

    The scope starts from a copy of the current context, so overrides set by
    upstream code (middleware, auth filters) carry in. Without a current
    context it starts from the global flag. The optional arguments are then
    applied, and the scope's context is discarded on exit so changes made
    inside never leak out.

    Example:
        with translation_scope(strategies=["enum"]) as ctx:
            body = engine.translate(handler())
    """
    upstream = TranslationContext.peek()
    if upstream is None:
        ctx = TranslationContext(enabled=TranslationContext.is_global_enabled())
    else:
        ctx = upstream.copy()
    if enabled is not None:
        ctx.set_request_enabled(enabled)
    if strategies is not None:
        ctx.set_allowed_strategies(strategies)
    token = TranslationContext.install(ctx)
    try:
        yield ctx
    finally:
        TranslationContext.restore(token)


def translate_response(engine: TranslationEngine) -> Callable[[F], F]:
    """Decorate a handler so its return value is translated before it is returned.

    Works for plain and ``async def`` handlers. The handler may adjust
    ``TranslationContext.current()`` (e.g. disable translation or restrict
    strategies); those changes apply to its own response only. For async
    handlers translation runs in a worker thread, since table and remote
    lookups block.
    """

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with translation_scope() as ctx:
                    body = await func(*args, **kwargs)
                    return await asyncio.to_thread(engine.translate, body, ctx)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with translation_scope() as ctx:
                body = func(*args, **kwargs)
                return engine.translate(body, ctx)

        return wrapper  # type: ignore[return-value]

    return decorator
