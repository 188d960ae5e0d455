"""Translation context.

Two layers of switches decide whether translation runs:

* a process-wide flag (``TranslationContext.set_global_enabled``), shared by
  every execution unit and read on every check, and
* a per-execution-unit context held in a ContextVar, so each thread or
  asyncio task sees its own request flag and strategy allow-list.

The effective state is always ``global AND request``: switching the global
flag off wins over any request override.
"""

from __future__ import annotations

from collections.abc import Iterable
from contextvars import ContextVar, Token

from response_translate.core.enums import TranslateStrategy

_global_enabled: bool = True

_CURRENT: ContextVar[TranslationContext | None] = ContextVar(
    "response_translate_context",
    default=None,
)


def _strategy_key(strategy: TranslateStrategy | str) -> str:
    if isinstance(strategy, TranslateStrategy):
        return strategy.value
    try:
        return TranslateStrategy.coerce(strategy).value
    except ValueError:
        return str(strategy)


class TranslationContext:
    """Per-execution-unit translation switches.

    A context is created lazily by ``current()`` and inherits the global flag
    as its initial request flag. Call ``clear()`` when the unit of work ends;
    pooled threads otherwise carry the previous request's state forward.

    Args:
        enabled: Request-level enablement.
        strategies: Allowed strategy identifiers. Empty means all strategies.
    """

    def __init__(
        self,
        enabled: bool = True,
        strategies: Iterable[TranslateStrategy | str] | None = None,
    ) -> None:
        self._enabled = enabled
        self._strategies: frozenset[str] = frozenset()
        self.set_allowed_strategies(strategies)

    # --- process-wide switch ---

    @staticmethod
    def set_global_enabled(enabled: bool) -> None:
        """Set the process-wide switch. Last write wins."""
        global _global_enabled
        _global_enabled = bool(enabled)

    @staticmethod
    def is_global_enabled() -> bool:
        return _global_enabled

    # --- execution-unit lifecycle ---

    @classmethod
    def current(cls) -> TranslationContext:
        """Return the context of the current execution unit, creating it if absent."""
        ctx = _CURRENT.get()
        if ctx is None:
            ctx = cls(enabled=_global_enabled)
            _CURRENT.set(ctx)
        return ctx

    @staticmethod
    def peek() -> TranslationContext | None:
        """Return the current context without creating one."""
        return _CURRENT.get()

    @staticmethod
    def install(ctx: TranslationContext) -> Token[TranslationContext | None]:
        """Make *ctx* the context of the current execution unit.

        Returns a token for ``restore``, which reinstates whatever was current
        before (normally nothing).
        """
        return _CURRENT.set(ctx)

    @staticmethod
    def restore(token: Token[TranslationContext | None]) -> None:
        _CURRENT.reset(token)

    @staticmethod
    def clear() -> None:
        """Drop the current execution unit's context."""
        _CURRENT.set(None)

    # --- request-level switches ---

    def set_request_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)

    @property
    def request_enabled(self) -> bool:
        return self._enabled

    def set_allowed_strategies(
        self, strategies: Iterable[TranslateStrategy | str] | None
    ) -> None:
        """Replace the strategy allow-list. ``None`` or empty allows everything."""
        if not strategies:
            self._strategies = frozenset()
            return
        self._strategies = frozenset(_strategy_key(s) for s in strategies)

    @property
    def allowed_strategies(self) -> frozenset[str]:
        return self._strategies

    def copy(self) -> TranslationContext:
        """Independent context with the same request flag and allow-list."""
        return TranslationContext(enabled=self._enabled, strategies=self._strategies)

    def is_enabled(self) -> bool:
        return _global_enabled and self._enabled

    def is_strategy_enabled(self, strategy: TranslateStrategy | str | None) -> bool:
        """Check whether *strategy* may run under this context."""
        if not self.is_enabled():
            return False
        if not self._strategies:
            return True
        return strategy is not None and _strategy_key(strategy) in self._strategies

    def __repr__(self) -> str:
        return (
            f"TranslationContext(enabled={self.is_enabled()}, "
            f"strategies={sorted(self._strategies)})"
        )
