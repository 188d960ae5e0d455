"""Resolver base class.

A resolver implements one translation strategy. Batch resolution is the
primary path; ``resolve`` is a single-value convenience built on it.
Resolvers are registered once at startup and hold no per-call state.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Collection, Mapping
from typing import Any, ClassVar, TypeVar

from response_translate.core.context import TranslationContext
from response_translate.core.descriptor import TranslateField
from response_translate.core.enums import TranslateStrategy

logger = logging.getLogger(__name__)

R = TypeVar("R")


def is_absent(value: Any) -> bool:
    """None and empty strings carry nothing to translate."""
    return value is None or (isinstance(value, str) and value == "")


def unique_present(raw_values: Collection[Any] | None) -> list[Any]:
    """Deduplicate *raw_values*, dropping absent and unhashable entries.

    Order of first appearance is preserved.
    """
    if not raw_values:
        return []
    seen: dict[Any, None] = {}
    for value in raw_values:
        if is_absent(value):
            continue
        try:
            seen.setdefault(value, None)
        except TypeError:
            continue
    return list(seen)


def restrict(requested: Collection[Any], fetched: Mapping[Any, Any] | None) -> dict[Any, Any]:
    """Keep only entries of *fetched* whose key was requested and whose value is set."""
    if not fetched:
        return {}
    result: dict[Any, Any] = {}
    for code in requested:
        try:
            value = fetched.get(code)
        except Exception:
            continue
        if value is not None:
            result[code] = value
    return result


class Resolver(ABC):
    """Translation strategy contract.

    Subclasses set ``strategy`` and implement ``batch_resolve``.
    """

    strategy: ClassVar[TranslateStrategy]

    @abstractmethod
    def batch_resolve(
        self,
        raw_values: Collection[Any],
        descriptor: TranslateField,
        context: TranslationContext,
    ) -> dict[Any, Any]:
        """Translate a batch of raw values.

        Args:
            raw_values: Raw field values collected across a collection.
            descriptor: The field's translation metadata.
            context: The current translation context.

        Returns:
            ``{raw: display}`` for the values that could be resolved. Missing
            keys mean "unresolved"; the caller applies the fallback policy.
            Implementations must not raise: on failure they return ``{}``.
        """

    def resolve(
        self,
        raw_value: Any,
        descriptor: TranslateField,
        context: TranslationContext,
    ) -> Any | None:
        """Translate one raw value, or return None if unresolved."""
        values = unique_present((raw_value,))
        if not values:
            return None
        result = self.batch_resolve(set(values), descriptor, context)
        if not result:
            return None
        return result.get(raw_value)

    def _guarded(self, operation: str, call: Callable[[], R], default: R) -> R:
        """Run a collaborator call, logging and returning *default* on failure."""
        try:
            return call()
        except Exception:
            logger.warning(
                "%s resolver: %s failed; degrading to empty result",
                self.strategy.value,
                operation,
                exc_info=True,
            )
            return default

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strategy={self.strategy.value!r})"
