"""ENUM strategy: map codes to descriptions owned by an enumeration."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from numbers import Integral
from typing import Any, Protocol, runtime_checkable

from response_translate.core.context import TranslationContext
from response_translate.core.descriptor import TranslateField
from response_translate.core.enums import TranslateStrategy
from response_translate.resolvers.base import Resolver, unique_present


@runtime_checkable
class CodeEnum(Protocol):
    """Enumeration member exposing an explicit ``code`` / ``desc`` pair.

    Example:
        class UserStatus(Enum):
            DISABLED = (0, "Disabled")
            ENABLED = (1, "Enabled")

            def __init__(self, code: int, desc: str) -> None:
                self.code = code
                self.desc = desc
    """

    code: Any
    desc: str


@dataclass(frozen=True)
class _EnumIndex:
    by_code: dict[Any, Any] = field(default_factory=dict)
    by_name: dict[str, str] = field(default_factory=dict)
    by_ordinal: dict[int, str] = field(default_factory=dict)


@lru_cache(maxsize=256)
def _index(enum_type: type[Enum]) -> _EnumIndex:
    index = _EnumIndex()
    for ordinal, member in enumerate(enum_type):
        if isinstance(member, CodeEnum):
            try:
                index.by_code.setdefault(member.code, member.desc)
            except TypeError:
                pass
            continue
        # Members without an explicit code match by name or ordinal.
        index.by_name.setdefault(member.name, member.name)
        index.by_ordinal.setdefault(ordinal, member.name)
    return index


def _lookup(index: _EnumIndex, raw: Any) -> Any | None:
    if raw in index.by_code:
        return index.by_code[raw]
    if isinstance(raw, str):
        return index.by_name.get(raw)
    if isinstance(raw, Integral) and not isinstance(raw, bool):
        return index.by_ordinal.get(int(raw))
    return None


class EnumResolver(Resolver):
    """Resolve raw values against ``descriptor.enum_type``.

    Explicit codes (members implementing CodeEnum) win; otherwise a string
    matches a member name and an integer matches a member ordinal, both
    yielding the member name.
    """

    strategy = TranslateStrategy.ENUM

    def batch_resolve(
        self,
        raw_values: Collection[Any],
        descriptor: TranslateField,
        context: TranslationContext,
    ) -> dict[Any, Any]:
        enum_type = descriptor.enum_type
        if not isinstance(enum_type, type) or not issubclass(enum_type, Enum):
            return {}

        codes = unique_present(raw_values)
        if not codes:
            return {}

        index = self._guarded("enum indexing", lambda: _index(enum_type), None)
        if index is None:
            return {}

        result: dict[Any, Any] = {}
        for raw in codes:
            translated = _lookup(index, raw)
            if translated is not None:
                result[raw] = translated
        return result
