"""Translation strategy enumeration."""

from __future__ import annotations

from enum import Enum


class TranslateStrategy(str, Enum):
    """Supported translation strategies.

    Each member is served by exactly one resolver in a ResolverRegistry.
    """

    ENUM = "enum"
    CACHE = "cache"
    TABLE = "table"
    REMOTE = "remote"

    @classmethod
    def coerce(cls, value: TranslateStrategy | str) -> TranslateStrategy:
        """Return the member for *value*, accepting members, values or names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise ValueError(f"Unknown translation strategy: {value!r}") from None
