"""Translation settings.

TranslationSettings is a Pydantic model so values loaded from the
environment are validated before they reach the engine or the resolvers.
"""

from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel, Field

from response_translate.core.context import TranslationContext

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _env_flag(value: str) -> bool:
    """Parse a boolean-ish environment value (case-insensitive)."""
    return value.strip().lower() in _TRUTHY


class CacheType(str, Enum):
    """Eviction policy of the in-memory dictionary cache."""

    TTL = "ttl"
    LRU = "lru"


class CacheSettings(BaseModel):
    """Configuration for MemoryDictionaryCache."""

    maxsize: int = Field(default=1024, gt=0)
    ttl: int = Field(default=3600, gt=0)
    cache_type: CacheType = CacheType.TTL


class TranslationSettings(BaseModel):
    """Process-wide translation configuration."""

    enabled: bool = True
    table_chunk_size: int = Field(default=500, gt=0)
    cache: CacheSettings = Field(default_factory=CacheSettings)

    @classmethod
    def from_env(cls, prefix: str = "RESPONSE_TRANSLATE_") -> TranslationSettings:
        """Build settings from ``{prefix}*`` environment variables.

        Recognized variables: ``ENABLED``, ``TABLE_CHUNK_SIZE``,
        ``CACHE_MAXSIZE``, ``CACHE_TTL``, ``CACHE_TYPE``. Unset variables keep
        their defaults.
        """
        values: dict[str, object] = {}
        cache: dict[str, object] = {}

        enabled = os.getenv(f"{prefix}ENABLED")
        if enabled is not None:
            values["enabled"] = _env_flag(enabled)
        chunk_size = os.getenv(f"{prefix}TABLE_CHUNK_SIZE")
        if chunk_size is not None:
            values["table_chunk_size"] = chunk_size

        for name in ("maxsize", "ttl", "cache_type"):
            key = name if name == "cache_type" else f"cache_{name}"
            raw = os.getenv(f"{prefix}{key.upper()}")
            if raw is not None:
                cache[name] = raw.strip().lower() if name == "cache_type" else raw
        if cache:
            values["cache"] = cache

        return cls.model_validate(values)

    def apply(self) -> None:
        """Publish ``enabled`` as the process-wide translation switch."""
        TranslationContext.set_global_enabled(self.enabled)
