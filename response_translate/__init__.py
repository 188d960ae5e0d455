"""response_translate - code-to-display enrichment for response payloads."""

from __future__ import annotations

from response_translate.backends.memory import MemoryDictionaryCache
from response_translate.backends.remote import CallableRemoteClient
from response_translate.backends.sql import SqlTableStore
from response_translate.core.config import CacheSettings, CacheType, TranslationSettings
from response_translate.core.connection import ConnectionConfig, ConnectionManager
from response_translate.core.context import TranslationContext
from response_translate.core.descriptor import (
    TRANSLATE_METADATA_KEY,
    TranslateField,
    translate_field,
)
from response_translate.core.engine import TranslationEngine
from response_translate.core.enums import TranslateStrategy
from response_translate.core.exceptions import (
    AdapterError,
    ConfigurationError,
    DuplicateResolverError,
    IdentifierValidationError,
    RegistryError,
    ResponseTranslateError,
)
from response_translate.core.hooks import translate_response, translation_scope
from response_translate.core.page import Page
from response_translate.core.registry import ResolverRegistry, build_default_registry
from response_translate.resolvers import (
    CodeEnum,
    DictionaryCache,
    DictionaryResolver,
    EnumResolver,
    RemoteClient,
    RemoteResolver,
    Resolver,
    TableResolver,
    TableStore,
)

__all__ = [
    # Engine
    "TranslationEngine",
    "Page",
    # Descriptors
    "TranslateField",
    "TranslateStrategy",
    "translate_field",
    "TRANSLATE_METADATA_KEY",
    # Context
    "TranslationContext",
    "translation_scope",
    "translate_response",
    # Registry
    "ResolverRegistry",
    "build_default_registry",
    # Resolvers
    "Resolver",
    "EnumResolver",
    "CodeEnum",
    "DictionaryResolver",
    "TableResolver",
    "RemoteResolver",
    # Collaborators
    "DictionaryCache",
    "TableStore",
    "RemoteClient",
    "MemoryDictionaryCache",
    "SqlTableStore",
    "CallableRemoteClient",
    # Configuration
    "TranslationSettings",
    "CacheSettings",
    "CacheType",
    "ConnectionConfig",
    "ConnectionManager",
    # Exceptions
    "ResponseTranslateError",
    "RegistryError",
    "DuplicateResolverError",
    "ConfigurationError",
    "IdentifierValidationError",
    "AdapterError",
]
