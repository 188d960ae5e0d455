"""Resolvers - one implementation per translation strategy."""

from __future__ import annotations

from response_translate.resolvers.base import Resolver
from response_translate.resolvers.dictionary import DictionaryResolver
from response_translate.resolvers.enumeration import CodeEnum, EnumResolver
from response_translate.resolvers.protocol import DictionaryCache, RemoteClient, TableStore
from response_translate.resolvers.remote import RemoteResolver
from response_translate.resolvers.table import TableResolver

__all__ = [
    "Resolver",
    "EnumResolver",
    "CodeEnum",
    "DictionaryResolver",
    "TableResolver",
    "RemoteResolver",
    "DictionaryCache",
    "TableStore",
    "RemoteClient",
]
