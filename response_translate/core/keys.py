"""Cache key conventions.

Namespaces:
    dict:{dict_key}                       -> CACHE strategy entries
    table:{table}:{key_col}:{value_col}   -> TABLE strategy entries

Entry key: ``{namespace}:{code}``, e.g. ``dict:gender:1`` -> "Male",
``table:sys_user:id:name:1001`` -> "Alice".
"""

from __future__ import annotations

from typing import Any

DICT_PREFIX = "dict"
TABLE_PREFIX = "table"


def dict_namespace(dict_key: str) -> str:
    return f"{DICT_PREFIX}:{dict_key}"


def table_namespace(table: str, key_column: str, value_column: str) -> str:
    return f"{TABLE_PREFIX}:{table}:{key_column}:{value_column}"


def entry_key(namespace: str, code: Any) -> str:
    return f"{namespace}:{code}"


def dict_key(dict_key: str, code: Any) -> str:
    """Build the cache key of one dictionary entry."""
    return entry_key(dict_namespace(dict_key), code)
