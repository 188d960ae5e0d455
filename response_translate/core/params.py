"""Lookup query building.

Codes are always bound as parameters, written in the adapter's paramstyle.
Only validated identifiers are interpolated into the SQL text.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from response_translate.core.exceptions import AdapterError
from response_translate.core.sanitizer import TableLookup

_PLACEHOLDERS: dict[str, str] = {
    "named": ":{}",
    "pyformat": "%({})s",
}


def placeholder(name: str, paramstyle: str) -> str:
    """Render the bind marker for parameter *name*.

    Raises:
        AdapterError: If *paramstyle* is not supported.
    """
    try:
        template = _PLACEHOLDERS[paramstyle]
    except KeyError:
        raise AdapterError(f"Unsupported paramstyle: {paramstyle!r}") from None
    return template.format(name)


def build_lookup_query(
    lookup: TableLookup,
    codes: Sequence[Any],
    paramstyle: str = "named",
) -> tuple[str, dict[str, Any]]:
    """Return ``(sql, params)`` selecting key/value pairs for *codes*.

    Example:
        >>> build_lookup_query(TableLookup("org", "id", "name"), [10, 20])
        ('SELECT id, name FROM org WHERE id IN (:p0, :p1)', {'p0': 10, 'p1': 20})
    """
    names = [f"p{i}" for i in range(len(codes))]
    markers = ", ".join(placeholder(name, paramstyle) for name in names)
    sql = (
        f"SELECT {lookup.key_column}, {lookup.value_column} "
        f"FROM {lookup.table} "
        f"WHERE {lookup.key_column} IN ({markers})"
    )
    return sql, dict(zip(names, codes, strict=True))


def chunked(values: Sequence[Any], size: int) -> list[Sequence[Any]]:
    """Split *values* into consecutive slices of at most *size* items."""
    if size <= 0:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [values[i : i + size] for i in range(0, len(values), size)]
