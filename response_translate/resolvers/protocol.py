"""Collaborator protocols.

Resolvers delegate I/O to these. Implementations return hits only: a missing
key means "no display value", never an error. Each implementation owns its
own timeout and retry policy.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DictionaryCache(Protocol):
    """Key-value dictionary store (local memory, Redis, ...)."""

    def get_batch(self, namespace: str, codes: Collection[Any]) -> Mapping[Any, Any]:
        """Return ``{code: display}`` for the codes found under *namespace*."""
        ...


@runtime_checkable
class TableStore(Protocol):
    """Relational lookup of display values by key column."""

    def query(
        self,
        table: str,
        key_column: str,
        value_column: str,
        codes: Sequence[Any],
    ) -> Mapping[Any, Any]:
        """Return ``{key: value}`` rows whose key is in *codes*."""
        ...


@runtime_checkable
class RemoteClient(Protocol):
    """Batch lookup against an external service."""

    def batch_fetch(
        self,
        service: str,
        method: str,
        codes: Collection[Any],
        param: str,
    ) -> Mapping[Any, Any]:
        """Return ``{code: display}`` for the codes the service could resolve."""
        ...
