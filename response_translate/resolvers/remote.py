"""REMOTE strategy: batch lookup through an injected RemoteClient."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from response_translate.core.context import TranslationContext
from response_translate.core.descriptor import TranslateField
from response_translate.core.enums import TranslateStrategy
from response_translate.resolvers.base import Resolver, restrict, unique_present
from response_translate.resolvers.protocol import RemoteClient


class RemoteResolver(Resolver):
    """Resolve codes by calling ``descriptor.remote_service``.

    The client applies its own timeout and retry policy and may return a
    partial mapping.
    """

    strategy = TranslateStrategy.REMOTE

    def __init__(self, client: RemoteClient | None = None) -> None:
        self._client = client

    def batch_resolve(
        self,
        raw_values: Collection[Any],
        descriptor: TranslateField,
        context: TranslationContext,
    ) -> dict[Any, Any]:
        if self._client is None or not descriptor.remote_service:
            return {}

        codes = unique_present(raw_values)
        if not codes:
            return {}

        client = self._client
        fetched = self._guarded(
            f"remote call {descriptor.remote_service}.{descriptor.remote_method}",
            lambda: client.batch_fetch(
                descriptor.remote_service,
                descriptor.remote_method,
                codes,
                descriptor.param,
            ),
            {},
        )
        return restrict(codes, fetched)
