"""RemoteClient that dispatches to registered Python callables.

Wire the REMOTE strategy to any RPC stack by registering one function per
``(service, method)``. Each function receives the deduplicated codes and the
descriptor's ``param`` and returns a (possibly partial) ``{code: display}``
mapping. Timeouts and retries belong inside the function.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Mapping
from typing import Any

logger = logging.getLogger(__name__)

FetchFn = Callable[[Collection[Any], str], Mapping[Any, Any]]


class CallableRemoteClient:
    """Route ``batch_fetch`` calls to registered functions.

    A function registered with ``method=""`` serves every method of its
    service that has no dedicated function.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], FetchFn] = {}

    def register(self, service: str, method: str, fn: FetchFn) -> None:
        self._routes[(service, method or "")] = fn

    def route(self, service: str, method: str = "") -> Callable[[FetchFn], FetchFn]:
        """Decorator form of ``register``."""

        def decorator(fn: FetchFn) -> FetchFn:
            self.register(service, method, fn)
            return fn

        return decorator

    def batch_fetch(
        self,
        service: str,
        method: str,
        codes: Collection[Any],
        param: str,
    ) -> Mapping[Any, Any]:
        fn = self._routes.get((service, method or "")) or self._routes.get((service, ""))
        if fn is None:
            logger.debug("No remote route for %s.%s", service, method)
            return {}
        if not codes:
            return {}
        return fn(codes, param) or {}
