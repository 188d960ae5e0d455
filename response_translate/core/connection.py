"""Connection configuration and pooling for table lookups.

ConnectionConfig is a Pydantic model for type-safe connection config.
ConnectionManager keeps a bounded pool of adapter connections shared by all
request threads.
"""

from __future__ import annotations

import importlib
import logging
import queue
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from pydantic import BaseModel, Field

from response_translate.core.exceptions import AdapterError

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Configuration for the database backing table lookups.

    ``extra`` holds driver-specific keyword arguments for the adapter's
    ``connect`` call.
    """

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    pool_size: int = Field(default=5, gt=0)
    pool_timeout: float = Field(default=30.0, gt=0)
    extra: dict[str, Any] = {}


# Adapter module mapping: driver name -> (module_path, class_name)
_ADAPTER_MAP: dict[str, tuple[str, str]] = {
    "sqlite": ("response_translate.adapters.sqlite", "SqliteSyncAdapter"),
    "postgresql": ("response_translate.adapters.postgresql", "PostgresqlSyncAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Instantiate the adapter registered for *driver*."""
    key = driver.lower()
    if key not in _ADAPTER_MAP:
        raise AdapterError(f"Unsupported database driver: {driver}")

    module_path, cls_name = _ADAPTER_MAP[key]
    try:
        return getattr(importlib.import_module(module_path), cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


class ConnectionManager:
    """Bounded, blocking connection pool over a SyncAdapter.

    Connections are opened on demand up to ``pool_size`` and reused
    last-in-first-out. With ``pool_size=1`` every lookup runs on the same
    connection, which is what a SQLite ``:memory:`` database needs.

    Raises:
        AdapterError: On construction for an unknown driver, and from
            ``get_connection`` when no connection frees up within
            ``pool_timeout`` seconds.
    """

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config
        self._adapter = _load_adapter(config.driver)
        self._idle: queue.LifoQueue[Any] = queue.LifoQueue()
        self._opened = 0
        self._lock = threading.Lock()

    @property
    def adapter(self) -> Any:
        return self._adapter

    @property
    def open_connections(self) -> int:
        """Connections currently open, idle or checked out."""
        with self._lock:
            return self._opened

    def _reserve_slot(self) -> bool:
        with self._lock:
            if self._opened >= self.config.pool_size:
                return False
            self._opened += 1
            return True

    def _acquire(self) -> Any:
        try:
            return self._idle.get_nowait()
        except queue.Empty:
            pass

        if self._reserve_slot():
            try:
                return self._adapter.connect(self.config)
            except Exception:
                with self._lock:
                    self._opened -= 1
                raise

        try:
            return self._idle.get(timeout=self.config.pool_timeout)
        except queue.Empty:
            raise AdapterError(
                f"No connection available within {self.config.pool_timeout}s "
                f"(pool_size={self.config.pool_size})"
            ) from None

    @contextmanager
    def get_connection(self) -> Iterator[Any]:
        """Check a connection out of the pool for the duration of the block.

        If the block raises, the connection goes back to the pool only when
        the adapter reports it still usable; otherwise it is closed and its
        slot freed for a fresh connection.
        """
        connection = self._acquire()
        try:
            yield connection
        except BaseException:
            if self._adapter.is_alive(connection):
                self._idle.put(connection)
            else:
                self._discard(connection)
            raise
        self._idle.put(connection)

    def _discard(self, connection: Any) -> None:
        with self._lock:
            self._opened -= 1
        try:
            self._adapter.close(connection)
        except Exception:
            logger.debug("Closing a broken connection failed", exc_info=True)
        logger.warning("Discarded a broken %s connection", self.config.driver)

    def close_pool(self) -> None:
        """Close every idle connection. Checked-out connections return to a fresh pool."""
        while True:
            try:
                connection = self._idle.get_nowait()
            except queue.Empty:
                return
            with self._lock:
                self._opened -= 1
            self._adapter.close(connection)
