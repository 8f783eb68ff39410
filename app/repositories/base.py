"""Base repository class."""

import threading
from collections.abc import Callable
from typing import Any

import duckdb
from loguru import logger

from app.errors import StorageTimeout, StorageUnavailable
from app.repositories.db import get_db
from settings import STORAGE_TIMEOUT


class BaseRepository:
    """Base repository with common functionality."""

    def __init__(self, read_only: bool = True, timeout: float = STORAGE_TIMEOUT):
        self._read_only = read_only
        self._timeout = timeout
        logger.debug("{} initialized", self.__class__.__name__)

    @property
    def _db(self) -> duckdb.DuckDBPyConnection:
        return get_db()

    def _require_writable(self) -> None:
        if self._read_only:
            raise RuntimeError(f"{self.__class__.__name__} is read-only")

    def _bounded(self, fn: Callable[[duckdb.DuckDBPyConnection], Any]) -> Any:
        """Run fn on this thread's cursor, interrupting it after the timeout."""
        conn = self._db
        timer = None
        if self._timeout and self._timeout > 0:
            timer = threading.Timer(self._timeout, conn.interrupt)
            timer.daemon = True
            timer.start()
        try:
            return fn(conn)
        except duckdb.InterruptException as e:
            logger.warning("Storage call interrupted after {}s", self._timeout)
            raise StorageTimeout(f"Storage call exceeded {self._timeout}s") from e
        except (duckdb.IOException, duckdb.ConnectionException, duckdb.InternalException) as e:
            logger.error("Storage unavailable: {}", e)
            raise StorageUnavailable(f"Storage unavailable: {e}") from e
        finally:
            if timer is not None:
                timer.cancel()

    def execute(self, query: str, params: list | None = None) -> None:
        """Execute SQL statement."""
        if params:
            self._bounded(lambda c: c.execute(query, params))
        else:
            self._bounded(lambda c: c.execute(query))

    def fetchall(self, query: str, params: list | None = None) -> list:
        """Execute and fetch all rows."""
        if params:
            return self._bounded(lambda c: c.execute(query, params).fetchall())
        return self._bounded(lambda c: c.execute(query).fetchall())

    def fetchone(self, query: str, params: list | None = None) -> Any:
        """Execute and fetch one row."""
        if params:
            return self._bounded(lambda c: c.execute(query, params).fetchone())
        return self._bounded(lambda c: c.execute(query).fetchone())

    def scalar(self, query: str, params: list | None = None) -> Any:
        """Execute and return the first column of the first row."""
        row = self.fetchone(query, params)
        return row[0] if row else None
