"""DuckDB connection management."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import DB_PATH

_local = threading.local()
_lock = threading.Lock()
_root: duckdb.DuckDBPyConnection | None = None
_generation = 0


def db_exists(path: str = DB_PATH) -> bool:
    """Check if database file exists."""
    return path == ":memory:" or Path(path).exists()


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.info("DB tables initialized")


def open_db(path: str = DB_PATH) -> duckdb.DuckDBPyConnection:
    """Open the process-wide root connection, replacing any previous one."""
    global _root, _generation
    with _lock:
        if _root is not None:
            _root.close()
        if not db_exists(path):
            logger.warning("DB not found: {}. Creating empty DB.", path)
        _root = duckdb.connect(path)
        init_tables(_root)
        _generation += 1
        logger.debug("DB opened: {}", path)
        return _root


def shutdown_db() -> None:
    """Close the root connection and invalidate every thread's cursor."""
    global _root, _generation
    with _lock:
        if _root is not None:
            _root.close()
            _root = None
            _generation += 1
            logger.debug("DB shut down")


def get_db() -> duckdb.DuckDBPyConnection:
    """Get thread-local cursor on the shared database."""
    conn = getattr(_local, "conn", None)
    if conn is None or getattr(_local, "generation", None) != _generation:
        root = _root if _root is not None else open_db()
        _local.conn = root.cursor()
        _local.generation = _generation
        _local.tx_depth = 0
        logger.debug("DB cursor created for {}", threading.current_thread().name)
    return _local.conn


def close_db() -> None:
    """Close thread-local cursor."""
    if getattr(_local, "conn", None) is not None:
        _local.conn.close()
        _local.conn = None
        logger.debug("DB cursor closed")


def reconnect_db() -> duckdb.DuckDBPyConnection:
    """Force a fresh cursor for this thread."""
    close_db()
    return get_db()


def _rollback(conn: duckdb.DuckDBPyConnection) -> None:
    try:
        conn.execute("ROLLBACK")
    except duckdb.TransactionException:
        # DuckDB already aborted the transaction (failed commit)
        logger.debug("No active transaction to roll back")


@contextmanager
def transaction() -> Iterator[duckdb.DuckDBPyConnection]:
    """Run the block in one transaction on this thread's cursor.

    Nested blocks join the outer transaction. Any exception rolls back.
    """
    conn = get_db()
    if _local.tx_depth:
        _local.tx_depth += 1
        try:
            yield conn
        finally:
            _local.tx_depth -= 1
        return

    conn.execute("BEGIN TRANSACTION")
    _local.tx_depth = 1
    try:
        yield conn
    except BaseException:
        _rollback(conn)
        raise
    else:
        try:
            conn.execute("COMMIT")
        except duckdb.Error:
            _rollback(conn)
            raise
    finally:
        _local.tx_depth = 0
