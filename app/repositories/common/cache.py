"""Cache repository - scoped result cache storage."""

import json
import threading
from datetime import datetime, timedelta
from typing import Any

import duckdb
from loguru import logger

from app.repositories.base import BaseRepository
from settings import CACHE_TTL_SECONDS

# Serializes cache writes against invalidation within the process
_lock = threading.Lock()
_epoch = 0


class CacheRepository(BaseRepository):
    """Repository for result cache operations."""

    def epoch(self) -> int:
        """Invalidation counter; take it before computing a value to cache."""
        return _epoch

    def get(self, key: str) -> Any | None:
        """Load a live cached value."""
        row = self.fetchone(
            "SELECT data FROM result_cache WHERE key = ? AND expires_at > ?",
            [key, datetime.now()],
        )
        if row:
            logger.debug("Cache hit: {}", key)
            return json.loads(row[0])
        return None

    def set(
        self,
        key: str,
        data: Any,
        scopes: set[str],
        ttl: int = CACHE_TTL_SECONDS,
        since: int | None = None,
    ) -> bool:
        """Save a value tagged with its invalidation scopes.

        With ``since``, the write is dropped if any invalidation happened after
        that epoch, since the value may predate the mutation. A write that
        conflicts with a concurrent transaction is also dropped. Returns whether
        the value was stored.
        """
        if self._read_only:
            raise RuntimeError("Cannot write cache in read-only mode")

        json_data = json.dumps(data, default=str)
        now = datetime.now()
        with _lock:
            if since is not None and since != _epoch:
                logger.debug("Cache write dropped (stale): {}", key)
                return False
            try:
                self.execute(
                    """
                    INSERT OR REPLACE INTO result_cache (key, data, scopes, computed_at, expires_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    [key, json_data, sorted(scopes), now, now + timedelta(seconds=ttl)],
                )
            except duckdb.TransactionException as e:
                logger.warning("Cache write skipped (conflict): {}: {}", key, e)
                return False
        logger.debug("Cache saved: {} scopes={}", key, sorted(scopes))
        return True

    def invalidate(self, *scopes: str) -> int:
        """Drop every entry tagged with any of the scopes."""
        global _epoch
        if self._read_only:
            raise RuntimeError("Cannot clear cache in read-only mode")
        if not scopes:
            return 0

        with _lock:
            _epoch += 1
            row = self.fetchone(
                "DELETE FROM result_cache WHERE list_has_any(scopes, ?::VARCHAR[])",
                [sorted(set(scopes))],
            )
        removed = row[0] if row else 0
        logger.info("Cache invalidated: scopes={} removed={}", sorted(set(scopes)), removed)
        return removed

    def clear(self) -> None:
        """Clear the whole cache."""
        global _epoch
        if self._read_only:
            raise RuntimeError("Cannot clear cache in read-only mode")

        with _lock:
            _epoch += 1
            self.execute("DELETE FROM result_cache")
        logger.info("All cache cleared")

    def exists(self, key: str) -> bool:
        """Check if a live entry exists for key."""
        row = self.fetchone(
            "SELECT COUNT(*) FROM result_cache WHERE key = ? AND expires_at > ?",
            [key, datetime.now()],
        )
        return row[0] > 0
