"""Tests for connection and transaction handling."""

import pytest

from app.errors import StorageTimeout
from app.repositories import BaseRepository, RegionRepository, close_db, get_db, reconnect_db, transaction


class TestTransaction:
    def test_commit(self):
        repo = RegionRepository()
        with transaction():
            repo.create(name="A")
        assert repo.find_by(name="A")

    def test_rollback_on_error(self):
        repo = RegionRepository()
        with pytest.raises(ValueError):
            with transaction():
                repo.create(name="A")
                raise ValueError("boom")
        assert repo.list_all() == []

    def test_nested_joins_outer(self):
        repo = RegionRepository()
        with pytest.raises(ValueError):
            with transaction():
                with transaction():
                    repo.create(name="Inner")
                raise ValueError("boom")
        assert repo.list_all() == []


class TestConnections:
    def test_cursor_per_thread_reused(self):
        assert get_db() is get_db()

    def test_reconnect(self):
        before = get_db()
        after = reconnect_db()
        assert after is not before
        assert after is get_db()

    def test_close_then_reopen(self):
        close_db()
        assert get_db() is not None


class TestBoundedCalls:
    def test_interrupted_query_times_out(self):
        repo = BaseRepository(timeout=0.05)
        with pytest.raises(StorageTimeout):
            repo.scalar("SELECT SUM(a.range * b.range) FROM range(100000000) a, range(1000) b")
