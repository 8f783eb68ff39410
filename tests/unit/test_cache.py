"""Tests for the scoped result cache."""

import duckdb
import pytest

from app.repositories.common import CacheRepository
from app.services.common import scopes


@pytest.fixture
def cache():
    return CacheRepository(read_only=False)


class TestCacheRepository:
    def test_miss(self, cache):
        assert cache.get("nothing") is None
        assert not cache.exists("nothing")

    def test_set_get(self, cache):
        assert cache.set("k", {"a": 1}, {"votes"})
        assert cache.get("k") == {"a": 1}
        assert cache.exists("k")

    def test_expired(self, cache):
        cache.set("k", [1, 2], {"votes"}, ttl=-1)
        assert cache.get("k") is None

    def test_invalidate_by_scope(self, cache):
        cache.set("a", 1, {"votes", "election:1"})
        cache.set("b", 2, {"election:2"})
        assert cache.invalidate("election:1") == 1
        assert cache.get("a") is None
        assert cache.get("b") == 2

    def test_invalidate_nothing(self, cache):
        assert cache.invalidate() == 0

    def test_stale_write_dropped(self, cache):
        since = cache.epoch()
        cache.invalidate("votes")
        assert not cache.set("k", 1, {"votes"}, since=since)
        assert cache.get("k") is None

    def test_conflicting_write_skipped(self, cache, monkeypatch):
        def conflict(query, params=None):
            raise duckdb.TransactionException("Conflict on tuple")

        monkeypatch.setattr(cache, "execute", conflict)
        assert not cache.set("k", 1, {"votes"})
        monkeypatch.undo()
        assert cache.get("k") is None

    def test_clear(self, cache):
        cache.set("a", 1, {"votes"})
        cache.clear()
        assert not cache.exists("a")

    def test_read_only(self):
        cache = CacheRepository()
        with pytest.raises(RuntimeError):
            cache.set("k", 1, {"votes"})
        with pytest.raises(RuntimeError):
            cache.invalidate("votes")


class TestScopes:
    def test_for_entity(self):
        assert scopes.for_entity("election", 7) == {"elections", "election:7"}

    def test_for_vote_includes_units(self, world, admission):
        voter = world.voters[0]
        vote = admission.cast_vote(voter.id, world.c1.id, world.election.id, world.station.id)
        result = scopes.for_vote(vote, voter)
        assert scopes.VOTES in result
        assert f"region:{world.region.id}" in result
        assert f"district:{world.district.id}" in result
        assert f"polling_station:{world.station.id}" in result
