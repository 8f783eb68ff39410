"""Vote admission - validate and write a vote as one unit."""

import threading
from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from datetime import datetime

import duckdb
from loguru import logger

from app.errors import ConcurrentConflict, DuplicateVote, ReferenceNotFound, StorageError
from app.models.voting import Vote
from app.repositories.common import CacheRepository
from app.repositories.db import transaction
from app.repositories.registry import VoterRepository
from app.repositories.voting import VoteRepository
from app.services.common import scopes
from app.services.voting.eligibility import EligibilityChecker
from settings import VOTE_LOCK_TIMEOUT


class KeyedLocks:
    """One lock per key, created on demand and dropped when unused."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[Hashable, list] = {}

    @contextmanager
    def hold(self, key: Hashable, timeout: float) -> Iterator[None]:
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        acquired = entry[0].acquire(timeout=timeout)
        try:
            if not acquired:
                raise ConcurrentConflict(f"Timed out after {timeout}s waiting for ballot {key}")
            yield
        finally:
            if acquired:
                entry[0].release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


class VoteAdmissionService:
    """Owns the one-valid-vote-per-election invariant.

    The duplicate check and the insert run under a per-(voter, election) lock
    and inside one transaction; the ledger's unique ballot key backs this up.
    Cache scopes are invalidated only after a successful commit.
    """

    def __init__(
        self,
        checker: EligibilityChecker,
        vote_repo: VoteRepository,
        voter_repo: VoterRepository,
        cache_repo: CacheRepository,
        lock_timeout: float = VOTE_LOCK_TIMEOUT,
    ):
        self._checker = checker
        self._votes = vote_repo
        self._voters = voter_repo
        self._cache = cache_repo
        self._lock_timeout = lock_timeout
        self._locks = KeyedLocks()
        logger.debug("VoteAdmissionService initialized")

    @contextmanager
    def _ballot(self, voter_id: int, election_id: int) -> Iterator[None]:
        """Serialize and transact all ledger writes for one ballot."""
        with self._locks.hold((voter_id, election_id), self._lock_timeout):
            try:
                with transaction():
                    yield
            except duckdb.ConstraintException as e:
                logger.warning("Ballot key conflict voter={} election={}", voter_id, election_id)
                raise DuplicateVote(voter_id, election_id) from e
            except duckdb.TransactionException as e:
                logger.warning("Write conflict voter={} election={}: {}", voter_id, election_id, e)
                raise ConcurrentConflict(f"Conflicting write for voter {voter_id} in election {election_id}") from e

    def cast_vote(self, voter_id: int, candidate_id: int, election_id: int, polling_station_id: int) -> Vote:
        """Admit a vote or raise the first failing rule as a typed error."""
        with self._ballot(voter_id, election_id):
            self._checker.check(voter_id, candidate_id, election_id, polling_station_id).raise_for_reason()
            vote = self._votes.insert(
                voter_id=voter_id,
                candidate_id=candidate_id,
                election_id=election_id,
                polling_station_id=polling_station_id,
                timestamp=datetime.now(),
            )

        self._invalidate(vote)
        logger.info(
            "Vote {} cast: voter={} candidate={} election={} station={}",
            vote.id,
            voter_id,
            candidate_id,
            election_id,
            polling_station_id,
        )
        return vote

    def update_vote_validity(self, vote_id: int, is_valid: bool) -> Vote:
        """Administrative correction of the validity flag only."""
        existing = self._votes.get(vote_id)
        if existing is None:
            raise ReferenceNotFound("vote", vote_id)

        with self._ballot(existing.voter_id, existing.election_id):
            current = self._votes.get(vote_id)
            if current is None:
                raise ReferenceNotFound("vote", vote_id)
            if is_valid and not current.is_valid and self._votes.has_valid_vote(current.voter_id, current.election_id):
                raise DuplicateVote(current.voter_id, current.election_id)
            vote = self._votes.set_validity(vote_id, is_valid)

        self._invalidate(vote)
        logger.info("Vote {} validity set to {}", vote_id, is_valid)
        return vote

    def _invalidate(self, vote: Vote) -> None:
        """Drop cached results the vote affects. The vote is already committed,
        so a storage failure here is logged and cached entries expire by TTL."""
        try:
            voter = self._voters.get(vote.voter_id)
            self._cache.invalidate(*scopes.for_vote(vote, voter))
        except StorageError as e:
            logger.error("Cache invalidation failed after vote {} was committed: {}", vote.id, e)
