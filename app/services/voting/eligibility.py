"""Eligibility checker - may this vote be admitted?"""

from dataclasses import dataclass
from enum import Enum

from loguru import logger

from app.errors import CandidateNotInElection, DuplicateVote, ElectionNotActive, ReferenceNotFound
from app.repositories.elections import CandidateRepository, ElectionRepository
from app.repositories.geo import PollingStationRepository
from app.repositories.registry import VoterRepository
from app.repositories.voting import VoteRepository


class Reason(Enum):
    """Why a prospective vote is refused."""

    VOTER_NOT_FOUND = "voter"
    CANDIDATE_NOT_FOUND = "candidate"
    ELECTION_NOT_FOUND = "election"
    POLLING_STATION_NOT_FOUND = "polling_station"
    CANDIDATE_NOT_IN_ELECTION = "candidate_not_in_election"
    ELECTION_NOT_ACTIVE = "election_not_active"
    DUPLICATE_VOTE = "duplicate_vote"

    @property
    def is_missing_reference(self) -> bool:
        return self.name.endswith("_NOT_FOUND")


@dataclass(frozen=True)
class Eligibility:
    """Outcome of a check: ok, or the first failing reason."""

    voter_id: int
    candidate_id: int
    election_id: int
    polling_station_id: int
    reason: Reason | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    def raise_for_reason(self) -> None:
        """Raise the typed error matching the reason (no-op when ok)."""
        if self.reason is None:
            return
        if self.reason.is_missing_reference:
            ids = {
                Reason.VOTER_NOT_FOUND: self.voter_id,
                Reason.CANDIDATE_NOT_FOUND: self.candidate_id,
                Reason.ELECTION_NOT_FOUND: self.election_id,
                Reason.POLLING_STATION_NOT_FOUND: self.polling_station_id,
            }
            raise ReferenceNotFound(self.reason.value, ids[self.reason])
        if self.reason is Reason.CANDIDATE_NOT_IN_ELECTION:
            raise CandidateNotInElection(self.candidate_id, self.election_id)
        if self.reason is Reason.ELECTION_NOT_ACTIVE:
            raise ElectionNotActive(self.election_id)
        raise DuplicateVote(self.voter_id, self.election_id)


class EligibilityChecker:
    """Read-only rule evaluation; first failing rule wins."""

    def __init__(
        self,
        voter_repo: VoterRepository,
        candidate_repo: CandidateRepository,
        election_repo: ElectionRepository,
        station_repo: PollingStationRepository,
        vote_repo: VoteRepository,
    ):
        self._voters = voter_repo
        self._candidates = candidate_repo
        self._elections = election_repo
        self._stations = station_repo
        self._votes = vote_repo

    def check(self, voter_id: int, candidate_id: int, election_id: int, polling_station_id: int) -> Eligibility:
        """Evaluate the admission rules in order."""
        reason = self._first_failure(voter_id, candidate_id, election_id, polling_station_id)
        if reason is not None:
            logger.debug(
                "Ineligible vote voter={} candidate={} election={}: {}",
                voter_id,
                candidate_id,
                election_id,
                reason.name,
            )
        return Eligibility(voter_id, candidate_id, election_id, polling_station_id, reason)

    def _first_failure(self, voter_id, candidate_id, election_id, polling_station_id) -> Reason | None:
        if not self._voters.exists(voter_id):
            return Reason.VOTER_NOT_FOUND
        if not self._candidates.exists(candidate_id):
            return Reason.CANDIDATE_NOT_FOUND
        election = self._elections.get(election_id)
        if election is None:
            return Reason.ELECTION_NOT_FOUND
        if not self._stations.exists(polling_station_id):
            return Reason.POLLING_STATION_NOT_FOUND
        if not self._elections.has_candidate(election_id, candidate_id):
            return Reason.CANDIDATE_NOT_IN_ELECTION
        if not election.is_active:
            return Reason.ELECTION_NOT_ACTIVE
        if self._votes.has_valid_vote(voter_id, election_id):
            return Reason.DUPLICATE_VOTE
        return None
