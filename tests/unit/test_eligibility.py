"""Tests for eligibility rules and their order."""

import pytest

from app.container import container
from app.errors import CandidateNotInElection, DuplicateVote, ElectionNotActive, ReferenceNotFound
from app.services.voting import Reason


@pytest.fixture
def checker():
    return container.eligibility


class TestEligibility:
    def test_eligible(self, checker, world):
        result = checker.check(world.voters[0].id, world.c1.id, world.election.id, world.station.id)
        assert result.ok
        assert result.reason is None
        result.raise_for_reason()

    def test_unknown_voter(self, checker, world):
        result = checker.check(9999, world.c1.id, world.election.id, world.station.id)
        assert result.reason is Reason.VOTER_NOT_FOUND
        with pytest.raises(ReferenceNotFound) as exc:
            result.raise_for_reason()
        assert exc.value.entity_kind == "voter"
        assert exc.value.entity_id == 9999

    def test_unknown_candidate(self, checker, world):
        result = checker.check(world.voters[0].id, 9999, world.election.id, world.station.id)
        assert result.reason is Reason.CANDIDATE_NOT_FOUND

    def test_unknown_election(self, checker, world):
        result = checker.check(world.voters[0].id, world.c1.id, 9999, world.station.id)
        assert result.reason is Reason.ELECTION_NOT_FOUND

    def test_unknown_station(self, checker, world):
        result = checker.check(world.voters[0].id, world.c1.id, world.election.id, 9999)
        assert result.reason is Reason.POLLING_STATION_NOT_FOUND
        with pytest.raises(ReferenceNotFound) as exc:
            result.raise_for_reason()
        assert exc.value.entity_kind == "polling_station"

    def test_candidate_not_in_election(self, checker, world):
        result = checker.check(world.voters[0].id, world.outsider.id, world.election.id, world.station.id)
        assert result.reason is Reason.CANDIDATE_NOT_IN_ELECTION
        with pytest.raises(CandidateNotInElection):
            result.raise_for_reason()

    def test_inactive_election(self, checker, world, registry):
        registry.update_election(world.election.id, is_active=False)
        result = checker.check(world.voters[0].id, world.c1.id, world.election.id, world.station.id)
        assert result.reason is Reason.ELECTION_NOT_ACTIVE
        with pytest.raises(ElectionNotActive):
            result.raise_for_reason()

    def test_duplicate(self, checker, world, admission):
        voter = world.voters[0]
        admission.cast_vote(voter.id, world.c1.id, world.election.id, world.station.id)
        result = checker.check(voter.id, world.c2.id, world.election.id, world.station.id)
        assert result.reason is Reason.DUPLICATE_VOTE
        with pytest.raises(DuplicateVote):
            result.raise_for_reason()


class TestRuleOrder:
    def test_missing_references_checked_first(self, checker, world):
        result = checker.check(9999, 9999, 9999, 9999)
        assert result.reason is Reason.VOTER_NOT_FOUND

    def test_candidate_before_election(self, checker, world):
        result = checker.check(world.voters[0].id, 9999, 9999, world.station.id)
        assert result.reason is Reason.CANDIDATE_NOT_FOUND

    def test_roster_before_active(self, checker, world, registry):
        registry.update_election(world.election.id, is_active=False)
        result = checker.check(world.voters[0].id, world.outsider.id, world.election.id, world.station.id)
        assert result.reason is Reason.CANDIDATE_NOT_IN_ELECTION

    def test_active_before_duplicate(self, checker, world, admission, registry):
        voter = world.voters[0]
        admission.cast_vote(voter.id, world.c1.id, world.election.id, world.station.id)
        registry.update_election(world.election.id, is_active=False)
        result = checker.check(voter.id, world.c1.id, world.election.id, world.station.id)
        assert result.reason is Reason.ELECTION_NOT_ACTIVE
