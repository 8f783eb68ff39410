"""Tests for API views and error mapping."""

import pytest

from app.errors import (
    CandidateNotInElection,
    ConcurrentConflict,
    DuplicateVote,
    ElectionNotActive,
    ReferenceNotFound,
    StorageTimeout,
    StorageUnavailable,
    ValidationError,
)
from web.api.errors import error_body, http_status, validate_id
from web.api.statistics import (
    get_district_summaries,
    get_election_summaries,
    get_participation_rate,
    get_polling_station_summaries,
    get_region_summaries,
    get_utilization_rate,
    get_vote_counts_by_candidate,
    get_vote_counts_by_district,
    get_vote_counts_by_region,
    get_vote_statistics,
)
from web.api.votes import cast_vote, get_vote, list_votes, update_vote_validity
from web.api.votes.schemas import CastVoteRequest


def ballot(world, voter, candidate):
    return CastVoteRequest(
        voter_id=voter.id,
        candidate_id=candidate.id,
        election_id=world.election.id,
        polling_station_id=world.station.id,
    )


class TestHttpStatus:
    @pytest.mark.parametrize(
        "exc, status",
        [
            (ReferenceNotFound("voter", 1), 404),
            (DuplicateVote(1, 2), 409),
            (ConcurrentConflict("race"), 409),
            (CandidateNotInElection(1, 2), 400),
            (ElectionNotActive(2), 400),
            (ValidationError("bad"), 400),
            (StorageTimeout("slow"), 504),
            (StorageUnavailable("down"), 503),
            (RuntimeError("bug"), 500),
        ],
    )
    def test_mapping(self, exc, status):
        assert http_status(exc) == status

    def test_error_body(self):
        body = error_body(DuplicateVote(3, 4))
        assert body == {
            "status": 409,
            "error": "DuplicateVote",
            "message": "Voter 3 has already cast a vote in election 4",
        }

    def test_internal_message_hidden(self):
        assert error_body(RuntimeError("secret"))["message"] == "Internal server error"

    def test_validate_id(self):
        validate_id(1, "vote_id")
        with pytest.raises(ValidationError):
            validate_id(0, "vote_id")
        with pytest.raises(ValidationError):
            validate_id(True, "vote_id")


class TestVoteViews:
    def test_cast_and_get(self, world):
        response = cast_vote(ballot(world, world.voters[0], world.c1))
        assert response.is_valid
        assert get_vote(response.id) == response

    def test_cast_duplicate(self, world):
        cast_vote(ballot(world, world.voters[0], world.c1))
        with pytest.raises(DuplicateVote) as exc:
            cast_vote(ballot(world, world.voters[0], world.c2))
        assert http_status(exc.value) == 409

    def test_update_validity(self, world):
        response = cast_vote(ballot(world, world.voters[0], world.c1))
        assert update_vote_validity(response.id, False).is_valid is False

    def test_list_votes(self, world):
        cast_vote(ballot(world, world.voters[0], world.c1))
        cast_vote(ballot(world, world.voters[1], world.c2))
        assert list_votes().count == 2
        listed = list_votes(candidate_id=world.c2.id)
        assert listed.count == 1
        assert listed.items[0].voter_id == world.voters[1].id

    def test_get_missing(self, world):
        with pytest.raises(ReferenceNotFound):
            get_vote(9999)


class TestStatisticsViews:
    def test_vote_statistics(self, world):
        for voter in world.voters[:3]:
            cast_vote(ballot(world, voter, world.c1))
        for voter in world.voters[3:8]:
            cast_vote(ballot(world, voter, world.c2))
        response = get_vote_statistics(world.election.id)
        assert response.election_name == "General"
        assert response.total_votes == 8
        assert [(i.last_name, i.vote_percentage) for i in response.items] == [("Kowalski", 62.5), ("Nowak", 37.5)]

    def test_counts(self, world):
        cast_vote(ballot(world, world.voters[0], world.c1))
        assert get_vote_counts_by_region().counts == {"North": 1}
        assert get_vote_counts_by_district(world.election.id).total == 1
        assert get_vote_counts_by_candidate(world.election.id).counts == {"Anna Nowak": 1}

    def test_rates(self, world):
        cast_vote(ballot(world, world.voters[0], world.c1))
        assert get_participation_rate(district_id=world.district.id).rate == 0.1
        assert get_participation_rate(election_id=world.election.id).entity == "election"
        assert get_utilization_rate(world.station.id).rate == 0.01

    def test_summaries(self, world):
        assert get_region_summaries().items[0].voter_count == 10
        assert get_district_summaries().unit == "district"
        assert get_polling_station_summaries().items[0].capacity == 100
        assert get_election_summaries(active_only=True).items[0].candidate_ids == [world.c1.id, world.c2.id]
