"""Votes API views - thin layer over services."""

from datetime import datetime

from app.container import container
from app.models.voting import Vote, VoteFilter
from web.api.errors import validate_id

from .schemas import CastVoteRequest, VoteListResponse, VoteResponse


def _to_response(vote: Vote) -> VoteResponse:
    return VoteResponse(**vote.to_dict())


def cast_vote(request: CastVoteRequest) -> VoteResponse:
    """Cast a vote; domain errors propagate to the caller's error handler."""
    vote = container.admission.cast_vote(
        voter_id=request.voter_id,
        candidate_id=request.candidate_id,
        election_id=request.election_id,
        polling_station_id=request.polling_station_id,
    )
    return _to_response(vote)


def update_vote_validity(vote_id: int, is_valid: bool) -> VoteResponse:
    """Mark a vote valid or invalid."""
    validate_id(vote_id, "vote_id")
    return _to_response(container.admission.update_vote_validity(vote_id, is_valid))


def get_vote(vote_id: int) -> VoteResponse:
    """Get one vote."""
    validate_id(vote_id, "vote_id")
    return _to_response(container.registry.get_vote(vote_id))


def list_votes(
    voter_id: int | None = None,
    candidate_id: int | None = None,
    election_id: int | None = None,
    polling_station_id: int | None = None,
    start_time: datetime | None = None,
    end_time: datetime | None = None,
    is_valid: bool | None = None,
) -> VoteListResponse:
    """List votes matching every given filter."""
    flt = VoteFilter(
        voter_id=voter_id,
        candidate_id=candidate_id,
        election_id=election_id,
        polling_station_id=polling_station_id,
        start_time=start_time,
        end_time=end_time,
        is_valid=is_valid,
    )
    result = container.aggregation.count_votes(flt)
    return VoteListResponse(count=result.count, items=[_to_response(v) for v in result.votes])
