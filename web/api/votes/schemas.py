"""Votes API request and response schemas."""

from datetime import datetime

from pydantic import BaseModel


class CastVoteRequest(BaseModel):
    """Ballot submitted by a voter."""

    voter_id: int
    candidate_id: int
    election_id: int
    polling_station_id: int


class VoteResponse(BaseModel):
    """A ledger entry."""

    id: int
    voter_id: int
    candidate_id: int
    election_id: int
    polling_station_id: int
    timestamp: datetime
    is_valid: bool


class VoteListResponse(BaseModel):
    """Votes matching a filter."""

    count: int
    items: list[VoteResponse]
