"""Voting domain models - the vote ledger and aggregation results."""

from app.models.voting.entities import (
    CandidateSummary,
    ElectionSummary,
    PollingStationSummary,
    UnitSummary,
    VoteFilter,
    VoteQueryResult,
    VoteStatistics,
)
from app.models.voting.vote import VOTE_DDL, VOTE_INDEXES, VOTE_SEQUENCE, Vote, ballot_key

__all__ = [
    "VOTE_SEQUENCE",
    "VOTE_DDL",
    "VOTE_INDEXES",
    "Vote",
    "ballot_key",
    "VoteFilter",
    "VoteQueryResult",
    "VoteStatistics",
    "UnitSummary",
    "PollingStationSummary",
    "ElectionSummary",
    "CandidateSummary",
]
