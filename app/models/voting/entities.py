"""Voting domain entities - computed aggregation results."""

from dataclasses import dataclass, field
from datetime import datetime

from app.models.common import BaseEntity
from app.models.voting.vote import Vote


@dataclass(frozen=True)
class VoteFilter:
    """Conjunction of optional vote predicates; None matches everything."""

    voter_id: int | None = None
    candidate_id: int | None = None
    election_id: int | None = None
    polling_station_id: int | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    is_valid: bool | None = None

    def cache_key(self) -> str:
        parts = [
            f"{name}={value.isoformat() if isinstance(value, datetime) else value}"
            for name, value in sorted(vars(self).items())
            if value is not None
        ]
        return "votes:" + ("&".join(parts) or "all")


@dataclass
class VoteQueryResult(BaseEntity):
    """Matching votes and their count."""

    count: int
    votes: list[Vote] = field(default_factory=list)


@dataclass
class VoteStatistics(BaseEntity):
    """Candidate share of an election's valid votes."""

    candidate_id: int
    candidate_first_name: str
    candidate_last_name: str
    candidate_party: str | None
    election_id: int
    election_name: str
    vote_count: int
    vote_percentage: float


@dataclass
class UnitSummary(BaseEntity):
    """Region or district with derived turnout."""

    id: int
    name: str
    voter_count: int
    vote_count: int
    participation_rate: float


@dataclass
class PollingStationSummary(BaseEntity):
    """Polling station with derived utilization."""

    id: int
    name: str
    capacity: int | None
    vote_count: int
    utilization_rate: float
    district_ids: list[int] = field(default_factory=list)


@dataclass
class ElectionSummary(BaseEntity):
    """Election with derived totals."""

    id: int
    name: str
    is_active: bool
    total_votes: int
    participation_rate: float
    candidate_ids: list[int] = field(default_factory=list)


@dataclass
class CandidateSummary(BaseEntity):
    """Candidate with derived vote count and election roster."""

    id: int
    name: str
    party: str | None
    vote_count: int
    election_ids: list[int] = field(default_factory=list)
