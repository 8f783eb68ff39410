"""Statistics API response schemas."""

from pydantic import BaseModel


class CandidateStatisticsItem(BaseModel):
    """Candidate result in one election."""

    candidate_id: int
    first_name: str
    last_name: str
    party: str | None
    vote_count: int
    vote_percentage: float


class VoteStatisticsResponse(BaseModel):
    """Per-candidate results, most votes first."""

    election_id: int
    election_name: str | None
    total_votes: int
    items: list[CandidateStatisticsItem]


class VoteCountsResponse(BaseModel):
    """Vote counts keyed by unit or candidate name."""

    election_id: int | None
    counts: dict[str, int]
    total: int


class RateResponse(BaseModel):
    """A single ratio for one entity."""

    entity: str
    entity_id: int
    rate: float


class UnitSummaryItem(BaseModel):
    """Region or district turnout."""

    id: int
    name: str
    voter_count: int
    vote_count: int
    participation_rate: float


class UnitSummariesResponse(BaseModel):
    """Turnout of every region or district."""

    unit: str
    items: list[UnitSummaryItem]


class PollingStationSummaryItem(BaseModel):
    """Polling station utilization."""

    id: int
    name: str
    capacity: int | None
    vote_count: int
    utilization_rate: float
    district_ids: list[int]


class PollingStationSummariesResponse(BaseModel):
    """Utilization of every polling station."""

    items: list[PollingStationSummaryItem]


class ElectionSummaryItem(BaseModel):
    """Election totals."""

    id: int
    name: str
    is_active: bool
    total_votes: int
    participation_rate: float
    candidate_ids: list[int]


class ElectionSummariesResponse(BaseModel):
    """Totals of every election."""

    items: list[ElectionSummaryItem]
