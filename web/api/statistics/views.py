"""Statistics API views - thin layer over services."""

from app.container import container
from web.api.errors import validate_id

from .schemas import (
    CandidateStatisticsItem,
    ElectionSummariesResponse,
    ElectionSummaryItem,
    PollingStationSummariesResponse,
    PollingStationSummaryItem,
    RateResponse,
    UnitSummariesResponse,
    UnitSummaryItem,
    VoteCountsResponse,
    VoteStatisticsResponse,
)


def get_vote_statistics(election_id: int) -> VoteStatisticsResponse:
    """Get per-candidate results for an election."""
    validate_id(election_id, "election_id")
    data = container.aggregation.vote_statistics(election_id)

    items = [
        CandidateStatisticsItem(
            candidate_id=s.candidate_id,
            first_name=s.candidate_first_name,
            last_name=s.candidate_last_name,
            party=s.candidate_party,
            vote_count=s.vote_count,
            vote_percentage=s.vote_percentage,
        )
        for s in data
    ]

    return VoteStatisticsResponse(
        election_id=election_id,
        election_name=data[0].election_name if data else container.registry.get_election(election_id).name,
        total_votes=sum(s.vote_count for s in data),
        items=items,
    )


def get_vote_counts_by_region(election_id: int | None = None, is_valid: bool | None = None) -> VoteCountsResponse:
    """Get vote counts per region name."""
    counts = container.aggregation.vote_counts_by_region(election_id=election_id, is_valid=is_valid)
    return VoteCountsResponse(election_id=election_id, counts=counts, total=sum(counts.values()))


def get_vote_counts_by_district(election_id: int | None = None, is_valid: bool | None = None) -> VoteCountsResponse:
    """Get vote counts per district name."""
    counts = container.aggregation.vote_counts_by_district(election_id=election_id, is_valid=is_valid)
    return VoteCountsResponse(election_id=election_id, counts=counts, total=sum(counts.values()))


def get_vote_counts_by_candidate(election_id: int, is_valid: bool | None = None) -> VoteCountsResponse:
    """Get vote counts per candidate in one election."""
    validate_id(election_id, "election_id")
    counts = container.aggregation.vote_counts_by_candidate_in_election(election_id, is_valid=is_valid)
    return VoteCountsResponse(election_id=election_id, counts=counts, total=sum(counts.values()))


def get_participation_rate(
    region_id: int | None = None,
    district_id: int | None = None,
    election_id: int | None = None,
) -> RateResponse:
    """Get participation for exactly one region, district or election."""
    rate = container.aggregation.participation_rate(
        region_id=region_id,
        district_id=district_id,
        election_id=election_id,
    )
    entity, entity_id = next(
        (name, value)
        for name, value in (("region", region_id), ("district", district_id), ("election", election_id))
        if value is not None
    )
    return RateResponse(entity=entity, entity_id=entity_id, rate=rate)


def get_utilization_rate(polling_station_id: int) -> RateResponse:
    """Get utilization of a polling station."""
    validate_id(polling_station_id, "polling_station_id")
    rate = container.aggregation.utilization_rate(polling_station_id)
    return RateResponse(entity="polling_station", entity_id=polling_station_id, rate=rate)


def get_region_summaries() -> UnitSummariesResponse:
    """Get turnout of every region."""
    data = container.aggregation.region_summaries()
    return UnitSummariesResponse(unit="region", items=[UnitSummaryItem(**s.to_dict()) for s in data])


def get_district_summaries() -> UnitSummariesResponse:
    """Get turnout of every district."""
    data = container.aggregation.district_summaries()
    return UnitSummariesResponse(unit="district", items=[UnitSummaryItem(**s.to_dict()) for s in data])


def get_polling_station_summaries(active_only: bool = False) -> PollingStationSummariesResponse:
    """Get utilization of every polling station."""
    data = container.aggregation.polling_station_summaries(active_only=active_only)
    return PollingStationSummariesResponse(items=[PollingStationSummaryItem(**s.to_dict()) for s in data])


def get_election_summaries(active_only: bool = False) -> ElectionSummariesResponse:
    """Get totals of every election."""
    data = container.aggregation.election_summaries(active_only=active_only)
    return ElectionSummariesResponse(items=[ElectionSummaryItem(**s.to_dict()) for s in data])
