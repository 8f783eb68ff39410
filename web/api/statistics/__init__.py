"""Statistics API."""

from web.api.statistics.views import (
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

__all__ = [
    "get_vote_statistics",
    "get_vote_counts_by_region",
    "get_vote_counts_by_district",
    "get_vote_counts_by_candidate",
    "get_participation_rate",
    "get_utilization_rate",
    "get_region_summaries",
    "get_district_summaries",
    "get_polling_station_summaries",
    "get_election_summaries",
]
