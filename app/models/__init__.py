"""Models package - DDL and entities for all domains."""

from app.models.common import CACHE_DDL, BaseEntity
from app.models.elections import (
    CANDIDATE_DDL,
    CANDIDATE_SEQUENCE,
    ELECTION_CANDIDATE_DDL,
    ELECTION_DDL,
    ELECTION_SEQUENCE,
    Candidate,
    Election,
)
from app.models.geo import (
    DISTRICT_DDL,
    DISTRICT_INDEXES,
    DISTRICT_POLLING_STATION_DDL,
    DISTRICT_SEQUENCE,
    POLLING_STATION_DDL,
    POLLING_STATION_SEQUENCE,
    REGION_DDL,
    REGION_SEQUENCE,
    District,
    PollingStation,
    Region,
)
from app.models.registry import VOTER_DDL, VOTER_INDEXES, VOTER_SEQUENCE, Voter
from app.models.voting import (
    VOTE_DDL,
    VOTE_INDEXES,
    VOTE_SEQUENCE,
    CandidateSummary,
    ElectionSummary,
    PollingStationSummary,
    UnitSummary,
    Vote,
    VoteFilter,
    VoteQueryResult,
    VoteStatistics,
)

ALL_DDL = [
    # Geo
    REGION_SEQUENCE,
    REGION_DDL,
    DISTRICT_SEQUENCE,
    DISTRICT_DDL,
    *DISTRICT_INDEXES,
    POLLING_STATION_SEQUENCE,
    POLLING_STATION_DDL,
    DISTRICT_POLLING_STATION_DDL,
    # Registry
    VOTER_SEQUENCE,
    VOTER_DDL,
    *VOTER_INDEXES,
    # Elections
    ELECTION_SEQUENCE,
    ELECTION_DDL,
    CANDIDATE_SEQUENCE,
    CANDIDATE_DDL,
    ELECTION_CANDIDATE_DDL,
    # Voting
    VOTE_SEQUENCE,
    VOTE_DDL,
    *VOTE_INDEXES,
    # Common
    CACHE_DDL,
]

__all__ = [
    # Common
    "BaseEntity",
    # Geo
    "Region",
    "District",
    "PollingStation",
    # Registry
    "Voter",
    # Elections
    "Election",
    "Candidate",
    # Voting
    "Vote",
    "VoteFilter",
    "VoteQueryResult",
    "VoteStatistics",
    "UnitSummary",
    "PollingStationSummary",
    "ElectionSummary",
    "CandidateSummary",
    # All DDL
    "ALL_DDL",
]
