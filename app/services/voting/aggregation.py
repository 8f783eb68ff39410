"""Aggregation engine - derived vote statistics with scoped caching."""

from collections import defaultdict
from collections.abc import Callable

from loguru import logger

from app.errors import ReferenceNotFound, ValidationError
from app.models.voting import (
    CandidateSummary,
    ElectionSummary,
    PollingStationSummary,
    UnitSummary,
    Vote,
    VoteFilter,
    VoteQueryResult,
    VoteStatistics,
)
from app.repositories.common import CacheRepository
from app.repositories.elections import CandidateRepository, ElectionRepository
from app.repositories.geo import DistrictRepository, PollingStationRepository, RegionRepository
from app.repositories.registry import VoterRepository
from app.repositories.voting import VoteRepository
from app.services.common import scopes
from app.services.voting import formulas
from settings import ELIGIBLE_VOTERS_PER_ELECTION


def _sum_by_name(rows) -> dict[str, int]:
    """Fold (id, name, count) rows into {name: count}; same-named units add up."""
    result: dict[str, int] = defaultdict(int)
    for _, name, count in rows:
        result[name] += count
    return dict(result)


class AggregationEngine:
    """Vote counts and rates computed from the ledger, cached by scope."""

    def __init__(
        self,
        vote_repo: VoteRepository,
        voter_repo: VoterRepository,
        region_repo: RegionRepository,
        district_repo: DistrictRepository,
        station_repo: PollingStationRepository,
        election_repo: ElectionRepository,
        candidate_repo: CandidateRepository,
        cache_repo: CacheRepository,
        eligible_voters_per_election: int | None = ELIGIBLE_VOTERS_PER_ELECTION,
    ):
        self._votes = vote_repo
        self._voters = voter_repo
        self._regions = region_repo
        self._districts = district_repo
        self._stations = station_repo
        self._elections = election_repo
        self._candidates = candidate_repo
        self._cache = cache_repo
        self._eligible_voters = eligible_voters_per_election
        logger.debug("AggregationEngine initialized")

    def _get_cached_or_compute(self, key: str, tags: set[str], compute_fn: Callable):
        """Try the result cache first, compute and save if missing."""
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        since = self._cache.epoch()
        result = compute_fn()
        self._cache.set(key, result, tags, since=since)
        return result

    # ========== Ledger queries ==========

    def count_votes(self, flt: VoteFilter | None = None) -> VoteQueryResult:
        """Votes matching every given filter field, with their count."""
        flt = flt or VoteFilter()

        def compute() -> dict:
            votes = self._votes.find(flt)
            return {"count": len(votes), "votes": [v.to_dict() for v in votes]}

        data = self._get_cached_or_compute(flt.cache_key(), {scopes.VOTES}, compute)
        return VoteQueryResult(count=data["count"], votes=[Vote.from_dict(v) for v in data["votes"]])

    def vote_counts_by_region(self, election_id: int | None = None, is_valid: bool | None = None) -> dict[str, int]:
        """{region name: votes}; regions without votes are omitted."""
        flt = VoteFilter(election_id=election_id, is_valid=is_valid)

        def compute() -> dict[str, int]:
            counts = _sum_by_name(self._votes.counts_by_region(flt))
            logger.info("Computed vote counts for {} regions", len(counts))
            return counts

        tags = {scopes.VOTES, scopes.VOTERS, scopes.REGIONS}
        return self._get_cached_or_compute(f"by_region:{flt.cache_key()}", tags, compute)

    def vote_counts_by_district(self, election_id: int | None = None, is_valid: bool | None = None) -> dict[str, int]:
        """{district name: votes}; districts without votes are omitted."""
        flt = VoteFilter(election_id=election_id, is_valid=is_valid)

        def compute() -> dict[str, int]:
            counts = _sum_by_name(self._votes.counts_by_district(flt))
            logger.info("Computed vote counts for {} districts", len(counts))
            return counts

        tags = {scopes.VOTES, scopes.VOTERS, scopes.DISTRICTS}
        return self._get_cached_or_compute(f"by_district:{flt.cache_key()}", tags, compute)

    def vote_counts_by_candidate_in_election(self, election_id: int, is_valid: bool | None = None) -> dict[str, int]:
        """{"First Last": votes} for one election; empty for an unknown election."""
        flt = VoteFilter(election_id=election_id, is_valid=is_valid)

        def compute() -> dict[str, int]:
            result: dict[str, int] = defaultdict(int)
            for _, first, last, count in self._votes.counts_by_candidate(flt):
                result[f"{first} {last}"] += count
            return dict(result)

        tags = {scopes.VOTES, scopes.CANDIDATES, scopes.entity("election", election_id)}
        return self._get_cached_or_compute(f"by_candidate:{flt.cache_key()}", tags, compute)

    # ========== Rates ==========

    def participation_rate(
        self,
        *,
        region_id: int | None = None,
        district_id: int | None = None,
        election_id: int | None = None,
    ) -> float:
        """Valid votes over eligible voters for exactly one region, district or election."""
        given = [(k, v) for k, v in (("region", region_id), ("district", district_id), ("election", election_id)) if v is not None]
        if len(given) != 1:
            raise ValidationError("Exactly one of region_id, district_id, election_id is required")
        kind, unit_id = given[0]

        def compute() -> float:
            if kind == "region":
                if not self._regions.exists(unit_id):
                    raise ReferenceNotFound("region", unit_id)
                return formulas.rate(self._votes.valid_count_in_region(unit_id), self._regions.voter_count(unit_id))
            if kind == "district":
                if not self._districts.exists(unit_id):
                    raise ReferenceNotFound("district", unit_id)
                return formulas.rate(self._votes.valid_count_in_district(unit_id), self._districts.voter_count(unit_id))
            if not self._elections.exists(unit_id):
                raise ReferenceNotFound("election", unit_id)
            return formulas.rate(self._votes.valid_count_in_election(unit_id), self._election_denominator())

        tags = {scopes.VOTES, scopes.entity(kind, unit_id)}
        if kind == "election":
            tags.add(scopes.VOTERS)
        return self._get_cached_or_compute(f"participation:{kind}:{unit_id}", tags, compute)

    def _election_denominator(self) -> int:
        if self._eligible_voters is not None:
            return self._eligible_voters
        return self._voters.count_active()

    def utilization_rate(self, polling_station_id: int) -> float:
        """Valid votes at the station over its capacity."""

        def compute() -> float:
            station = self._stations.get(polling_station_id)
            if station is None:
                raise ReferenceNotFound("polling_station", polling_station_id)
            return formulas.rate(self._votes.valid_count_at_station(polling_station_id), station.capacity)

        tags = {scopes.VOTES, scopes.entity("polling_station", polling_station_id)}
        return self._get_cached_or_compute(f"utilization:{polling_station_id}", tags, compute)

    # ========== Election statistics ==========

    def vote_statistics(self, election_id: int) -> list[VoteStatistics]:
        """Per-candidate valid votes and share, most votes first, ties by candidate id."""

        def compute() -> list[dict]:
            election = self._elections.get(election_id)
            if election is None:
                raise ReferenceNotFound("election", election_id)

            tally = self._votes.candidate_tally(election_id)
            total = self._votes.valid_count_in_election(election_id)
            by_id = {row[0]: row for row in tally}
            ranked = formulas.rank_by_votes([(row[0], row[4]) for row in tally])

            logger.info("Computed statistics for election {}: {} candidates, {} votes", election_id, len(tally), total)
            return [
                {
                    "candidate_id": cid,
                    "candidate_first_name": by_id[cid][1],
                    "candidate_last_name": by_id[cid][2],
                    "candidate_party": by_id[cid][3],
                    "election_id": election.id,
                    "election_name": election.name,
                    "vote_count": votes,
                    "vote_percentage": formulas.vote_share(votes, total),
                }
                for cid, votes in ranked
            ]

        tags = {scopes.VOTES, scopes.CANDIDATES, scopes.entity("election", election_id)}
        data = self._get_cached_or_compute(f"statistics:{election_id}", tags, compute)
        return [VoteStatistics(**d) for d in data]

    # ========== Entity summaries ==========

    def region_summaries(self) -> list[UnitSummary]:
        """Every region with voters, valid votes and participation."""
        return self._unit_summaries("region", {scopes.VOTES, scopes.VOTERS, scopes.REGIONS})

    def district_summaries(self) -> list[UnitSummary]:
        """Every district with voters, valid votes and participation."""
        return self._unit_summaries("district", {scopes.VOTES, scopes.VOTERS, scopes.DISTRICTS})

    def _unit_summaries(self, unit: str, tags: set[str]) -> list[UnitSummary]:
        def compute() -> list[dict]:
            return [
                {
                    "id": uid,
                    "name": name,
                    "voter_count": voters,
                    "vote_count": votes,
                    "participation_rate": formulas.rate(votes, voters),
                }
                for uid, name, voters, votes in self._votes.unit_rollup(unit)
            ]

        data = self._get_cached_or_compute(f"summaries:{unit}", tags, compute)
        return [UnitSummary(**d) for d in data]

    def polling_station_summaries(self, active_only: bool = False) -> list[PollingStationSummary]:
        """Every polling station with valid votes and utilization."""

        def compute() -> list[dict]:
            return [
                {
                    "id": sid,
                    "name": name,
                    "capacity": capacity,
                    "vote_count": votes,
                    "utilization_rate": formulas.rate(votes, capacity),
                    "district_ids": self._stations.district_ids(sid),
                }
                for sid, name, capacity, votes in self._votes.station_rollup(active_only)
            ]

        tags = {scopes.VOTES, scopes.POLLING_STATIONS, scopes.DISTRICTS}
        data = self._get_cached_or_compute(f"summaries:polling_station:{active_only}", tags, compute)
        return [PollingStationSummary(**d) for d in data]

    def election_summaries(self, active_only: bool = False) -> list[ElectionSummary]:
        """Every election with valid votes, participation and candidate roster."""

        def compute() -> list[dict]:
            denominator = self._election_denominator()
            return [
                {
                    "id": eid,
                    "name": name,
                    "is_active": is_active,
                    "total_votes": votes,
                    "participation_rate": formulas.rate(votes, denominator),
                    "candidate_ids": self._elections.candidate_ids(eid),
                }
                for eid, name, is_active, votes in self._votes.election_rollup(active_only)
            ]

        tags = {scopes.VOTES, scopes.VOTERS, scopes.ELECTIONS, scopes.CANDIDATES}
        data = self._get_cached_or_compute(f"summaries:election:{active_only}", tags, compute)
        return [ElectionSummary(**d) for d in data]

    def candidate_summaries(self) -> list[CandidateSummary]:
        """Every candidate with valid votes and the elections they stand in."""

        def compute() -> list[dict]:
            return [
                {
                    "id": cid,
                    "name": f"{first} {last}",
                    "party": party,
                    "vote_count": votes,
                    "election_ids": self._candidates.election_ids(cid),
                }
                for cid, first, last, party, votes in self._votes.candidate_rollup()
            ]

        tags = {scopes.VOTES, scopes.CANDIDATES, scopes.ELECTIONS}
        data = self._get_cached_or_compute("summaries:candidate", tags, compute)
        return [CandidateSummary(**d) for d in data]

    def precompute_all(self) -> None:
        """Warm the cache with every summary."""
        logger.info("Precomputing all summaries...")
        self.region_summaries()
        self.district_summaries()
        self.polling_station_summaries()
        self.election_summaries()
        self.candidate_summaries()
        logger.info("All summaries cached")
