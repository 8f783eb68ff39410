"""Registry service - administrative CRUD over the election entities."""

from datetime import date
from typing import Any

from loguru import logger

from app.errors import ReferenceNotFound, ValidationError
from app.models.elections import Candidate, Election
from app.models.geo import District, PollingStation, Region
from app.models.registry import Voter
from app.models.voting import Vote, VoteFilter
from app.repositories.common import CacheRepository, EntityRepository
from app.repositories.db import transaction
from app.repositories.elections import CandidateRepository, ElectionRepository
from app.repositories.geo import DistrictRepository, PollingStationRepository, RegionRepository
from app.repositories.registry import VoterRepository
from app.repositories.voting import VoteRepository
from app.services.common import scopes


class RegistryService:
    """Create, read, update and delete regions, districts, stations, voters,
    candidates and elections.

    Updates are partial: omitted (None) fields keep their value, and
    relationship lists change only when a list is passed. Ids in such a list
    that do not resolve are skipped with a warning rather than failing the
    update. Every mutation invalidates the cache scopes it affects.
    """

    def __init__(
        self,
        region_repo: RegionRepository,
        district_repo: DistrictRepository,
        station_repo: PollingStationRepository,
        voter_repo: VoterRepository,
        election_repo: ElectionRepository,
        candidate_repo: CandidateRepository,
        vote_repo: VoteRepository,
        cache_repo: CacheRepository,
    ):
        self._regions = region_repo
        self._districts = district_repo
        self._stations = station_repo
        self._voters = voter_repo
        self._elections = election_repo
        self._candidates = candidate_repo
        self._votes = vote_repo
        self._cache = cache_repo

    # ========== Helpers ==========

    def _get(self, repo: EntityRepository, entity_id: int) -> Any:
        found = repo.get(entity_id)
        if found is None:
            raise ReferenceNotFound(repo.kind, entity_id)
        return found

    def _require(self, repo: EntityRepository, entity_id: int | None) -> None:
        if entity_id is not None and not repo.exists(entity_id):
            raise ReferenceNotFound(repo.kind, entity_id)

    def _resolve(self, repo: EntityRepository, ids: list[int]) -> list[int]:
        """Keep the ids that exist; dangling ones are dropped with a warning."""
        existing = repo.existing_ids(ids)
        dropped = sorted(set(ids) - set(existing))
        if dropped:
            logger.warning("Skipping unknown {} ids: {}", repo.kind, dropped)
        return existing

    def _refuse_if_voted(self, kind: str, entity_id: int, flt: VoteFilter) -> None:
        count = self._votes.count(flt)
        if count:
            raise ValidationError(f"Cannot delete {kind} {entity_id}: referenced by {count} votes")

    def _invalidate(self, *scope_sets: set[str]) -> None:
        self._cache.invalidate(*set().union(*scope_sets))

    # ========== Regions ==========

    def create_region(self, name: str, description: str | None = None, population: int | None = None) -> Region:
        region = self._regions.create(name=name, description=description, population=population)
        self._invalidate(scopes.for_entity("region", region.id))
        logger.info("Region {} created: {}", region.id, name)
        return region

    def get_region(self, region_id: int) -> Region:
        return self._get(self._regions, region_id)

    def find_region_by_name(self, name: str) -> Region:
        region = self._regions.find_by_name(name)
        if region is None:
            raise ReferenceNotFound("region")
        return region

    def list_regions(self) -> list[Region]:
        return self._regions.list_all()

    def list_regions_with_population_over(self, population: int) -> list[Region]:
        return self._regions.find_by_population_greater_than(population)

    def update_region(self, region_id: int, **fields: Any) -> Region:
        region = self._regions.update(region_id, **fields)
        if region is None:
            raise ReferenceNotFound("region", region_id)
        self._invalidate(scopes.for_entity("region", region_id))
        return region

    def delete_region(self, region_id: int) -> None:
        self._get(self._regions, region_id)
        if self._regions.district_ids(region_id) or self._regions.voter_count(region_id):
            raise ValidationError(f"Cannot delete region {region_id}: it still has districts or voters")
        self._regions.delete(region_id)
        self._invalidate(scopes.for_entity("region", region_id))
        logger.info("Region {} deleted", region_id)

    # ========== Districts ==========

    def create_district(
        self,
        name: str,
        region_id: int,
        code: str | None = None,
        population: int | None = None,
    ) -> District:
        self._require(self._regions, region_id)
        district = self._districts.create(name=name, region_id=region_id, code=code, population=population)
        self._invalidate(scopes.for_entity("district", district.id), {scopes.entity("region", region_id)})
        logger.info("District {} created in region {}", district.id, region_id)
        return district

    def get_district(self, district_id: int) -> District:
        return self._get(self._districts, district_id)

    def list_districts_by_region(self, region_id: int) -> list[District]:
        return self._districts.find_by_region(region_id)

    def update_district(self, district_id: int, **fields: Any) -> District:
        self._require(self._regions, fields.get("region_id"))
        district = self._districts.update(district_id, **fields)
        if district is None:
            raise ReferenceNotFound("district", district_id)
        self._invalidate(scopes.for_entity("district", district_id))
        return district

    def delete_district(self, district_id: int) -> None:
        self._get(self._districts, district_id)
        if self._districts.voter_count(district_id):
            raise ValidationError(f"Cannot delete district {district_id}: it still has voters")
        station_ids = self._districts.polling_station_ids(district_id)
        with transaction():
            for station_id in station_ids:
                remaining = [d for d in self._stations.district_ids(station_id) if d != district_id]
                self._stations.set_districts(station_id, remaining)
            self._districts.delete(district_id)
        self._invalidate(
            scopes.for_entity("district", district_id),
            {scopes.entity("polling_station", s) for s in station_ids},
        )
        logger.info("District {} deleted", district_id)

    # ========== Polling stations ==========

    def create_polling_station(
        self,
        name: str,
        address: str | None = None,
        capacity: int | None = None,
        is_active: bool = True,
        district_ids: list[int] | None = None,
    ) -> PollingStation:
        with transaction():
            station = self._stations.create(name=name, address=address, capacity=capacity, is_active=is_active)
            if district_ids:
                self._stations.set_districts(station.id, self._resolve(self._districts, district_ids))
        self._invalidate(scopes.for_entity("polling_station", station.id))
        logger.info("Polling station {} created: {}", station.id, name)
        return station

    def get_polling_station(self, station_id: int) -> PollingStation:
        return self._get(self._stations, station_id)

    def list_active_polling_stations(self) -> list[PollingStation]:
        return self._stations.find_active()

    def list_polling_stations_by_district(self, district_id: int) -> list[PollingStation]:
        return self._stations.find_by_district(district_id)

    def list_polling_stations_with_capacity_over(self, capacity: int) -> list[PollingStation]:
        return self._stations.find_by_capacity_greater_than(capacity)

    def polling_station_district_ids(self, station_id: int) -> list[int]:
        return self._stations.district_ids(station_id)

    def update_polling_station(
        self,
        station_id: int,
        district_ids: list[int] | None = None,
        **fields: Any,
    ) -> PollingStation:
        with transaction():
            station = self._stations.update(station_id, **fields)
            if station is None:
                raise ReferenceNotFound("polling_station", station_id)
            if district_ids is not None:
                self._stations.set_districts(station_id, self._resolve(self._districts, district_ids))
        self._invalidate(scopes.for_entity("polling_station", station_id))
        return station

    def delete_polling_station(self, station_id: int) -> None:
        self._get(self._stations, station_id)
        self._refuse_if_voted("polling_station", station_id, VoteFilter(polling_station_id=station_id))
        with transaction():
            self._stations.delete(station_id)
        self._invalidate(scopes.for_entity("polling_station", station_id))
        logger.info("Polling station {} deleted", station_id)

    # ========== Voters ==========

    def create_voter(
        self,
        first_name: str,
        last_name: str,
        identification_number: str,
        date_of_birth: date | None = None,
        sex: str | None = None,
        email: str | None = None,
        phone_number: str | None = None,
        is_active: bool = True,
        region_id: int | None = None,
        district_id: int | None = None,
    ) -> Voter:
        self._require(self._regions, region_id)
        self._require(self._districts, district_id)
        voter = self._voters.create(
            first_name=first_name,
            last_name=last_name,
            identification_number=identification_number,
            date_of_birth=date_of_birth,
            sex=sex,
            email=email,
            phone_number=phone_number,
            is_active=is_active,
            region_id=region_id,
            district_id=district_id,
        )
        self._invalidate(scopes.for_voter(voter))
        logger.info("Voter {} registered", voter.id)
        return voter

    def get_voter(self, voter_id: int) -> Voter:
        return self._get(self._voters, voter_id)

    def find_voter_by_identification_number(self, identification_number: str) -> Voter:
        voter = self._voters.find_by_identification_number(identification_number)
        if voter is None:
            raise ReferenceNotFound("voter")
        return voter

    def list_voters_by_region(self, region_id: int) -> list[Voter]:
        return self._voters.find_by_region(region_id)

    def list_voters_by_district(self, district_id: int) -> list[Voter]:
        return self._voters.find_by_district(district_id)

    def update_voter(self, voter_id: int, **fields: Any) -> Voter:
        before = self._get(self._voters, voter_id)
        self._require(self._regions, fields.get("region_id"))
        self._require(self._districts, fields.get("district_id"))
        after = self._voters.update(voter_id, **fields)
        if after is None:
            raise ReferenceNotFound("voter", voter_id)
        self._invalidate(scopes.for_voter(before), scopes.for_voter(after))
        return after

    def delete_voter(self, voter_id: int) -> None:
        voter = self._get(self._voters, voter_id)
        self._refuse_if_voted("voter", voter_id, VoteFilter(voter_id=voter_id))
        self._voters.delete(voter_id)
        self._invalidate(scopes.for_voter(voter))
        logger.info("Voter {} deleted", voter_id)

    # ========== Candidates ==========

    def create_candidate(
        self,
        first_name: str,
        last_name: str,
        party: str | None = None,
        platform: str | None = None,
        biography: str | None = None,
        election_ids: list[int] | None = None,
    ) -> Candidate:
        with transaction():
            candidate = self._candidates.create(
                first_name=first_name,
                last_name=last_name,
                party=party,
                platform=platform,
                biography=biography,
            )
            linked = self._resolve(self._elections, election_ids) if election_ids else []
            if linked:
                self._candidates.set_elections(candidate.id, linked)
        self._invalidate(
            scopes.for_entity("candidate", candidate.id),
            {scopes.ELECTIONS} if linked else set(),
            {scopes.entity("election", e) for e in linked},
        )
        logger.info("Candidate {} created: {}", candidate.id, candidate.full_name)
        return candidate

    def get_candidate(self, candidate_id: int) -> Candidate:
        return self._get(self._candidates, candidate_id)

    def list_candidates_by_election(self, election_id: int) -> list[Candidate]:
        return self._candidates.find_by_election(election_id)

    def list_candidates_by_party(self, party: str) -> list[Candidate]:
        return self._candidates.find_by_party(party)

    def candidate_election_ids(self, candidate_id: int) -> list[int]:
        return self._candidates.election_ids(candidate_id)

    def update_candidate(
        self,
        candidate_id: int,
        election_ids: list[int] | None = None,
        **fields: Any,
    ) -> Candidate:
        touched: set[int] = set()
        with transaction():
            candidate = self._candidates.update(candidate_id, **fields)
            if candidate is None:
                raise ReferenceNotFound("candidate", candidate_id)
            if election_ids is not None:
                linked = self._resolve(self._elections, election_ids)
                touched = set(self._candidates.election_ids(candidate_id)) | set(linked)
                self._candidates.set_elections(candidate_id, linked)
        self._invalidate(
            scopes.for_entity("candidate", candidate_id),
            {scopes.ELECTIONS} if touched else set(),
            {scopes.entity("election", e) for e in touched},
        )
        return candidate

    def delete_candidate(self, candidate_id: int) -> None:
        self._get(self._candidates, candidate_id)
        self._refuse_if_voted("candidate", candidate_id, VoteFilter(candidate_id=candidate_id))
        election_ids = self._candidates.election_ids(candidate_id)
        with transaction():
            self._candidates.delete(candidate_id)
        self._invalidate(
            scopes.for_entity("candidate", candidate_id),
            {scopes.ELECTIONS},
            {scopes.entity("election", e) for e in election_ids},
        )
        logger.info("Candidate {} deleted", candidate_id)

    # ========== Elections ==========

    def create_election(
        self,
        name: str,
        election_date: date,
        description: str | None = None,
        registration_start_date: date | None = None,
        registration_end_date: date | None = None,
        is_active: bool = True,
        election_type: str | None = None,
        candidate_ids: list[int] | None = None,
    ) -> Election:
        with transaction():
            election = self._elections.create(
                name=name,
                election_date=election_date,
                description=description,
                registration_start_date=registration_start_date,
                registration_end_date=registration_end_date,
                is_active=is_active,
                election_type=election_type,
            )
            linked = self._resolve(self._candidates, candidate_ids) if candidate_ids else []
            if linked:
                self._elections.set_candidates(election.id, linked)
        self._invalidate(
            scopes.for_entity("election", election.id),
            {scopes.CANDIDATES} if linked else set(),
            {scopes.entity("candidate", c) for c in linked},
        )
        logger.info("Election {} created: {} ({} candidates)", election.id, name, len(linked))
        return election

    def get_election(self, election_id: int) -> Election:
        return self._get(self._elections, election_id)

    def list_active_elections(self) -> list[Election]:
        return self._elections.find_active()

    def list_elections_by_type(self, election_type: str) -> list[Election]:
        return self._elections.find_by_type(election_type)

    def list_elections_between(self, start: date, end: date) -> list[Election]:
        return self._elections.find_by_date_between(start, end)

    def list_elections_by_candidate(self, candidate_id: int) -> list[Election]:
        return self._elections.find_by_candidate(candidate_id)

    def election_candidate_ids(self, election_id: int) -> list[int]:
        return self._elections.candidate_ids(election_id)

    def update_election(
        self,
        election_id: int,
        candidate_ids: list[int] | None = None,
        **fields: Any,
    ) -> Election:
        touched: set[int] = set()
        with transaction():
            election = self._elections.update(election_id, **fields)
            if election is None:
                raise ReferenceNotFound("election", election_id)
            if candidate_ids is not None:
                linked = self._resolve(self._candidates, candidate_ids)
                touched = set(self._elections.candidate_ids(election_id)) | set(linked)
                self._elections.set_candidates(election_id, linked)
        self._invalidate(
            scopes.for_entity("election", election_id),
            {scopes.CANDIDATES} if touched else set(),
            {scopes.entity("candidate", c) for c in touched},
        )
        return election

    def delete_election(self, election_id: int) -> None:
        self._get(self._elections, election_id)
        self._refuse_if_voted("election", election_id, VoteFilter(election_id=election_id))
        candidate_ids = self._elections.candidate_ids(election_id)
        with transaction():
            self._elections.delete(election_id)
        self._invalidate(
            scopes.for_entity("election", election_id),
            {scopes.CANDIDATES},
            {scopes.entity("candidate", c) for c in candidate_ids},
        )
        logger.info("Election {} deleted", election_id)

    # ========== Votes (administrative override) ==========

    def get_vote(self, vote_id: int) -> Vote:
        vote = self._votes.get(vote_id)
        if vote is None:
            raise ReferenceNotFound("vote", vote_id)
        return vote

    def delete_vote(self, vote_id: int) -> None:
        """Hard-delete a ledger entry. Not part of normal operation."""
        vote = self.get_vote(vote_id)
        self._votes.delete(vote_id)
        self._invalidate(scopes.for_vote(vote, self._voters.get(vote.voter_id)))
        logger.warning("Vote {} hard-deleted (voter={}, election={})", vote_id, vote.voter_id, vote.election_id)
