"""Tests for registry CRUD and relationship handling."""

from datetime import date

import pytest

from app.errors import ReferenceNotFound, ValidationError


class TestRegions:
    def test_create_and_find(self, registry):
        region = registry.create_region("West", description="coast", population=500)
        assert registry.get_region(region.id) == region
        assert registry.find_region_by_name("West") == region
        assert registry.list_regions_with_population_over(100) == [region]

    def test_duplicate_name(self, registry):
        registry.create_region("West")
        with pytest.raises(ValidationError):
            registry.create_region("West")

    def test_partial_update(self, registry):
        region = registry.create_region("West", description="coast", population=500)
        updated = registry.update_region(region.id, population=600)
        assert updated.population == 600
        assert updated.description == "coast"

    def test_unknown_field(self, registry):
        region = registry.create_region("West")
        with pytest.raises(ValidationError):
            registry.update_region(region.id, colour="blue")

    def test_missing(self, registry):
        with pytest.raises(ReferenceNotFound):
            registry.get_region(9999)
        with pytest.raises(ReferenceNotFound):
            registry.find_region_by_name("Atlantis")
        with pytest.raises(ReferenceNotFound):
            registry.update_region(9999, name="X")

    def test_delete_refused_with_districts(self, registry, world):
        with pytest.raises(ValidationError):
            registry.delete_region(world.region.id)

    def test_delete(self, registry):
        region = registry.create_region("West")
        registry.delete_region(region.id)
        assert registry.list_regions() == []


class TestDistricts:
    def test_requires_region(self, registry):
        with pytest.raises(ReferenceNotFound):
            registry.create_district("Nowhere-1", 9999)

    def test_list_by_region(self, registry, world):
        assert registry.list_districts_by_region(world.region.id) == [world.district]

    def test_rename_refreshes_counts(self, registry, admission, aggregation, world):
        admission.cast_vote(world.voters[0].id, world.c1.id, world.election.id, world.station.id)
        assert aggregation.vote_counts_by_district() == {"North-1": 1}
        registry.update_district(world.district.id, name="North-A")
        assert registry.get_district(world.district.id).name == "North-A"
        assert aggregation.vote_counts_by_district() == {"North-A": 1}

    def test_move_to_unknown_region(self, registry, world):
        with pytest.raises(ReferenceNotFound):
            registry.update_district(world.district.id, region_id=9999)

    def test_delete_unlinks_stations(self, registry, world):
        spare = registry.create_district("North-2", world.region.id)
        registry.update_polling_station(world.station.id, district_ids=[world.district.id, spare.id])
        registry.delete_district(spare.id)
        assert registry.polling_station_district_ids(world.station.id) == [world.district.id]


class TestPollingStations:
    def test_dangling_district_ids_skipped(self, registry, world):
        station = registry.create_polling_station("Library", capacity=20, district_ids=[world.district.id, 9999])
        assert registry.polling_station_district_ids(station.id) == [world.district.id]

    def test_links_untouched_without_list(self, registry, world):
        registry.update_polling_station(world.station.id, capacity=250)
        assert registry.get_polling_station(world.station.id).capacity == 250
        assert registry.polling_station_district_ids(world.station.id) == [world.district.id]

    def test_empty_list_clears_links(self, registry, world):
        registry.update_polling_station(world.station.id, district_ids=[])
        assert registry.polling_station_district_ids(world.station.id) == []
        assert registry.list_polling_stations_by_district(world.district.id) == []

    def test_lookups(self, registry, world):
        closed = registry.create_polling_station("Closed", capacity=500, is_active=False)
        assert registry.list_active_polling_stations() == [world.station]
        assert registry.list_polling_stations_with_capacity_over(200) == [closed]

    def test_delete_refused_with_votes(self, registry, admission, world):
        admission.cast_vote(world.voters[0].id, world.c1.id, world.election.id, world.station.id)
        with pytest.raises(ValidationError):
            registry.delete_polling_station(world.station.id)


class TestVoters:
    def test_unique_identification_number(self, registry, world):
        with pytest.raises(ValidationError):
            registry.create_voter("Dup", "Licate", world.voters[0].identification_number)

    def test_find_by_identification_number(self, registry, world):
        voter = world.voters[3]
        assert registry.find_voter_by_identification_number(voter.identification_number) == voter

    def test_move_voter(self, registry, aggregation, world):
        south = registry.create_region("South")
        assert aggregation.participation_rate(region_id=south.id) == 0.0
        registry.update_voter(world.voters[0].id, region_id=south.id)
        assert registry.list_voters_by_region(south.id) == [registry.get_voter(world.voters[0].id)]
        assert len(registry.list_voters_by_district(world.district.id)) == 10

    def test_move_to_unknown_region(self, registry, world):
        with pytest.raises(ReferenceNotFound):
            registry.update_voter(world.voters[0].id, region_id=9999)

    def test_delete_refused_with_votes(self, registry, admission, world):
        voter = world.voters[0]
        admission.cast_vote(voter.id, world.c1.id, world.election.id, world.station.id)
        with pytest.raises(ValidationError):
            registry.delete_voter(voter.id)
        registry.delete_voter(world.voters[1].id)
        with pytest.raises(ReferenceNotFound):
            registry.get_voter(world.voters[1].id)


class TestElectionsAndCandidates:
    def test_roster(self, registry, world):
        assert registry.election_candidate_ids(world.election.id) == [world.c1.id, world.c2.id]
        assert registry.list_candidates_by_election(world.election.id) == [world.c1, world.c2]
        assert registry.candidate_election_ids(world.c1.id) == [world.election.id]
        assert registry.list_elections_by_candidate(world.c1.id) == [world.election]

    def test_dangling_candidate_ids_skipped(self, registry, world):
        election = registry.create_election("By-election", date(2027, 1, 1), candidate_ids=[world.c1.id, 9999])
        assert registry.election_candidate_ids(election.id) == [world.c1.id]

    def test_replace_roster(self, registry, world):
        registry.update_election(world.election.id, candidate_ids=[world.c2.id, world.outsider.id])
        assert registry.election_candidate_ids(world.election.id) == [world.c2.id, world.outsider.id]
        assert registry.candidate_election_ids(world.c1.id) == []

    def test_roster_untouched_without_list(self, registry, world):
        updated = registry.update_election(world.election.id, description="Second round")
        assert updated.description == "Second round"
        assert registry.election_candidate_ids(world.election.id) == [world.c1.id, world.c2.id]

    def test_candidate_joins_election(self, registry, admission, world):
        registry.update_candidate(world.outsider.id, election_ids=[world.election.id])
        assert registry.get_candidate(world.outsider.id).full_name == "Ewa Zielinska"
        vote = admission.cast_vote(world.voters[0].id, world.outsider.id, world.election.id, world.station.id)
        assert vote.candidate_id == world.outsider.id

    def test_roster_change_refreshes_statistics(self, registry, aggregation, world):
        assert len(aggregation.vote_statistics(world.election.id)) == 2
        registry.update_candidate(world.outsider.id, election_ids=[world.election.id])
        assert len(aggregation.vote_statistics(world.election.id)) == 3

    def test_lookups(self, registry, world):
        local = registry.create_election("Local", date(2027, 5, 1), election_type="local", is_active=False)
        assert registry.list_active_elections() == [world.election]
        assert registry.list_elections_by_type("local") == [local]
        assert registry.list_elections_between(date(2027, 1, 1), date(2027, 12, 31)) == [local]
        assert registry.list_candidates_by_party("Red") == [world.c2]

    def test_delete_candidate_unlinks(self, registry, world):
        registry.delete_candidate(world.c1.id)
        assert registry.election_candidate_ids(world.election.id) == [world.c2.id]

    def test_delete_election_refused_with_votes(self, registry, admission, world):
        admission.cast_vote(world.voters[0].id, world.c1.id, world.election.id, world.station.id)
        with pytest.raises(ValidationError):
            registry.delete_election(world.election.id)


class TestVotes:
    def test_delete_vote(self, registry, admission, aggregation, world):
        vote = admission.cast_vote(world.voters[0].id, world.c1.id, world.election.id, world.station.id)
        assert aggregation.utilization_rate(world.station.id) == 0.01
        registry.delete_vote(vote.id)
        assert aggregation.utilization_rate(world.station.id) == 0.0
        with pytest.raises(ReferenceNotFound):
            registry.get_vote(vote.id)
