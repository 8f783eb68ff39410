"""Shared fixtures: a fresh in-memory database and a seeded election per test."""

from dataclasses import dataclass
from datetime import date

import pytest

from app.container import container
from app.models.elections import Candidate, Election
from app.models.geo import District, PollingStation, Region
from app.models.registry import Voter
from app.repositories.db import open_db, shutdown_db


@pytest.fixture(autouse=True)
def db():
    conn = open_db(":memory:")
    container.reset()
    container.init()
    yield conn
    shutdown_db()
    container.reset()


@pytest.fixture
def registry():
    return container.registry


@pytest.fixture
def admission():
    return container.admission


@pytest.fixture
def aggregation():
    return container.aggregation


@dataclass
class World:
    region: Region
    district: District
    station: PollingStation
    election: Election
    c1: Candidate
    c2: Candidate
    outsider: Candidate
    voters: list[Voter]


def _add_voters(registry, n: int, region_id: int, district_id: int, prefix: str = "V") -> list[Voter]:
    return [
        registry.create_voter(
            first_name=f"{prefix}{i}",
            last_name="Voter",
            identification_number=f"{prefix}-{region_id}-{district_id}-{i}",
            region_id=region_id,
            district_id=district_id,
        )
        for i in range(n)
    ]


@pytest.fixture
def make_voters(registry):
    def make(n: int, region_id: int, district_id: int, prefix: str = "V") -> list[Voter]:
        return _add_voters(registry, n, region_id, district_id, prefix)

    return make


@pytest.fixture
def world(registry) -> World:
    region = registry.create_region("North", population=1000)
    district = registry.create_district("North-1", region.id, code="N1")
    station = registry.create_polling_station("School 1", capacity=100, district_ids=[district.id])
    c1 = registry.create_candidate("Anna", "Nowak", party="Blue")
    c2 = registry.create_candidate("Jan", "Kowalski", party="Red")
    outsider = registry.create_candidate("Ewa", "Zielinska", party="Green")
    election = registry.create_election("General", date(2026, 11, 1), candidate_ids=[c1.id, c2.id])
    voters = _add_voters(registry, 10, region.id, district.id)
    return World(region, district, station, election, c1, c2, outsider, voters)
