"""Repositories package - data access layer for our database."""

from app.repositories.base import BaseRepository
from app.repositories.common import CacheRepository, EntityRepository
from app.repositories.db import (
    close_db,
    get_db,
    init_tables,
    open_db,
    reconnect_db,
    shutdown_db,
    transaction,
)
from app.repositories.elections import CandidateRepository, ElectionRepository
from app.repositories.geo import DistrictRepository, PollingStationRepository, RegionRepository
from app.repositories.registry import VoterRepository
from app.repositories.voting import VoteRepository

__all__ = [
    # DB
    "open_db",
    "get_db",
    "close_db",
    "reconnect_db",
    "shutdown_db",
    "init_tables",
    "transaction",
    # Base
    "BaseRepository",
    "EntityRepository",
    # Common
    "CacheRepository",
    # Geo
    "RegionRepository",
    "DistrictRepository",
    "PollingStationRepository",
    # Registry
    "VoterRepository",
    # Elections
    "ElectionRepository",
    "CandidateRepository",
    # Voting
    "VoteRepository",
]
