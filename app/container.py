"""Dependency Injection container - initialized at app startup."""

from app.repositories.common.cache import CacheRepository
from app.repositories.elections import CandidateRepository, ElectionRepository
from app.repositories.geo import DistrictRepository, PollingStationRepository, RegionRepository
from app.repositories.registry import VoterRepository
from app.repositories.voting import VoteRepository
from app.services.registry import RegistryService
from app.services.voting import AggregationEngine, EligibilityChecker, VoteAdmissionService


class Container:
    """Application DI container - holds all singleton instances."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def init(self) -> None:
        """Initialize all dependencies. Call once at app startup."""
        if self._initialized:
            return

        # Repositories (singletons)
        self._region_repo = RegionRepository()
        self._district_repo = DistrictRepository()
        self._station_repo = PollingStationRepository()
        self._voter_repo = VoterRepository()
        self._election_repo = ElectionRepository()
        self._candidate_repo = CandidateRepository()
        self._vote_repo = VoteRepository()
        self._cache_repo = CacheRepository(read_only=False)

        # Services (with injected repos)
        self.eligibility = EligibilityChecker(
            voter_repo=self._voter_repo,
            candidate_repo=self._candidate_repo,
            election_repo=self._election_repo,
            station_repo=self._station_repo,
            vote_repo=self._vote_repo,
        )

        self.admission = VoteAdmissionService(
            checker=self.eligibility,
            vote_repo=self._vote_repo,
            voter_repo=self._voter_repo,
            cache_repo=self._cache_repo,
        )

        self.aggregation = AggregationEngine(
            vote_repo=self._vote_repo,
            voter_repo=self._voter_repo,
            region_repo=self._region_repo,
            district_repo=self._district_repo,
            station_repo=self._station_repo,
            election_repo=self._election_repo,
            candidate_repo=self._candidate_repo,
            cache_repo=self._cache_repo,
        )

        self.registry = RegistryService(
            region_repo=self._region_repo,
            district_repo=self._district_repo,
            station_repo=self._station_repo,
            voter_repo=self._voter_repo,
            election_repo=self._election_repo,
            candidate_repo=self._candidate_repo,
            vote_repo=self._vote_repo,
            cache_repo=self._cache_repo,
        )

        self._initialized = True

    def reset(self) -> None:
        """Drop all instances so the next init() rebuilds them."""
        self._initialized = False


# Global container instance
container = Container()
