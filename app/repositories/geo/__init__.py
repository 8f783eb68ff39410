"""Geography repositories."""

from app.repositories.geo.district import DistrictRepository
from app.repositories.geo.polling_station import PollingStationRepository
from app.repositories.geo.region import RegionRepository

__all__ = [
    "RegionRepository",
    "DistrictRepository",
    "PollingStationRepository",
]
