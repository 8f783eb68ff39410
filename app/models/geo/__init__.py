"""Geography models - regions, districts, polling stations."""

from app.models.geo.district import DISTRICT_DDL, DISTRICT_INDEXES, DISTRICT_SEQUENCE, District
from app.models.geo.polling_station import (
    DISTRICT_POLLING_STATION_DDL,
    POLLING_STATION_DDL,
    POLLING_STATION_SEQUENCE,
    PollingStation,
)
from app.models.geo.region import REGION_DDL, REGION_SEQUENCE, Region

__all__ = [
    "REGION_SEQUENCE",
    "DISTRICT_SEQUENCE",
    "POLLING_STATION_SEQUENCE",
    "REGION_DDL",
    "DISTRICT_DDL",
    "DISTRICT_INDEXES",
    "POLLING_STATION_DDL",
    "DISTRICT_POLLING_STATION_DDL",
    "Region",
    "District",
    "PollingStation",
]
