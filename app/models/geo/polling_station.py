"""Polling station model and its district membership."""

from dataclasses import dataclass

from app.models.common import BaseEntity

POLLING_STATION_SEQUENCE = "CREATE SEQUENCE IF NOT EXISTS polling_station_id_seq"

POLLING_STATION_DDL = """
CREATE TABLE IF NOT EXISTS polling_station (
    id BIGINT PRIMARY KEY DEFAULT nextval('polling_station_id_seq'),
    name VARCHAR NOT NULL,
    address VARCHAR,
    capacity INTEGER,
    is_active BOOLEAN NOT NULL DEFAULT TRUE
)
"""

DISTRICT_POLLING_STATION_DDL = """
CREATE TABLE IF NOT EXISTS district_polling_station (
    district_id BIGINT NOT NULL,
    polling_station_id BIGINT NOT NULL,
    PRIMARY KEY (district_id, polling_station_id)
)
"""


@dataclass
class PollingStation(BaseEntity):
    """Place where votes are cast."""

    id: int
    name: str
    address: str | None = None
    capacity: int | None = None
    is_active: bool = True
