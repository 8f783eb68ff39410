"""District model."""

from dataclasses import dataclass

from app.models.common import BaseEntity

DISTRICT_SEQUENCE = "CREATE SEQUENCE IF NOT EXISTS district_id_seq"

DISTRICT_DDL = """
CREATE TABLE IF NOT EXISTS district (
    id BIGINT PRIMARY KEY DEFAULT nextval('district_id_seq'),
    name VARCHAR NOT NULL,
    code VARCHAR,
    population INTEGER,
    region_id BIGINT NOT NULL
)
"""

DISTRICT_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_district_region ON district(region_id)",
]


@dataclass
class District(BaseEntity):
    """District inside exactly one region."""

    id: int
    name: str
    region_id: int
    code: str | None = None
    population: int | None = None
