"""Voter model."""

from dataclasses import dataclass
from datetime import date

from app.models.common import BaseEntity

VOTER_SEQUENCE = "CREATE SEQUENCE IF NOT EXISTS voter_id_seq"

VOTER_DDL = """
CREATE TABLE IF NOT EXISTS voter (
    id BIGINT PRIMARY KEY DEFAULT nextval('voter_id_seq'),
    first_name VARCHAR NOT NULL,
    last_name VARCHAR NOT NULL,
    identification_number VARCHAR NOT NULL UNIQUE,
    date_of_birth DATE,
    sex VARCHAR,
    email VARCHAR,
    phone_number VARCHAR,
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    region_id BIGINT,
    district_id BIGINT
)
"""

VOTER_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_voter_region ON voter(region_id)",
    "CREATE INDEX IF NOT EXISTS idx_voter_district ON voter(district_id)",
]


@dataclass
class Voter(BaseEntity):
    """Registered voter."""

    id: int
    first_name: str
    last_name: str
    identification_number: str
    date_of_birth: date | None = None
    sex: str | None = None
    email: str | None = None
    phone_number: str | None = None
    is_active: bool = True
    region_id: int | None = None
    district_id: int | None = None
