"""Election model and its candidate roster."""

from dataclasses import dataclass
from datetime import date

from app.models.common import BaseEntity

ELECTION_SEQUENCE = "CREATE SEQUENCE IF NOT EXISTS election_id_seq"

ELECTION_DDL = """
CREATE TABLE IF NOT EXISTS election (
    id BIGINT PRIMARY KEY DEFAULT nextval('election_id_seq'),
    name VARCHAR NOT NULL,
    description VARCHAR,
    election_date DATE NOT NULL,
    registration_start_date DATE,
    registration_end_date DATE,
    is_active BOOLEAN NOT NULL DEFAULT TRUE,
    election_type VARCHAR
)
"""

ELECTION_CANDIDATE_DDL = """
CREATE TABLE IF NOT EXISTS election_candidate (
    election_id BIGINT NOT NULL,
    candidate_id BIGINT NOT NULL,
    PRIMARY KEY (election_id, candidate_id)
)
"""


@dataclass
class Election(BaseEntity):
    """Election event (presidential, parliamentary, local...)."""

    id: int
    name: str
    election_date: date
    description: str | None = None
    registration_start_date: date | None = None
    registration_end_date: date | None = None
    is_active: bool = True
    election_type: str | None = None
