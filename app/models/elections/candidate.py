"""Candidate model."""

from dataclasses import dataclass

from app.models.common import BaseEntity

CANDIDATE_SEQUENCE = "CREATE SEQUENCE IF NOT EXISTS candidate_id_seq"

CANDIDATE_DDL = """
CREATE TABLE IF NOT EXISTS candidate (
    id BIGINT PRIMARY KEY DEFAULT nextval('candidate_id_seq'),
    first_name VARCHAR NOT NULL,
    last_name VARCHAR NOT NULL,
    party VARCHAR,
    platform VARCHAR,
    biography VARCHAR
)
"""


@dataclass
class Candidate(BaseEntity):
    """Candidate standing in one or more elections."""

    id: int
    first_name: str
    last_name: str
    party: str | None = None
    platform: str | None = None
    biography: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
