"""Vote (ledger entry) model."""

from dataclasses import dataclass
from datetime import datetime

from app.models.common import BaseEntity

VOTE_SEQUENCE = "CREATE SEQUENCE IF NOT EXISTS vote_id_seq"

# ballot_key is "<voter_id>:<election_id>" while the vote is valid, NULL otherwise
VOTE_DDL = """
CREATE TABLE IF NOT EXISTS vote (
    id BIGINT PRIMARY KEY DEFAULT nextval('vote_id_seq'),
    voter_id BIGINT NOT NULL,
    candidate_id BIGINT NOT NULL,
    election_id BIGINT NOT NULL,
    polling_station_id BIGINT NOT NULL,
    timestamp TIMESTAMP NOT NULL,
    is_valid BOOLEAN NOT NULL,
    ballot_key VARCHAR UNIQUE
)
"""

VOTE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_vote_voter ON vote(voter_id)",
    "CREATE INDEX IF NOT EXISTS idx_vote_election ON vote(election_id)",
    "CREATE INDEX IF NOT EXISTS idx_vote_candidate ON vote(candidate_id)",
    "CREATE INDEX IF NOT EXISTS idx_vote_station ON vote(polling_station_id)",
]


def ballot_key(voter_id: int, election_id: int) -> str:
    return f"{voter_id}:{election_id}"


@dataclass
class Vote(BaseEntity):
    """Single vote in the ledger."""

    id: int
    voter_id: int
    candidate_id: int
    election_id: int
    polling_station_id: int
    timestamp: datetime
    is_valid: bool

    @classmethod
    def from_dict(cls, data: dict) -> "Vote":
        """Rebuild from a cached dict (timestamp stored as ISO string)."""
        ts = data["timestamp"]
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts)
        return cls(**{**data, "timestamp": ts})
