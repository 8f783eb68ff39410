"""Election models - elections and candidates."""

from app.models.elections.candidate import CANDIDATE_DDL, CANDIDATE_SEQUENCE, Candidate
from app.models.elections.election import (
    ELECTION_CANDIDATE_DDL,
    ELECTION_DDL,
    ELECTION_SEQUENCE,
    Election,
)

__all__ = [
    "ELECTION_SEQUENCE",
    "ELECTION_DDL",
    "ELECTION_CANDIDATE_DDL",
    "CANDIDATE_SEQUENCE",
    "CANDIDATE_DDL",
    "Election",
    "Candidate",
]
