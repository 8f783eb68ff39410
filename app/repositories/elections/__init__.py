"""Election repositories."""

from app.repositories.elections.candidate import CandidateRepository
from app.repositories.elections.election import ElectionRepository

__all__ = [
    "ElectionRepository",
    "CandidateRepository",
]
