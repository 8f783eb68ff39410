"""Voter registry models."""

from app.models.registry.voter import VOTER_DDL, VOTER_INDEXES, VOTER_SEQUENCE, Voter

__all__ = [
    "VOTER_DDL",
    "VOTER_INDEXES",
    "VOTER_SEQUENCE",
    "Voter",
]
