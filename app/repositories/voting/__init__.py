"""Voting repositories - the vote ledger."""

from app.repositories.voting.ledger import VoteRepository

__all__ = [
    "VoteRepository",
]
