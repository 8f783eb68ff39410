"""Votes API."""

from web.api.votes.views import (
    cast_vote,
    get_vote,
    list_votes,
    update_vote_validity,
)

__all__ = [
    "cast_vote",
    "update_vote_validity",
    "get_vote",
    "list_votes",
]
