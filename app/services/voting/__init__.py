"""Voting services - admission, eligibility and aggregation."""

from app.services.voting.admission import VoteAdmissionService
from app.services.voting.aggregation import AggregationEngine
from app.services.voting.eligibility import Eligibility, EligibilityChecker, Reason

__all__ = [
    "AggregationEngine",
    "Eligibility",
    "EligibilityChecker",
    "Reason",
    "VoteAdmissionService",
]
