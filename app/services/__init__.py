"""Services package - service class exports."""

from app.services.registry import RegistryService
from app.services.voting import AggregationEngine, EligibilityChecker, VoteAdmissionService

__all__ = [
    "AggregationEngine",
    "EligibilityChecker",
    "RegistryService",
    "VoteAdmissionService",
]
