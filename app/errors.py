"""Domain errors - every failure the core reports is one of these."""


class ElectionLedgerError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(ElectionLedgerError):
    """Malformed arguments."""


class ReferenceNotFound(ElectionLedgerError):
    """A referenced entity does not exist."""

    def __init__(self, entity_kind: str, entity_id: int | None = None):
        self.entity_kind = entity_kind
        self.entity_id = entity_id
        label = entity_kind.replace("_", " ").capitalize()
        super().__init__(f"{label} not found" if entity_id is None else f"{label} {entity_id} not found")


class CandidateNotInElection(ElectionLedgerError):
    """Candidate is not registered in the election."""

    def __init__(self, candidate_id: int, election_id: int):
        self.candidate_id = candidate_id
        self.election_id = election_id
        super().__init__(f"Candidate {candidate_id} is not participating in election {election_id}")


class ElectionNotActive(ElectionLedgerError):
    """Election is closed for voting."""

    def __init__(self, election_id: int):
        self.election_id = election_id
        super().__init__(f"Election {election_id} is not active")


class DuplicateVote(ElectionLedgerError):
    """Voter already holds a valid vote in the election."""

    def __init__(self, voter_id: int, election_id: int):
        self.voter_id = voter_id
        self.election_id = election_id
        super().__init__(f"Voter {voter_id} has already cast a vote in election {election_id}")


class ConcurrentConflict(ElectionLedgerError):
    """A competing write won the race; the whole call may be retried."""


class StorageError(ElectionLedgerError):
    """Storage collaborator failure."""


class StorageTimeout(StorageError):
    """Storage call exceeded its time bound."""


class StorageUnavailable(StorageError):
    """Storage could not be reached or failed internally."""
