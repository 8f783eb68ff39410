"""API errors and validation helpers."""

from app.errors import (
    CandidateNotInElection,
    ConcurrentConflict,
    DuplicateVote,
    ElectionLedgerError,
    ElectionNotActive,
    ReferenceNotFound,
    StorageTimeout,
    StorageUnavailable,
    ValidationError,
)

# Domain error -> HTTP status; first matching class wins
STATUS_CODES: list[tuple[type[Exception], int]] = [
    (ReferenceNotFound, 404),
    (DuplicateVote, 409),
    (ConcurrentConflict, 409),
    (CandidateNotInElection, 400),
    (ElectionNotActive, 400),
    (ValidationError, 400),
    (StorageTimeout, 504),
    (StorageUnavailable, 503),
]


def http_status(exc: Exception) -> int:
    """HTTP status code for an error raised by a view."""
    for error_type, status in STATUS_CODES:
        if isinstance(exc, error_type):
            return status
    if isinstance(exc, ElectionLedgerError):
        return 400
    return 500


def error_body(exc: Exception) -> dict:
    """JSON body for an error response."""
    message = exc.message if isinstance(exc, ElectionLedgerError) else "Internal server error"
    return {"status": http_status(exc), "error": type(exc).__name__, "message": message}


def validate_id(value: int, name: str) -> None:
    """Validate an entity id is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"Invalid {name}: {value!r}. Must be a positive integer")
