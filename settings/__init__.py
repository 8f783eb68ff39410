"""Application settings."""

import os
from pathlib import Path

# Database
DB_PATH = os.getenv("ELECTION_DB_PATH", "election.duckdb")

# Logging
LOG_DIR = Path(os.getenv("ELECTION_LOG_DIR", "logs"))
LOG_LEVEL = os.getenv("ELECTION_LOG_LEVEL", "INFO")

# Result cache
CACHE_TTL_SECONDS = int(os.getenv("ELECTION_CACHE_TTL", "600"))

# Storage and locking bounds (seconds)
STORAGE_TIMEOUT = float(os.getenv("ELECTION_STORAGE_TIMEOUT", "2.0"))
VOTE_LOCK_TIMEOUT = float(os.getenv("ELECTION_VOTE_LOCK_TIMEOUT", "5.0"))

# Denominator for election participation; unset means "count active voters"
_eligible = os.getenv("ELECTION_ELIGIBLE_VOTERS")
ELIGIBLE_VOTERS_PER_ELECTION = int(_eligible) if _eligible else None
