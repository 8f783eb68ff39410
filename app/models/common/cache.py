"""Result cache table - shared across all domains."""

CACHE_DDL = """
CREATE TABLE IF NOT EXISTS result_cache (
    key VARCHAR PRIMARY KEY,
    data JSON NOT NULL,
    scopes VARCHAR[] NOT NULL,
    computed_at TIMESTAMP NOT NULL,
    expires_at TIMESTAMP NOT NULL
)
"""
