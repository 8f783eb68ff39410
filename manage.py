#!/usr/bin/env python3
"""
Initialize the election database, check the ledger and precompute summaries.

Usage:
    python manage.py              # Init tables, validate, precompute
    python manage.py --validate   # Check ledger integrity only
    python manage.py --recompute  # Recompute cached summaries only
    python manage.py --recompute --force   # Drop the cache first
"""

import sys

from app.container import container
from app.repositories import CacheRepository, VoteRepository, open_db
from settings import DB_PATH
from settings.logging import setup_logging

logger = setup_logging(to_file=True)


def run_validation() -> bool:
    """Print a ledger integrity report; True when no issues were found."""
    issues = VoteRepository(read_only=True).integrity_issues()

    print("\n" + "=" * 60)
    print("LEDGER VALIDATION REPORT")
    print("=" * 60)
    for name, count in issues.items():
        status = "ok" if count == 0 else "FAIL"
        print(f"  {name:<26} {count:>8,}  {status}")

    all_valid = not any(issues.values())
    print("=" * 60)
    print("All checks passed" if all_valid else "Ledger has integrity issues")
    print("=" * 60 + "\n")
    return all_valid


def precompute_summaries(force: bool = False) -> None:
    """Warm the result cache with every summary."""
    if force:
        CacheRepository(read_only=False).clear()
    container.init()
    container.aggregation.precompute_all()


def main():
    args = sys.argv[1:]
    unknown = [a for a in args if a not in ("--validate", "--recompute", "--force", "-f")]
    if unknown:
        print(__doc__)
        sys.exit(1)

    open_db(DB_PATH)
    logger.info("Database ready: {}", DB_PATH)

    if "--validate" in args:
        sys.exit(0 if run_validation() else 1)

    force = "--force" in args or "-f" in args
    if "--recompute" in args:
        logger.info("Recomputing summaries only...")
        precompute_summaries(force=force)
        return

    logger.info("Running validation...")
    run_validation()

    logger.info("Precomputing summaries...")
    precompute_summaries(force=force)


if __name__ == "__main__":
    main()
