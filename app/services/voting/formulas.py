"""Pure math formulas - no dependencies, easily testable."""


def rate(part: int, whole: int | None) -> float:
    """part / whole, 0.0 for an empty or missing denominator."""
    return part / whole if whole else 0.0


def vote_share(votes: int, total: int) -> float:
    """Share of total votes in percent (0-100)."""
    return round(votes * 100.0 / total, 2) if total else 0.0


def rank_by_votes(tally: list[tuple[int, int]]) -> list[tuple[int, int]]:
    """Sort (candidate_id, votes) by votes desc, candidate id asc."""
    return sorted(tally, key=lambda t: (-t[1], t[0]))
