"""Vote ledger repository - the system of record for who voted for whom."""

from datetime import datetime

from loguru import logger

from app.models.voting import Vote, VoteFilter, ballot_key
from app.repositories.base import BaseRepository

_COLUMNS = "id, voter_id, candidate_id, election_id, polling_station_id, timestamp, is_valid"


def _where(flt: VoteFilter, alias: str = "") -> tuple[str, list]:
    """Build a WHERE clause from the filter's non-null fields."""
    p = f"{alias}." if alias else ""
    clauses, params = [], []
    for column in ("voter_id", "candidate_id", "election_id", "polling_station_id", "is_valid"):
        value = getattr(flt, column)
        if value is not None:
            clauses.append(f"{p}{column} = ?")
            params.append(value)
    if flt.start_time is not None:
        clauses.append(f"{p}timestamp >= ?")
        params.append(flt.start_time)
    if flt.end_time is not None:
        clauses.append(f"{p}timestamp <= ?")
        params.append(flt.end_time)
    return ("WHERE " + " AND ".join(clauses) if clauses else ""), params


class VoteRepository(BaseRepository):
    """Repository for the vote ledger."""

    def __init__(self, read_only: bool = False, **kwargs):
        super().__init__(read_only=read_only, **kwargs)

    # ========== Single votes ==========

    def get(self, vote_id: int) -> Vote | None:
        row = self.fetchone(f"SELECT {_COLUMNS} FROM vote WHERE id = ?", [vote_id])
        return Vote.from_row(row) if row else None

    def has_valid_vote(self, voter_id: int, election_id: int) -> bool:
        """Check the one-valid-vote-per-election rule."""
        row = self.fetchone(
            "SELECT 1 FROM vote WHERE voter_id = ? AND election_id = ? AND is_valid",
            [voter_id, election_id],
        )
        return row is not None

    def insert(
        self,
        voter_id: int,
        candidate_id: int,
        election_id: int,
        polling_station_id: int,
        timestamp: datetime,
    ) -> Vote:
        """Append a valid vote. The unique ballot key rejects a second valid vote."""
        self._require_writable()
        row = self.fetchone(
            f"""
            INSERT INTO vote (voter_id, candidate_id, election_id, polling_station_id,
                              timestamp, is_valid, ballot_key)
            VALUES (?, ?, ?, ?, ?, TRUE, ?)
            RETURNING {_COLUMNS}
            """,
            [voter_id, candidate_id, election_id, polling_station_id, timestamp, ballot_key(voter_id, election_id)],
        )
        vote = Vote.from_row(row)
        logger.debug("Ledger insert: vote {} voter={} election={}", vote.id, voter_id, election_id)
        return vote

    def set_validity(self, vote_id: int, is_valid: bool) -> Vote | None:
        """Toggle the validity flag (and the ballot key with it)."""
        self._require_writable()
        current = self.get(vote_id)
        if current is None:
            return None
        if current.is_valid == is_valid:
            return current
        key = ballot_key(current.voter_id, current.election_id) if is_valid else None
        row = self.fetchone(
            f"UPDATE vote SET is_valid = ?, ballot_key = ? WHERE id = ? RETURNING {_COLUMNS}",
            [is_valid, key, vote_id],
        )
        logger.debug("Ledger update: vote {} is_valid={}", vote_id, is_valid)
        return Vote.from_row(row)

    def delete(self, vote_id: int) -> bool:
        self._require_writable()
        return self.fetchone("DELETE FROM vote WHERE id = ? RETURNING id", [vote_id]) is not None

    # ========== Filtered queries ==========

    def find(self, flt: VoteFilter) -> list[Vote]:
        """Votes matching the filter, ordered by id."""
        where, params = _where(flt)
        rows = self.fetchall(f"SELECT {_COLUMNS} FROM vote {where} ORDER BY id", params)
        return [Vote.from_row(r) for r in rows]

    def count(self, flt: VoteFilter) -> int:
        where, params = _where(flt)
        return self.scalar(f"SELECT COUNT(*) FROM vote {where}", params)

    # ========== Group-by counts ==========

    def counts_by_region(self, flt: VoteFilter) -> list[tuple[int, str, int]]:
        """(region_id, name, votes) via vote -> voter -> region; regions without votes are absent."""
        where, params = _where(flt, "v")
        rows = self.fetchall(
            f"""
            SELECT r.id, r.name, COUNT(*)
            FROM vote v
            JOIN voter vr ON v.voter_id = vr.id
            JOIN region r ON vr.region_id = r.id
            {where}
            GROUP BY r.id, r.name
            ORDER BY r.id
            """,
            params,
        )
        return [(r[0], r[1], int(r[2])) for r in rows]

    def counts_by_district(self, flt: VoteFilter) -> list[tuple[int, str, int]]:
        """(district_id, name, votes) via vote -> voter -> district."""
        where, params = _where(flt, "v")
        rows = self.fetchall(
            f"""
            SELECT d.id, d.name, COUNT(*)
            FROM vote v
            JOIN voter vr ON v.voter_id = vr.id
            JOIN district d ON vr.district_id = d.id
            {where}
            GROUP BY d.id, d.name
            ORDER BY d.id
            """,
            params,
        )
        return [(r[0], r[1], int(r[2])) for r in rows]

    def counts_by_candidate(self, flt: VoteFilter) -> list[tuple[int, str, str, int]]:
        """(candidate_id, first_name, last_name, votes) for candidates with votes."""
        where, params = _where(flt, "v")
        rows = self.fetchall(
            f"""
            SELECT c.id, c.first_name, c.last_name, COUNT(*)
            FROM vote v
            JOIN candidate c ON v.candidate_id = c.id
            {where}
            GROUP BY c.id, c.first_name, c.last_name
            ORDER BY c.id
            """,
            params,
        )
        return [(r[0], r[1], r[2], int(r[3])) for r in rows]

    def candidate_tally(self, election_id: int) -> list[tuple[int, str, str, str | None, int]]:
        """Valid votes per candidate registered in, or voted for in, the election."""
        rows = self.fetchall(
            """
            WITH tally AS (
                SELECT candidate_id, COUNT(*) AS votes
                FROM vote
                WHERE election_id = ? AND is_valid
                GROUP BY candidate_id
            ),
            roster AS (
                SELECT candidate_id FROM election_candidate WHERE election_id = ?
                UNION
                SELECT candidate_id FROM tally
            )
            SELECT c.id, c.first_name, c.last_name, c.party, COALESCE(t.votes, 0)
            FROM roster ro
            JOIN candidate c ON c.id = ro.candidate_id
            LEFT JOIN tally t ON t.candidate_id = c.id
            ORDER BY c.id
            """,
            [election_id, election_id],
        )
        return [(r[0], r[1], r[2], r[3], int(r[4])) for r in rows]

    # ========== Valid-vote totals ==========

    def valid_count_in_region(self, region_id: int, election_id: int | None = None) -> int:
        return self._valid_count_via_voter("region_id", region_id, election_id)

    def valid_count_in_district(self, district_id: int, election_id: int | None = None) -> int:
        return self._valid_count_via_voter("district_id", district_id, election_id)

    def _valid_count_via_voter(self, column: str, unit_id: int, election_id: int | None) -> int:
        query = f"""
            SELECT COUNT(*) FROM vote v
            JOIN voter vr ON v.voter_id = vr.id
            WHERE vr.{column} = ? AND v.is_valid
        """
        params = [unit_id]
        if election_id is not None:
            query += " AND v.election_id = ?"
            params.append(election_id)
        return self.scalar(query, params)

    def valid_count_in_election(self, election_id: int) -> int:
        return self.count(VoteFilter(election_id=election_id, is_valid=True))

    def valid_count_at_station(self, polling_station_id: int) -> int:
        return self.count(VoteFilter(polling_station_id=polling_station_id, is_valid=True))

    # ========== Per-entity rollups ==========

    def unit_rollup(self, unit: str) -> list[tuple[int, str, int, int]]:
        """(id, name, registered voters, valid votes) for every region or district."""
        if unit not in ("region", "district"):
            raise ValueError(f"Unknown unit: {unit}")
        rows = self.fetchall(
            f"""
            SELECT u.id, u.name,
                   (SELECT COUNT(*) FROM voter vr WHERE vr.{unit}_id = u.id),
                   (SELECT COUNT(*) FROM vote v JOIN voter vr ON v.voter_id = vr.id
                     WHERE vr.{unit}_id = u.id AND v.is_valid)
            FROM {unit} u
            ORDER BY u.id
            """
        )
        return [(r[0], r[1], int(r[2]), int(r[3])) for r in rows]

    def station_rollup(self, active_only: bool = False) -> list[tuple[int, str, int | None, int]]:
        """(id, name, capacity, valid votes) per polling station."""
        rows = self.fetchall(
            f"""
            SELECT ps.id, ps.name, ps.capacity,
                   (SELECT COUNT(*) FROM vote v WHERE v.polling_station_id = ps.id AND v.is_valid)
            FROM polling_station ps
            {"WHERE ps.is_active" if active_only else ""}
            ORDER BY ps.id
            """
        )
        return [(r[0], r[1], r[2], int(r[3])) for r in rows]

    def election_rollup(self, active_only: bool = False) -> list[tuple[int, str, bool, int]]:
        """(id, name, is_active, valid votes) per election."""
        rows = self.fetchall(
            f"""
            SELECT e.id, e.name, e.is_active,
                   (SELECT COUNT(*) FROM vote v WHERE v.election_id = e.id AND v.is_valid)
            FROM election e
            {"WHERE e.is_active" if active_only else ""}
            ORDER BY e.id
            """
        )
        return [(r[0], r[1], r[2], int(r[3])) for r in rows]

    def candidate_rollup(self) -> list[tuple[int, str, str, str | None, int]]:
        """(id, first_name, last_name, party, valid votes) per candidate."""
        rows = self.fetchall(
            """
            SELECT c.id, c.first_name, c.last_name, c.party,
                   (SELECT COUNT(*) FROM vote v WHERE v.candidate_id = c.id AND v.is_valid)
            FROM candidate c
            ORDER BY c.id
            """
        )
        return [(r[0], r[1], r[2], r[3], int(r[4])) for r in rows]

    # ========== Integrity ==========

    def integrity_issues(self) -> dict[str, int]:
        """Counts of ledger rows that break a rule; all zero on a healthy ledger."""
        row = self.fetchone(
            """
            SELECT
                (SELECT COUNT(*) FROM (
                    SELECT voter_id, election_id FROM vote WHERE is_valid
                    GROUP BY voter_id, election_id HAVING COUNT(*) > 1
                )),
                (SELECT COUNT(*) FROM vote v WHERE NOT EXISTS (SELECT 1 FROM voter x WHERE x.id = v.voter_id)),
                (SELECT COUNT(*) FROM vote v WHERE NOT EXISTS (SELECT 1 FROM candidate x WHERE x.id = v.candidate_id)),
                (SELECT COUNT(*) FROM vote v WHERE NOT EXISTS (SELECT 1 FROM election x WHERE x.id = v.election_id)),
                (SELECT COUNT(*) FROM vote v
                  WHERE NOT EXISTS (SELECT 1 FROM polling_station x WHERE x.id = v.polling_station_id)),
                (SELECT COUNT(*) FROM vote v WHERE v.is_valid AND NOT EXISTS (
                    SELECT 1 FROM election_candidate ec
                    WHERE ec.election_id = v.election_id AND ec.candidate_id = v.candidate_id
                ))
            """
        )
        names = (
            "duplicate_valid_ballots",
            "unknown_voter",
            "unknown_candidate",
            "unknown_election",
            "unknown_polling_station",
            "candidate_off_roster",
        )
        return dict(zip(names, (int(v) for v in row)))
