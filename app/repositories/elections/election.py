"""Election repository."""

from datetime import date

from app.models.elections import Election
from app.repositories.common.entity import EntityRepository


class ElectionRepository(EntityRepository):
    """Repository for elections and their candidate rosters."""

    table = "election"
    entity = Election

    def find_active(self) -> list[Election]:
        return self._rows("WHERE is_active")

    def find_by_type(self, election_type: str) -> list[Election]:
        return self.find_by(election_type=election_type)

    def find_by_date_between(self, start: date, end: date) -> list[Election]:
        return self._rows("WHERE election_date BETWEEN ? AND ?", [start, end])

    def find_by_candidate(self, candidate_id: int) -> list[Election]:
        return self._rows(
            "WHERE id IN (SELECT election_id FROM election_candidate WHERE candidate_id = ?)",
            [candidate_id],
        )

    def candidate_ids(self, election_id: int) -> list[int]:
        rows = self.fetchall(
            "SELECT candidate_id FROM election_candidate WHERE election_id = ? ORDER BY 1",
            [election_id],
        )
        return [r[0] for r in rows]

    def has_candidate(self, election_id: int, candidate_id: int) -> bool:
        """Check roster membership."""
        row = self.fetchone(
            "SELECT 1 FROM election_candidate WHERE election_id = ? AND candidate_id = ?",
            [election_id, candidate_id],
        )
        return row is not None

    def set_candidates(self, election_id: int, candidate_ids: list[int]) -> None:
        """Replace the election's candidate roster."""
        self._replace_links("election_candidate", "election_id", election_id, "candidate_id", candidate_ids)

    def delete(self, entity_id: int) -> bool:
        self._require_writable()
        self.execute("DELETE FROM election_candidate WHERE election_id = ?", [entity_id])
        return super().delete(entity_id)
