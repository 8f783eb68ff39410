"""Candidate repository."""

from app.models.elections import Candidate
from app.repositories.common.entity import EntityRepository


class CandidateRepository(EntityRepository):
    """Repository for candidates and their election memberships."""

    table = "candidate"
    entity = Candidate

    def find_by_party(self, party: str) -> list[Candidate]:
        return self.find_by(party=party)

    def find_by_election(self, election_id: int) -> list[Candidate]:
        return self._rows(
            "WHERE id IN (SELECT candidate_id FROM election_candidate WHERE election_id = ?)",
            [election_id],
        )

    def election_ids(self, candidate_id: int) -> list[int]:
        rows = self.fetchall(
            "SELECT election_id FROM election_candidate WHERE candidate_id = ? ORDER BY 1",
            [candidate_id],
        )
        return [r[0] for r in rows]

    def set_elections(self, candidate_id: int, election_ids: list[int]) -> None:
        """Replace the candidate's election memberships."""
        self._replace_links("election_candidate", "candidate_id", candidate_id, "election_id", election_ids)

    def delete(self, entity_id: int) -> bool:
        self._require_writable()
        self.execute("DELETE FROM election_candidate WHERE candidate_id = ?", [entity_id])
        return super().delete(entity_id)
