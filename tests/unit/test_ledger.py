"""Tests for ledger integrity checks."""

from app.container import container


class TestIntegrity:
    def test_healthy_ledger(self, admission, world):
        for voter in world.voters[:3]:
            admission.cast_vote(voter.id, world.c1.id, world.election.id, world.station.id)
        assert not any(container._vote_repo.integrity_issues().values())

    def test_dangling_references_reported(self, admission, registry, world):
        vote = admission.cast_vote(world.voters[0].id, world.c1.id, world.election.id, world.station.id)
        registry.update_election(world.election.id, candidate_ids=[world.c2.id])
        container._vote_repo.execute("DELETE FROM polling_station WHERE id = ?", [vote.polling_station_id])
        issues = container._vote_repo.integrity_issues()
        assert issues["unknown_polling_station"] == 1
        assert issues["candidate_off_roster"] == 1
        assert issues["duplicate_valid_ballots"] == 0
