"""Tests for formulas module."""

from app.services.voting import formulas


class TestRate:
    def test_simple(self):
        assert formulas.rate(37, 100) == 0.37

    def test_zero_denominator(self):
        assert formulas.rate(5, 0) == 0.0

    def test_missing_denominator(self):
        assert formulas.rate(5, None) == 0.0

    def test_may_exceed_one(self):
        assert formulas.rate(150, 100) == 1.5


class TestVoteShare:
    def test_percent(self):
        assert formulas.vote_share(5, 8) == 62.5
        assert formulas.vote_share(3, 8) == 37.5

    def test_rounded(self):
        assert formulas.vote_share(1, 3) == 33.33

    def test_no_votes(self):
        assert formulas.vote_share(0, 0) == 0.0


class TestRankByVotes:
    def test_most_votes_first(self):
        assert formulas.rank_by_votes([(1, 3), (2, 5)]) == [(2, 5), (1, 3)]

    def test_ties_by_id(self):
        assert formulas.rank_by_votes([(9, 2), (4, 2), (7, 0)]) == [(4, 2), (9, 2), (7, 0)]

    def test_empty(self):
        assert formulas.rank_by_votes([]) == []
