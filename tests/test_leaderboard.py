"""
Unit tests for round robin standings.
"""
import pytest
import random
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from core.leaderboard import calculate_leaderboard
from core.models import Match, Player, Round
from core.round_robin import generate_round_robin
from core.scoring import record_result


def _fixed_rounds():
    """Two hand-built rounds with known teams."""
    return [
        Round([
            Match(team1=("P1", "P2"), team2=("P3", "P4")),
            Match(team1=("P5", "P6"), team2=("P7", "P8")),
        ]),
        Round([
            Match(team1=("P1", "P3"), team2=("P5", "P7")),
            Match(team1=("P2", "P4"), team2=("P6", "P8")),
        ]),
    ]


def _by_id(stats):
    return {s.id: s for s in stats}


class TestCalculateLeaderboard:
    """Tests for calculate_leaderboard."""

    def test_all_incomplete_gives_zero_stats(self, players, player_ids):
        rounds = generate_round_robin(player_ids)
        stats = calculate_leaderboard(players, rounds)
        assert len(stats) == 8
        for s in stats:
            assert (s.wins, s.points_scored, s.points_allowed, s.point_differential) == (0, 0, 0, 0)

    def test_round_one_scenario(self, players):
        """Round 1 scored 11-7 and 11-9: both winning pairs get a win each."""
        rounds = _fixed_rounds()
        record_result(rounds[0].matches[0], 11, 7)
        record_result(rounds[0].matches[1], 11, 9)

        stats = _by_id(calculate_leaderboard(players, rounds))
        for winner in ("P1", "P2", "P5", "P6"):
            assert stats[winner].wins == 1
        for loser in ("P3", "P4", "P7", "P8"):
            assert stats[loser].wins == 0
        assert stats["P1"].points_scored == 11
        assert stats["P1"].points_allowed == 7
        assert stats["P3"].points_scored == 7
        assert stats["P3"].points_allowed == 11
        assert stats["P8"].point_differential == -2

    def test_incomplete_matches_are_skipped(self, players):
        rounds = _fixed_rounds()
        record_result(rounds[0].matches[0], 11, 7)
        rounds[0].matches[1].score1 = 5  # half-entered, no winner

        stats = _by_id(calculate_leaderboard(players, rounds))
        assert stats["P5"].points_scored == 0
        assert stats["P7"].points_allowed == 0

    def test_ranking_by_wins_then_differential(self, players):
        rounds = _fixed_rounds()
        record_result(rounds[0].matches[0], 11, 7)   # P1 P2 beat P3 P4
        record_result(rounds[0].matches[1], 11, 9)   # P5 P6 beat P7 P8
        record_result(rounds[1].matches[0], 11, 2)   # P1 P3 beat P5 P7
        record_result(rounds[1].matches[1], 3, 11)   # P6 P8 beat P2 P4

        ranked = calculate_leaderboard(players, rounds)
        wins = [s.wins for s in ranked]
        assert wins == sorted(wins, reverse=True)
        # P1 has two wins and the best differential
        assert ranked[0].id == "P1"
        for a, b in zip(ranked, ranked[1:]):
            if a.wins == b.wins:
                assert a.point_differential >= b.point_differential

    def test_points_scored_equals_points_allowed(self, players, player_ids):
        rng = random.Random(11)
        rounds = generate_round_robin(player_ids, rng)
        for rnd in rounds:
            for match in rnd.matches:
                low = rng.randint(0, 12)
                high = low + rng.randint(1, 5)
                if rng.random() < 0.5:
                    record_result(match, high, low)
                else:
                    record_result(match, low, high)

        stats = calculate_leaderboard(players, rounds)
        assert sum(s.points_scored for s in stats) == sum(s.points_allowed for s in stats)
        assert sum(s.wins for s in stats) == 7 * 2 * 2

    def test_idempotent_and_pure(self, players):
        rounds = _fixed_rounds()
        record_result(rounds[0].matches[0], 11, 7)
        before = [r.to_dict() for r in rounds]

        first = calculate_leaderboard(players, rounds)
        second = calculate_leaderboard(players, rounds)
        assert [s.to_dict() for s in first] == [s.to_dict() for s in second]
        assert [r.to_dict() for r in rounds] == before

    def test_reflects_score_corrections(self, players):
        rounds = _fixed_rounds()
        record_result(rounds[0].matches[0], 11, 7)
        assert _by_id(calculate_leaderboard(players, rounds))["P1"].wins == 1

        record_result(rounds[0].matches[0], 7, 11)
        stats = _by_id(calculate_leaderboard(players, rounds))
        assert stats["P1"].wins == 0
        assert stats["P3"].wins == 1

    def test_duplicate_names_keep_separate_stats(self):
        """Stats are joined on player id, not display name."""
        players = [Player(id=f"P{i}", name="Sam" if i in (1, 3) else f"N{i}") for i in range(1, 9)]
        rounds = _fixed_rounds()
        record_result(rounds[0].matches[0], 11, 7)

        stats = _by_id(calculate_leaderboard(players, rounds))
        assert stats["P1"].wins == 1
        assert stats["P3"].wins == 0
        assert stats["P1"].name == stats["P3"].name == "Sam"
