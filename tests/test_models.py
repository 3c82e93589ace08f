"""
Unit tests for the data models.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from core.models import TEAM1, TEAM2, BracketMatch, Game, Match, Player, PlayerStats, Round, Team


class TestPlayer:
    """Tests for the Player model."""

    def test_player_round_trip(self):
        player = Player(id="P1", name="Ann")
        assert Player.from_dict(player.to_dict()) == player

    def test_players_with_same_name_differ_by_id(self):
        assert Player(id="P1", name="Sam") != Player(id="P2", name="Sam")

    def test_player_repr(self):
        repr_str = repr(Player(id="P3", name="Cid"))
        assert "P3" in repr_str
        assert "Cid" in repr_str


class TestMatch:
    """Tests for the round robin Match model."""

    def test_new_match_is_unscored(self):
        match = Match(team1=("P1", "P2"), team2=("P3", "P4"))
        assert match.score1 is None
        assert match.score2 is None
        assert match.winner is None
        assert not match.is_complete

    def test_teams_are_immutable(self):
        """Team compositions cannot be reassigned after creation."""
        match = Match(team1=["P1", "P2"], team2=["P3", "P4"])
        assert match.team1 == ("P1", "P2")
        with pytest.raises(AttributeError):
            match.team1 = ("P5", "P6")

    def test_match_players(self):
        match = Match(team1=("P1", "P2"), team2=("P3", "P4"))
        assert match.players == ("P1", "P2", "P3", "P4")

    def test_match_dict_round_trip(self):
        match = Match(team1=("P1", "P2"), team2=("P3", "P4"), score1=11, score2=7, winner=TEAM1)
        data = match.to_dict()
        assert data == {'team1': ['P1', 'P2'], 'team2': ['P3', 'P4'],
                        'score1': 11, 'score2': 7, 'winner': 'team1'}
        restored = Match.from_dict(data)
        assert restored.team1 == match.team1
        assert restored.is_complete


class TestRound:
    """Tests for the Round model."""

    def test_round_players(self):
        rnd = Round([
            Match(team1=("P1", "P2"), team2=("P3", "P4")),
            Match(team1=("P5", "P6"), team2=("P7", "P8")),
        ])
        assert sorted(rnd.players) == [f"P{i}" for i in range(1, 9)]

    def test_round_from_dict(self):
        rnd = Round.from_dict({'matches': [
            {'team1': ['P1', 'P2'], 'team2': ['P3', 'P4']},
            {'team1': ['P5', 'P6'], 'team2': ['P7', 'P8']},
        ]})
        assert len(rnd.matches) == 2
        assert rnd.matches[1].team2 == ("P7", "P8")


class TestTeam:
    """Tests for the bracket Team model."""

    def test_team_starts_with_two_empty_slots(self):
        team = Team(name="Team 1")
        assert team.players == [None, None]
        assert not team.is_full

    def test_full_team(self):
        assert Team(name="Team 1", players=["P1", "P2"]).is_full

    def test_team_repr(self):
        repr_str = repr(Team(name="Team 1", players=["P1", None]))
        assert "Team 1" in repr_str
        assert "P1" in repr_str


class TestBracketMatch:
    """Tests for BracketMatch and Game."""

    def test_winning_team(self):
        a = Team(name="A", players=["P1", "P2"])
        d = Team(name="D", players=["P7", "P8"])
        match = BracketMatch(team1=a, team2=d, score1=10, score2=15, winner=TEAM2)
        assert match.winning_team == d

    def test_winning_team_unset(self):
        match = BracketMatch(team1=Team(name="A"), team2=Team(name="B"))
        assert match.winning_team is None

    def test_bracket_match_round_trip(self):
        a = Team(name="A", players=["P1", "P2"])
        d = Team(name="D", players=["P7", "P8"])
        match = BracketMatch.from_dict(BracketMatch(a, d, 15, 10, TEAM1).to_dict())
        assert match.team1 == a
        assert match.winner == TEAM1

    def test_game_round_trip(self):
        game = Game.from_dict({'score1': 11, 'score2': 8, 'winner': 'team1'})
        assert game.is_complete
        assert game.to_dict() == {'score1': 11, 'score2': 8, 'winner': 'team1'}


class TestPlayerStats:
    """Tests for PlayerStats."""

    def test_point_differential(self):
        stats = PlayerStats(id="P1", name="Ann", wins=2, points_scored=30, points_allowed=21)
        assert stats.point_differential == 9

    def test_serialized_keys(self):
        data = PlayerStats(id="P1", name="Ann").to_dict()
        assert set(data) == {'id', 'name', 'wins', 'pointsScored', 'pointsAllowed', 'pointDifferential'}
