"""
Team draft and the four-team single elimination bracket.

Semifinals are seeded Team 1 vs Team 4 and Team 2 vs Team 3; the two
winners play a best-of-three final.
"""
from typing import List, Optional, Sequence

from core.errors import IncompletePrerequisite
from core.models import TEAM1, TEAM2, BracketMatch, Game, Team
from core.scoring import clear_result, is_complete, record_result
from core.stage_gate import are_semifinals_complete, is_final_complete

BRACKET_TEAMS = 4
TEAM_SIZE = 2
FINAL_GAMES = 3
GAMES_TO_WIN = 2
DEFAULT_TEAM_NAMES = [f"Team {i}" for i in range(1, BRACKET_TEAMS + 1)]

SEEDING_PENDING = 'seeding_pending'
SEMIFINALS_IN_PROGRESS = 'semifinals_in_progress'
SEMIFINALS_COMPLETE = 'semifinals_complete'
FINAL_IN_PROGRESS = 'final_in_progress'
CHAMPION_DECIDED = 'champion_decided'


class Draft:
    """Four teams of two slots plus the pool of players not slotted yet.

    The pool is derived from the slots, so a player is always in exactly one
    place.
    """

    def __init__(self, players: Sequence[str], teams: Optional[List[Team]] = None,
                 team_names: Optional[List[str]] = None):
        self.players = list(players)
        if teams is None:
            names = team_names or DEFAULT_TEAM_NAMES
            if len(names) != BRACKET_TEAMS:
                raise ValueError(f"A draft needs exactly {BRACKET_TEAMS} team names, got {len(names)}")
            teams = [Team(name=name) for name in names]
        self.teams = teams

    @property
    def available(self) -> List[str]:
        slotted = {p for team in self.teams for p in team.players if p is not None}
        return [p for p in self.players if p not in slotted]

    def find(self, player_id: str):
        """Return (team_index, slot_index) for a slotted player, or None."""
        for t, team in enumerate(self.teams):
            for s, occupant in enumerate(team.players):
                if occupant == player_id:
                    return t, s
        return None

    def _check_slot(self, team_index: int, slot_index: int):
        if not 0 <= team_index < len(self.teams):
            raise ValueError(f"No team at index {team_index}")
        if not 0 <= slot_index < TEAM_SIZE:
            raise ValueError(f"No slot at index {slot_index}")

    def assign(self, player_id: str, team_index: int, slot_index: int) -> bool:
        """Put a player into an empty slot, moving them out of any slot they held.

        Returns False (and changes nothing) when the target slot is taken.
        """
        if player_id not in self.players:
            raise ValueError(f"Unknown player {player_id!r}")
        self._check_slot(team_index, slot_index)
        if self.teams[team_index].players[slot_index] is not None:
            return False

        previous = self.find(player_id)
        if previous is not None:
            self.teams[previous[0]].players[previous[1]] = None
        self.teams[team_index].players[slot_index] = player_id
        return True

    def vacate(self, team_index: int, slot_index: int) -> Optional[str]:
        """Empty a slot; the player goes back to the available pool."""
        self._check_slot(team_index, slot_index)
        player_id = self.teams[team_index].players[slot_index]
        self.teams[team_index].players[slot_index] = None
        return player_id

    def is_complete(self) -> bool:
        return len(self.teams) == BRACKET_TEAMS and all(team.is_full for team in self.teams)

    def to_dict(self):
        return {
            'teams': [team.to_dict() for team in self.teams],
            'available': self.available,
        }

    @classmethod
    def from_dict(cls, players, data):
        return cls(players, teams=[Team.from_dict(t) for t in data['teams']])


def seed_semifinals(teams: List[Team]) -> List[BracketMatch]:
    """Create the two semifinals: teams[0] vs teams[3], teams[1] vs teams[2]."""
    if len(teams) != BRACKET_TEAMS or not all(team.is_full for team in teams):
        raise IncompletePrerequisite("Semifinals need four teams with two players each")
    return [
        BracketMatch(team1=teams[0], team2=teams[3]),
        BracketMatch(team1=teams[1], team2=teams[2]),
    ]


def finalists(semifinals: List[BracketMatch]) -> List[Team]:
    """Return the semifinal winners in bracket order."""
    if not semifinals or not all(is_complete(m) for m in semifinals):
        raise IncompletePrerequisite("Both semifinals must be scored before the final")
    return [m.winning_team for m in semifinals]


class Final:
    """Best-of-three final between two finalist teams."""

    def __init__(self, team1: Team, team2: Team, games: Optional[List[Game]] = None):
        self.team1 = team1
        self.team2 = team2
        self.games = games if games is not None else [Game() for _ in range(FINAL_GAMES)]

    def game_wins(self, side: str) -> int:
        return sum(1 for g in self.games if is_complete(g) and g.winner == side)

    @property
    def champion(self) -> Optional[Team]:
        if self.game_wins(TEAM1) >= GAMES_TO_WIN:
            return self.team1
        if self.game_wins(TEAM2) >= GAMES_TO_WIN:
            return self.team2
        return None

    def can_record(self, index: int) -> bool:
        """A game takes a score once the games before it are played, and
        unplayed games close for good when a champion exists."""
        if not 0 <= index < len(self.games):
            return False
        if not all(is_complete(g) for g in self.games[:index]):
            return False
        if self.champion is not None and not is_complete(self.games[index]):
            return False
        return True

    def record_game(self, index: int, score1, score2) -> bool:
        """Score one game. Returns False when the game is not open for scoring."""
        if not self.can_record(index):
            return False
        game = Game(self.games[index].score1, self.games[index].score2, self.games[index].winner)
        record_result(game, score1, score2)

        # A correction must not leave a later game scored past a decided final.
        trial = self.games[:index] + [game] + self.games[index + 1:]
        decided_after = _decided_at(trial)
        if decided_after is not None and any(is_complete(g) for g in trial[decided_after + 1:]):
            for later in trial[decided_after + 1:]:
                clear_result(later)
        self.games = trial
        return True

    def to_dict(self):
        return {
            'team1': self.team1.to_dict(),
            'team2': self.team2.to_dict(),
            'games': [g.to_dict() for g in self.games],
            'wins': {TEAM1: self.game_wins(TEAM1), TEAM2: self.game_wins(TEAM2)},
            'champion': self.champion.to_dict() if self.champion else None,
        }


def _decided_at(games: List[Game]) -> Optional[int]:
    """Index of the game that gave a side its second win, if any."""
    wins = {TEAM1: 0, TEAM2: 0}
    for i, game in enumerate(games):
        if not is_complete(game):
            return None
        wins[game.winner] += 1
        if wins[game.winner] >= GAMES_TO_WIN:
            return i
    return None


def bracket_phase(semifinals: Optional[List[BracketMatch]], final: Optional[Final]) -> str:
    """Derive the bracket phase purely from what has been recorded."""
    if final is not None:
        return CHAMPION_DECIDED if is_final_complete(final) else FINAL_IN_PROGRESS
    if semifinals:
        if are_semifinals_complete(semifinals):
            return SEMIFINALS_COMPLETE
        return SEMIFINALS_IN_PROGRESS
    return SEEDING_PENDING
