TEAM1 = 'team1'
TEAM2 = 'team2'


class Player:
    def __init__(self, id, name):
        self.id = id
        self.name = name

    def to_dict(self):
        return {'id': self.id, 'name': self.name}

    @classmethod
    def from_dict(cls, data):
        return cls(id=data['id'], name=data['name'])

    def __eq__(self, other):
        return isinstance(other, Player) and (self.id, self.name) == (other.id, other.name)

    def __hash__(self):
        return hash((self.id, self.name))

    def __repr__(self):
        return f"Player(id={self.id}, name={self.name})"


class Contest:
    """Shared result fields of anything that gets a score: matches and final games."""

    def __init__(self, score1=None, score2=None, winner=None):
        self.score1 = score1
        self.score2 = score2
        self.winner = winner

    @property
    def is_complete(self):
        return self.score1 is not None and self.score2 is not None and self.winner is not None

    def _result_dict(self):
        return {'score1': self.score1, 'score2': self.score2, 'winner': self.winner}


class Match(Contest):
    """A round-robin doubles match. Teams hold player ids and never change once created."""

    def __init__(self, team1, team2, score1=None, score2=None, winner=None):
        super().__init__(score1, score2, winner)
        self._team1 = tuple(team1)
        self._team2 = tuple(team2)

    @property
    def team1(self):
        return self._team1

    @property
    def team2(self):
        return self._team2

    @property
    def players(self):
        return self._team1 + self._team2

    def to_dict(self):
        return {'team1': list(self.team1), 'team2': list(self.team2), **self._result_dict()}

    @classmethod
    def from_dict(cls, data):
        return cls(team1=data['team1'], team2=data['team2'],
                   score1=data.get('score1'), score2=data.get('score2'),
                   winner=data.get('winner'))

    def __repr__(self):
        return (f"Match(team1={self.team1}, team2={self.team2}, "
                f"score={self.score1}-{self.score2}, winner={self.winner})")


class Round:
    def __init__(self, matches):
        self.matches = list(matches)

    @property
    def players(self):
        return [p for match in self.matches for p in match.players]

    def to_dict(self):
        return {'matches': [m.to_dict() for m in self.matches]}

    @classmethod
    def from_dict(cls, data):
        return cls(matches=[Match.from_dict(m) for m in data['matches']])

    def __repr__(self):
        return f"Round(matches={self.matches})"


class Team:
    """A drafted bracket team with two player slots (None while a slot is empty)."""

    def __init__(self, name, players=None):
        self.name = name
        self.players = list(players) if players is not None else [None, None]

    @property
    def is_full(self):
        return all(p is not None for p in self.players)

    def to_dict(self):
        return {'name': self.name, 'players': list(self.players)}

    @classmethod
    def from_dict(cls, data):
        return cls(name=data['name'], players=data.get('players'))

    def __eq__(self, other):
        return isinstance(other, Team) and self.name == other.name and self.players == other.players

    def __hash__(self):
        return hash((self.name, tuple(self.players)))

    def __repr__(self):
        return f"Team(name={self.name}, players={self.players})"


class BracketMatch(Contest):
    def __init__(self, team1, team2, score1=None, score2=None, winner=None):
        super().__init__(score1, score2, winner)
        self.team1 = team1
        self.team2 = team2

    @property
    def winning_team(self):
        if self.winner == TEAM1:
            return self.team1
        if self.winner == TEAM2:
            return self.team2
        return None

    def to_dict(self):
        return {'team1': self.team1.to_dict(), 'team2': self.team2.to_dict(), **self._result_dict()}

    @classmethod
    def from_dict(cls, data):
        return cls(team1=Team.from_dict(data['team1']), team2=Team.from_dict(data['team2']),
                   score1=data.get('score1'), score2=data.get('score2'),
                   winner=data.get('winner'))

    def __repr__(self):
        return (f"BracketMatch(team1={self.team1.name}, team2={self.team2.name}, "
                f"score={self.score1}-{self.score2}, winner={self.winner})")


class Game(Contest):
    """One game of the best-of-three final. Sides are the two finalists."""

    def to_dict(self):
        return self._result_dict()

    @classmethod
    def from_dict(cls, data):
        return cls(score1=data.get('score1'), score2=data.get('score2'), winner=data.get('winner'))

    def __repr__(self):
        return f"Game(score={self.score1}-{self.score2}, winner={self.winner})"


class PlayerStats:
    def __init__(self, id, name, wins=0, points_scored=0, points_allowed=0):
        self.id = id
        self.name = name
        self.wins = wins
        self.points_scored = points_scored
        self.points_allowed = points_allowed
        self.point_differential = points_scored - points_allowed

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'wins': self.wins,
            'pointsScored': self.points_scored,
            'pointsAllowed': self.points_allowed,
            'pointDifferential': self.point_differential,
        }

    def __eq__(self, other):
        return isinstance(other, PlayerStats) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"PlayerStats(name={self.name}, wins={self.wins}, "
                f"points={self.points_scored}-{self.points_allowed})")
