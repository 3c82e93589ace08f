"""
Tournament session context.

A TournamentSession wraps a key-value store and is the single entry point
for every engine operation. Each call loads what it needs from the store,
applies the change and writes the result back, so the store always holds the
latest state.
"""
import logging
from typing import List, Optional

from core.bracket import (SEEDING_PENDING, Draft, Final, bracket_phase, finalists,
                          seed_semifinals)
from core.errors import InvalidPlayerCount, MissingSessionState
from core.leaderboard import calculate_leaderboard
from core.models import BracketMatch, Game, Player, PlayerStats, Round, Team
from core.round_robin import ROUND_ROBIN_PLAYERS, generate_round_robin
from core.scoring import record_result
from core.stage_gate import RoundNavigator, are_all_rounds_complete, are_semifinals_complete

logger = logging.getLogger(__name__)

PLAYERS_KEY = 'players'
ROUNDS_KEY = 'rounds'
CURRENT_ROUND_KEY = 'currentRound'
FURTHEST_ROUND_KEY = 'furthestRound'
DRAFT_KEY = 'draft'
DRAFTED_TEAMS_KEY = 'draftedTeams'
SEMIFINALS_KEY = 'semifinalMatches'
FINALISTS_KEY = 'finalistsTeams'
FINAL_GAMES_KEY = 'finalGames'
CHAMPION_KEY = 'champion'

SESSION_KEYS = [
    PLAYERS_KEY, ROUNDS_KEY, CURRENT_ROUND_KEY, FURTHEST_ROUND_KEY, DRAFT_KEY, DRAFTED_TEAMS_KEY,
    SEMIFINALS_KEY, FINALISTS_KEY, FINAL_GAMES_KEY, CHAMPION_KEY,
]

BRACKET_KEYS = [SEMIFINALS_KEY, FINALISTS_KEY, FINAL_GAMES_KEY, CHAMPION_KEY]

SETUP = 'setup'
PLAYERS_ENTERED = 'players_entered'
ROUND_ROBIN = 'round_robin'
ROUND_ROBIN_COMPLETE = 'round_robin_complete'


def make_players(names: List[str]) -> List[Player]:
    """Strip names, drop blanks and give each player a stable id in entry order."""
    cleaned = [name.strip() for name in names if isinstance(name, str) and name.strip()]
    if len(cleaned) != ROUND_ROBIN_PLAYERS:
        raise InvalidPlayerCount(ROUND_ROBIN_PLAYERS, len(cleaned))
    return [Player(id=f'P{i}', name=name) for i, name in enumerate(cleaned, start=1)]


class TournamentSession:
    def __init__(self, store, rng=None):
        self.store = store
        self.rng = rng

    def _require(self, key):
        value = self.store.get(key)
        if value is None:
            raise MissingSessionState(key)
        return value

    # Lifecycle

    def start(self, names: List[str]) -> List[Player]:
        """Begin a new tournament with eight player names."""
        players = make_players(names)
        self.reset()
        self.store.set(PLAYERS_KEY, [p.to_dict() for p in players])
        logger.info('Started tournament with players: %s', ', '.join(p.name for p in players))
        return players

    def reset(self):
        """Clear every session key. Safe to call on an empty store."""
        for key in SESSION_KEYS:
            self.store.remove(key)
        logger.info('Session reset')

    def load_players(self) -> List[Player]:
        return [Player.from_dict(p) for p in self._require(PLAYERS_KEY)]

    def player_names(self) -> dict:
        return {p.id: p.name for p in self.load_players()}

    # Round robin

    def load_rounds(self) -> List[Round]:
        """Load the schedule, generating and saving it on first use."""
        players = self.load_players()
        data = self.store.get(ROUNDS_KEY)
        if data is not None:
            return [Round.from_dict(r) for r in data]

        rounds = generate_round_robin([p.id for p in players], self.rng)
        self._save_rounds(rounds)
        self.store.set(CURRENT_ROUND_KEY, 0)
        self.store.set(FURTHEST_ROUND_KEY, 0)
        logger.info('Generated round robin schedule of %d rounds', len(rounds))
        return rounds

    def _save_rounds(self, rounds: List[Round]):
        self.store.set(ROUNDS_KEY, [r.to_dict() for r in rounds])

    def navigator(self) -> RoundNavigator:
        rounds = self.load_rounds()
        return RoundNavigator(rounds, self.store.get(CURRENT_ROUND_KEY) or 0,
                              self.store.get(FURTHEST_ROUND_KEY))

    def record_round_score(self, round_index: int, match_index: int, score1, score2) -> bool:
        """Score a round robin match. Returns False if its round is not open yet.

        Raises:
            InvalidScore: If the scores are rejected; nothing is saved.
        """
        nav = self.navigator()
        if not 0 <= round_index < len(nav.rounds):
            raise ValueError(f"No round at index {round_index}")
        matches = nav.rounds[round_index].matches
        if not 0 <= match_index < len(matches):
            raise ValueError(f"No match at index {match_index}")
        if not nav.can_record_round(round_index):
            return False

        record_result(matches[match_index], score1, score2)
        self._save_rounds(nav.rounds)
        return True

    def advance_round(self) -> bool:
        nav = self.navigator()
        moved = nav.advance()
        if moved:
            self.store.set(CURRENT_ROUND_KEY, nav.current)
            self.store.set(FURTHEST_ROUND_KEY, nav.furthest)
        return moved

    def previous_round(self) -> bool:
        nav = self.navigator()
        moved = nav.back()
        if moved:
            self.store.set(CURRENT_ROUND_KEY, nav.current)
        return moved

    def leaderboard(self) -> List[PlayerStats]:
        players = self.load_players()
        rounds = [Round.from_dict(r) for r in self._require(ROUNDS_KEY)]
        return calculate_leaderboard(players, rounds)

    # Draft

    def load_draft(self, team_names: Optional[List[str]] = None) -> Draft:
        players = [p.id for p in self.load_players()]
        data = self.store.get(DRAFT_KEY)
        if data is not None:
            return Draft.from_dict(players, data)
        return Draft(players, team_names=team_names)

    def save_draft(self, draft: Draft):
        self.store.set(DRAFT_KEY, draft.to_dict())

    def finalize_draft(self, draft: Draft) -> bool:
        """Lock in the drafted teams and seed the semifinals.

        Returns False while any team slot is still empty.
        """
        self.save_draft(draft)
        if not draft.is_complete():
            return False
        semifinals = seed_semifinals(draft.teams)
        for key in BRACKET_KEYS:
            self.store.remove(key)
        self.store.set(DRAFTED_TEAMS_KEY, [t.to_dict() for t in draft.teams])
        self._save_semifinals(semifinals)
        logger.info('Draft finalized: %s', ', '.join(t.name for t in draft.teams))
        return True

    # Bracket

    def load_semifinals(self) -> List[BracketMatch]:
        data = self.store.get(SEMIFINALS_KEY)
        if data is not None:
            return [BracketMatch.from_dict(m) for m in data]
        teams = [Team.from_dict(t) for t in self._require(DRAFTED_TEAMS_KEY)]
        semifinals = seed_semifinals(teams)
        self._save_semifinals(semifinals)
        return semifinals

    def _save_semifinals(self, semifinals: List[BracketMatch]):
        self.store.set(SEMIFINALS_KEY, [m.to_dict() for m in semifinals])

    def record_semifinal_score(self, match_index: int, score1, score2) -> bool:
        """Score a semifinal. Returns False once the final has been set up."""
        semifinals = self.load_semifinals()
        if not 0 <= match_index < len(semifinals):
            raise ValueError(f"No semifinal at index {match_index}")
        if self.store.get(FINALISTS_KEY) is not None:
            return False
        record_result(semifinals[match_index], score1, score2)
        self._save_semifinals(semifinals)
        return True

    def proceed_to_finals(self) -> bool:
        semifinals = self.load_semifinals()
        if not are_semifinals_complete(semifinals):
            return False
        if self.store.get(FINALISTS_KEY) is not None:
            return True
        teams = finalists(semifinals)
        self.store.set(FINALISTS_KEY, [t.to_dict() for t in teams])
        self.store.set(FINAL_GAMES_KEY, [g.to_dict() for g in Final(*teams).games])
        self.store.remove(CHAMPION_KEY)
        logger.info('Final set: %s vs %s', teams[0].name, teams[1].name)
        return True

    def load_final(self) -> Final:
        team1, team2 = [Team.from_dict(t) for t in self._require(FINALISTS_KEY)]
        games = self.store.get(FINAL_GAMES_KEY)
        if games is None:
            return Final(team1, team2)
        return Final(team1, team2, [Game.from_dict(g) for g in games])

    def record_final_game(self, game_index: int, score1, score2) -> bool:
        """Score a game of the final. Returns False when that game is closed."""
        final = self.load_final()
        if not 0 <= game_index < len(final.games):
            raise ValueError(f"No game at index {game_index}")
        had_champion = final.champion
        if not final.record_game(game_index, score1, score2):
            return False
        self.store.set(FINAL_GAMES_KEY, [g.to_dict() for g in final.games])

        champion = final.champion
        if champion is None:
            self.store.remove(CHAMPION_KEY)
        else:
            self.store.set(CHAMPION_KEY, champion.to_dict())
            if champion != had_champion:
                logger.info('Champion decided: %s', champion.name)
        return True

    def champion(self) -> Optional[Team]:
        data = self.store.get(CHAMPION_KEY)
        return Team.from_dict(data) if data is not None else None

    def phase(self) -> str:
        if self.store.get(PLAYERS_KEY) is None:
            return SETUP
        if self.store.get(SEMIFINALS_KEY) is not None or self.store.get(FINALISTS_KEY) is not None:
            semifinals = self.load_semifinals()
            final = self.load_final() if self.store.get(FINALISTS_KEY) is not None else None
            return bracket_phase(semifinals, final)
        if self.store.get(DRAFT_KEY) is not None:
            return SEEDING_PENDING
        rounds = self.store.get(ROUNDS_KEY)
        if rounds is not None:
            if are_all_rounds_complete([Round.from_dict(r) for r in rounds]):
                return ROUND_ROBIN_COMPLETE
            return ROUND_ROBIN
        return PLAYERS_ENTERED
