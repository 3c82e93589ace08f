"""
Player standings for the social round robin.
"""
from typing import List

from core.models import TEAM1, Player, PlayerStats, Round
from core.scoring import is_complete


def calculate_leaderboard(players: List[Player], rounds: List[Round]) -> List[PlayerStats]:
    """
    Fold every completed match into per-player stats and rank the players.

    Stats are joined on player id, so two players sharing a display name
    still get separate rows. Incomplete matches are skipped.

    Ranking: wins (desc), then point differential (desc). Remaining ties
    keep player entry order.
    """
    totals = {p.id: {'wins': 0, 'scored': 0, 'allowed': 0} for p in players}

    for rnd in rounds:
        for match in rnd.matches:
            if not is_complete(match):
                continue

            winners = match.team1 if match.winner == TEAM1 else match.team2
            for player_id in winners:
                totals[player_id]['wins'] += 1

            for player_id in match.team1:
                totals[player_id]['scored'] += match.score1
                totals[player_id]['allowed'] += match.score2
            for player_id in match.team2:
                totals[player_id]['scored'] += match.score2
                totals[player_id]['allowed'] += match.score1

    stats = [
        PlayerStats(id=p.id, name=p.name, wins=totals[p.id]['wins'],
                    points_scored=totals[p.id]['scored'],
                    points_allowed=totals[p.id]['allowed'])
        for p in players
    ]
    return sorted(stats, key=lambda s: (-s.wins, -s.point_differential))
