"""
Social round robin schedule generation for doubles.

Players are shuffled and then dropped into a fixed pairing design, so every
player partners with every other player exactly once while the lived
matchups differ from one tournament to the next.
"""
import random
from collections import Counter
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

from core.errors import InvalidPlayerCount
from core.models import Match, Round

# A design is a tuple of rounds; each round is a tuple of matches; each match
# is a pair of teams; each team is a pair of position indices into the
# shuffled player list.
Design = Tuple[Tuple[Tuple[Tuple[int, int], Tuple[int, int]], ...], ...]

# Whist table for 8 players built from Z7 plus a fixed point (position 0):
# every pair partners exactly once and faces each other exactly twice.
SOCIAL_DESIGNS: Dict[int, Design] = {
    8: (
        (((0, 1), (2, 4)), ((5, 6), (3, 7))),
        (((0, 2), (3, 5)), ((6, 7), (4, 1))),
        (((0, 3), (4, 6)), ((7, 1), (5, 2))),
        (((0, 4), (5, 7)), ((1, 2), (6, 3))),
        (((0, 5), (6, 1)), ((2, 3), (7, 4))),
        (((0, 6), (7, 2)), ((3, 4), (1, 5))),
        (((0, 7), (1, 3)), ((4, 5), (2, 6))),
    ),
}

ROUND_ROBIN_PLAYERS = 8


def validate_design(design: Design, num_players: int) -> bool:
    """Check that a design seats every position once per round and pairs
    every two positions as partners exactly once."""
    partners = Counter()
    for round_matches in design:
        seated = [p for match in round_matches for team in match for p in team]
        if sorted(seated) != list(range(num_players)):
            return False
        for match in round_matches:
            for team in match:
                partners[frozenset(team)] += 1
    expected = {frozenset(pair) for pair in combinations(range(num_players), 2)}
    return set(partners) == expected and all(count == 1 for count in partners.values())


def check_designs(designs: Dict[int, Design]):
    """Raise ValueError for any design that fails validate_design."""
    for num_players, design in designs.items():
        if not validate_design(design, num_players):
            raise ValueError(f"Pairing design for {num_players} players does not pair "
                             f"every two players exactly once")


check_designs(SOCIAL_DESIGNS)


def shuffle_players(players: Sequence[str], rng: Optional[random.Random] = None) -> List[str]:
    """Return a uniformly shuffled copy (Fisher-Yates via random.shuffle)."""
    shuffled = list(players)
    (rng or random).shuffle(shuffled)
    return shuffled


def generate_round_robin(players: Sequence[str], rng: Optional[random.Random] = None) -> List[Round]:
    """
    Build the full round robin schedule.

    Args:
        players: Exactly eight distinct player ids.
        rng: Optional random.Random used for the shuffle.

    Returns:
        Seven Rounds of two unscored Matches each.

    Raises:
        InvalidPlayerCount: If the number of players has no design.
        ValueError: If a player appears more than once.
    """
    design = SOCIAL_DESIGNS.get(len(players))
    if design is None:
        raise InvalidPlayerCount(ROUND_ROBIN_PLAYERS, len(players))
    if len(set(players)) != len(players):
        raise ValueError("Round robin players must be distinct")

    order = shuffle_players(players, rng)
    rounds = []
    for round_matches in design:
        matches = []
        for (a1, a2), (b1, b2) in round_matches:
            matches.append(Match(team1=(order[a1], order[a2]), team2=(order[b1], order[b2])))
        rounds.append(Round(matches))
    return rounds


def partner_counts(rounds: List[Round]) -> Counter:
    """Count how often each unordered pair of players shares a team."""
    counts = Counter()
    for rnd in rounds:
        for match in rnd.matches:
            counts[frozenset(match.team1)] += 1
            counts[frozenset(match.team2)] += 1
    return counts


def opponent_counts(rounds: List[Round]) -> Counter:
    """Count how often each unordered pair of players faces each other."""
    counts = Counter()
    for rnd in rounds:
        for match in rnd.matches:
            for a in match.team1:
                for b in match.team2:
                    counts[frozenset((a, b))] += 1
    return counts
