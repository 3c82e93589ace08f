"""
Score validation and result recording for matches and final games.
"""
from core.errors import InvalidScore
from core.models import TEAM1, TEAM2


def parse_score(value) -> int:
    """Parse a submitted score into a non-negative int.

    Accepts ints and strings of ASCII digits (surrounding whitespace is ignored).
    """
    if isinstance(value, bool):
        raise InvalidScore(f"Score must be a whole number, got {value!r}")
    if isinstance(value, int):
        score = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdecimal():
        try:
            score = int(value.strip())
        except ValueError:
            # Digit strings past the interpreter's int conversion limit
            raise InvalidScore("Score has too many digits") from None
    else:
        raise InvalidScore(f"Score must be a whole number, got {value!r}")
    if score < 0:
        raise InvalidScore(f"Score cannot be negative, got {score}")
    return score


def determine_winner(score1: int, score2: int) -> str:
    """Return TEAM1 or TEAM2 for two already-validated, unequal scores."""
    return TEAM1 if score1 > score2 else TEAM2


def record_result(contest, score1, score2):
    """
    Validate both scores and write them to the contest with the derived winner.

    The contest is left untouched when either score is rejected. Recording
    over an existing result replaces it.

    Raises:
        InvalidScore: For non-numeric, negative or tied scores.
    """
    s1 = parse_score(score1)
    s2 = parse_score(score2)
    if s1 == s2:
        raise InvalidScore(f"Scores cannot be tied ({s1}-{s2})")

    contest.score1 = s1
    contest.score2 = s2
    contest.winner = determine_winner(s1, s2)
    return contest


def clear_result(contest):
    contest.score1 = None
    contest.score2 = None
    contest.winner = None
    return contest


def is_complete(contest) -> bool:
    return contest.score1 is not None and contest.score2 is not None and contest.winner is not None
