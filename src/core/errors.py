"""
Error types raised by the tournament engine.
"""


class TournamentError(Exception):
    """Base class for all tournament engine errors."""


class InvalidPlayerCount(TournamentError):
    """Schedule generation was called with the wrong number of players."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Round robin requires exactly {expected} players, got {actual}")


class InvalidScore(TournamentError):
    """A submitted score is not a usable non-negative integer."""


class IncompletePrerequisite(TournamentError):
    """An action needs inputs that are not complete yet."""


class MissingSessionState(TournamentError):
    """A required key is absent from the session store."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Session has no '{key}' data, start a new tournament")
