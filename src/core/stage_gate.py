"""
Completion predicates and the round pointer that gate phase advancement.

Blocked advances are no-ops that return False; they never raise.
"""
from typing import List, Optional

from core.models import BracketMatch, Round
from core.scoring import is_complete


def is_round_complete(rnd: Round) -> bool:
    return all(is_complete(m) for m in rnd.matches)


def are_all_rounds_complete(rounds: List[Round]) -> bool:
    return bool(rounds) and all(is_round_complete(r) for r in rounds)


def are_semifinals_complete(semifinals: Optional[List[BracketMatch]]) -> bool:
    return bool(semifinals) and all(is_complete(m) for m in semifinals)


def is_final_complete(final) -> bool:
    return final is not None and final.champion is not None


class RoundNavigator:
    """Tracks the active round of the round robin and the furthest round
    reached so far."""

    def __init__(self, rounds: List[Round], current: int = 0, furthest: Optional[int] = None):
        self.rounds = rounds
        self.current = self._clamp(current)
        self.furthest = max(self.current, self._clamp(furthest if furthest is not None else current))

    def _clamp(self, index: int) -> int:
        return max(0, min(index, len(self.rounds) - 1))

    @property
    def current_round(self) -> Round:
        return self.rounds[self.current]

    @property
    def is_last_round(self) -> bool:
        return self.current == len(self.rounds) - 1

    def can_advance(self) -> bool:
        return not self.is_last_round and is_round_complete(self.current_round)

    def advance(self) -> bool:
        if not self.can_advance():
            return False
        self.current += 1
        self.furthest = max(self.furthest, self.current)
        return True

    def can_go_back(self) -> bool:
        return self.current > 0

    def back(self) -> bool:
        # Navigation only; recorded scores stay as they are.
        if not self.can_go_back():
            return False
        self.current -= 1
        return True

    def can_record_round(self, index: int) -> bool:
        """Rounds past the furthest one reached stay closed to scoring."""
        return 0 <= index <= self.furthest

    def can_submit(self) -> bool:
        return are_all_rounds_complete(self.rounds)
