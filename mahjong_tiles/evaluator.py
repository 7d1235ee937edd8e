"""
Hand Evaluator

Finds the best reading of a winning hand:

1. Special hands are checked first; a match wins outright and the meld
   search is never run.
2. Otherwise every decomposition is scored and the one with the highest
   total under the rule table is kept. Ties go to the decomposition found
   first.
"""

import logging
from enum import IntEnum
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple, Union

from .hand import Decomposition, Hand
from .rules import RuleTable, FLAT_RULES
from .scoring import Scorer, ScoreTag, ScoringFlags
from .search import enumerate_decompositions, is_complete
from .special import SpecialHand, detect_special_hand

logger = logging.getLogger(__name__)

Combination = Union[Decomposition, SpecialHand]


class EvaluationPhase(IntEnum):
    """Evaluation phases"""
    CHECKING_SPECIAL = 0
    ENUMERATING_STANDARD = 1


@dataclass(frozen=True)
class EvaluationResult:
    """A scored reading of a hand"""
    combination: Combination
    tags: FrozenSet[ScoreTag]
    total: int

    @property
    def is_special(self) -> bool:
        return isinstance(self.combination, SpecialHand)

    def __str__(self) -> str:
        tags = ", ".join(sorted(str(t) for t in self.tags))
        return f"{self.combination} -> {self.total} ({tags})"


class HandEvaluator:
    """
    Evaluates hands under one rule table.

    Attributes:
        rules: Table turning score tags into totals
        scorer: Pattern scorer
    """

    def __init__(self, rules: RuleTable = FLAT_RULES, scorer: Optional[Scorer] = None):
        self.rules = rules
        self.scorer = scorer or Scorer()

    def _special(self, hand: Hand) -> Optional[SpecialHand]:
        # Special hands are fully concealed
        if hand.open_melds:
            return None
        return detect_special_hand(hand.closed)

    def _result(self, combination: Combination, flags: ScoringFlags) -> EvaluationResult:
        tags = self.scorer.score(combination, flags)
        return EvaluationResult(combination, tags, self.rules.total(tags))

    def evaluate(self, hand: Hand, flags: Optional[ScoringFlags] = None) -> Optional[EvaluationResult]:
        """
        Get the best scoring reading of a hand.

        Args:
            hand: Hand to evaluate
            flags: How the hand was won; defaults to flags derived from the hand

        Returns:
            The best result, or None if the hand is not a winning hand
        """
        if flags is None:
            flags = ScoringFlags.for_hand(hand)

        phase = EvaluationPhase.CHECKING_SPECIAL
        special = self._special(hand)
        if special is not None:
            logger.debug(f"{phase.name}: matched {special.kind.name}")
            return self._result(special, flags)

        phase = EvaluationPhase.ENUMERATING_STANDARD
        best: Optional[EvaluationResult] = None
        count = 0
        for decomposition in enumerate_decompositions(hand):
            count += 1
            result = self._result(decomposition, flags)
            logger.debug(f"{phase.name}: {result}")
            # Strictly greater, so ties keep the first one found
            if best is None or result.total > best.total:
                best = result

        if best is None:
            logger.debug(f"{phase.name}: no winning hand in {hand}")
        else:
            logger.debug(f"{phase.name}: best of {count} decompositions scores {best.total}")
        return best

    def rank(self, hand: Hand, flags: Optional[ScoringFlags] = None) -> List[EvaluationResult]:
        """
        Every reading of a hand, best first.

        A special hand is returned on its own. Equal totals keep search order.
        """
        if flags is None:
            flags = ScoringFlags.for_hand(hand)

        special = self._special(hand)
        if special is not None:
            return [self._result(special, flags)]

        results = [self._result(d, flags) for d in enumerate_decompositions(hand)]
        return sorted(results, key=lambda r: r.total, reverse=True)

    def is_winning_hand(self, hand: Hand) -> bool:
        """Whether the hand is complete, without scoring it"""
        return self._special(hand) is not None or is_complete(hand)


def find_highest_scoring_hand(
    hand: Hand,
    rule_table: RuleTable = FLAT_RULES,
    flags: Optional[ScoringFlags] = None,
) -> Optional[Tuple[Combination, int]]:
    """
    Best reading of a hand and its total, or None if the hand does not win.
    """
    result = HandEvaluator(rule_table).evaluate(hand, flags)
    if result is None:
        return None
    return result.combination, result.total
