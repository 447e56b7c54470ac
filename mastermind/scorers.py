"""
scorers.py

One-step-ahead scoring rules.

A scorer rates a candidate guess from the histogram of feedback outcomes it
would produce against the current consistent set:

    scorer(histogram, group_size) -> float     (lower is better)

`histogram` maps Feedback -> number of consistent keys giving that feedback.
`group_size` is how many candidate guesses share this exact histogram.

Sums over the histogram are taken in ascending feedback order so that float
results, and therefore exact ties between guesses, do not depend on the
iteration order of the consistent set.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Mapping

from mastermind.codes import GameConfig
from mastermind.errors import DegenerateScoreError
from mastermind.feedback import Feedback, correct_feedback

Histogram = Mapping[Feedback, int]
Scorer = Callable[[Histogram, int], float]


def _log_base(x: float, base: int) -> float:
    if base <= 1:
        raise DegenerateScoreError(f"log base {base} of {x} is undefined")
    return math.log(x, base)


def worst_case(histogram: Histogram, group_size: int) -> float:
    """Size of the largest consistent set this guess can leave behind."""
    return max(histogram.values())


def shannon_fano(histogram: Histogram, group_size: int) -> float:
    """Generalized Shannon-Fano cost: sum of n*ln(n) over the outcome buckets."""
    total = 0.0
    for fb in sorted(histogram):
        n = histogram[fb]
        if n > 1:
            total += n * math.log(n)
    return total


def expected_size(histogram: Histogram, group_size: int) -> float:
    """Sum of squared bucket sizes, proportional to the expected remaining set size."""
    return sum(histogram[fb] ** 2 for fb in sorted(histogram))


def branch_maximizing(histogram: Histogram, group_size: int) -> float:
    """log_k(s): fewer levels are needed when the guess opens more branches."""
    k = len(histogram)
    s = sum(histogram.values())
    try:
        return _log_base(s, k)
    except DegenerateScoreError:
        # a single outcome carries no information
        return math.inf


class RefinedBranchMaximizing:
    """
    Branch-maximizing with interchangeable consistent guesses collapsed.

    The `group_size` candidates sharing one histogram stay equally good as long
    as they remain consistent, so they count as a single slot. Whether the
    candidates are consistent is read from the histogram itself: only a
    consistent guess can produce the `correct` feedback. Inconsistent groups
    count as one slot.

    Parameters
    ----------
    correct : Feedback
        Feedback produced by a fully correct guess, e.g. (4, 0) for 4 pegs.
    """

    def __init__(self, correct: Feedback) -> None:
        self.correct = Feedback(*correct)

    @classmethod
    def for_config(cls, config: GameConfig) -> "RefinedBranchMaximizing":
        return cls(correct_feedback(config.length))

    def __call__(self, histogram: Histogram, group_size: int) -> float:
        k = len(histogram)
        s = sum(histogram.values())
        n = group_size if self.correct in histogram else 1
        if n == s:
            return 0.0
        try:
            return _log_base(s - n + 1, k)
        except DegenerateScoreError:
            return math.inf

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RefinedBranchMaximizing) and other.correct == self.correct

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.correct))

    def __repr__(self) -> str:
        return f"RefinedBranchMaximizing(correct={tuple(self.correct)})"


# name -> factory(config) -> scorer
SCORERS: Dict[str, Callable[[GameConfig], Scorer]] = {
    "worst-case": lambda config: worst_case,
    "shannon-fano": lambda config: shannon_fano,
    "expected-size": lambda config: expected_size,
    "branch": lambda config: branch_maximizing,
    "refined-branch": RefinedBranchMaximizing.for_config,
}
