"""
strategy.py

Turning a one-step-ahead scorer into a playable strategy.

A strategy maps a non-empty consistent set (the keys still compatible with
every feedback seen so far) to the next guess. The same consistent set always
yields the same guess; the only thing a strategy keeps between calls is a
cache of precomputed feedback.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence, Tuple

import numpy as np

from mastermind.codes import GameConfig, generate_code_space
from mastermind.errors import EmptyDomainError, InvalidCodeError
from mastermind.feedback import Feedback, feedback
from mastermind.partition import count_by, partition_by
from mastermind.scorers import SCORERS, Scorer
from mastermind.table import TABLE_LIMIT, FeedbackTable

Strategy = Callable[[Sequence[str]], str]
HistogramKey = Tuple[Tuple[Feedback, int], ...]


def consistent_set(cons: Iterable[str]) -> Tuple[str, ...]:
    """
    Normalize a consistent set to a duplicate-free tuple, keeping order.

    Raises
    ------
    EmptyDomainError
        If there are no codes.
    InvalidCodeError
        If the codes do not all share one length.
    """
    codes = tuple(dict.fromkeys(cons))
    if not codes:
        raise EmptyDomainError("consistent set is empty")
    length = len(codes[0])
    for c in codes:
        if len(c) != length:
            raise InvalidCodeError(f"code {c!r} has length {len(c)}, expected {length}")
    return codes


def histogram_of(guess: str, cons: Sequence[str]) -> HistogramKey:
    """Feedback histogram of `guess` over `cons`, as a hashable sorted tuple."""
    return tuple(sorted(count_by(lambda key: feedback(guess, key), cons).items()))


def zero_step(cons: Iterable[str]) -> str:
    """The naive strategy: guess the smallest consistent code, no scoring at all."""
    return min(consistent_set(cons))


class GeneralizedStrategy:
    """
    A strategy built from a scorer.

    For a consistent set `cons` every candidate guess is rated by the
    histogram of feedback it would produce over `cons`. Candidates with the
    same histogram are interchangeable, so they are scored once as a group
    (the scorer also receives the group size) and represented by their
    smallest member. The lowest score wins; among tied groups a
    representative inside `cons` is preferred, then the smallest code.

    Histograms come from a FeedbackTable over the pool and the consistent
    codes, built on first use and reused while later consistent sets stay
    inside it. Beyond TABLE_LIMIT codes each pair is scored directly.

    Parameters
    ----------
    candidate_pool : iterable of codes, optional
        Codes that may be guessed. None (or an empty pool) means only codes
        of the current consistent set are guessed.
    scorer : Scorer
        Rates `(histogram, group_size)`; lower is better.
    """

    def __init__(self, candidate_pool: Optional[Iterable[str]], scorer: Scorer) -> None:
        if not callable(scorer):
            raise TypeError("scorer must be callable")
        pool: Tuple[str, ...] = ()
        if candidate_pool is not None:
            pool = tuple(sorted(set(candidate_pool)))
            if pool:
                consistent_set(pool)
        self.candidate_pool: Optional[Tuple[str, ...]] = pool or None
        self._pool_symbols = frozenset(s for c in pool for s in c)
        self.scorer = scorer
        self._table: Optional[FeedbackTable] = None

    def _check_pool(self, cons: Tuple[str, ...]) -> None:
        if self.candidate_pool is None:
            return
        pool = self.candidate_pool
        if len(pool[0]) != len(cons[0]):
            raise InvalidCodeError(
                f"candidate pool codes have length {len(pool[0])} but consistent codes have length {len(cons[0])}"
            )
        foreign = {s for c in cons for s in c} - self._pool_symbols
        if foreign:
            raise InvalidCodeError(
                f"consistent codes use symbols outside the candidate pool's alphabet: {sorted(foreign)}"
            )

    def _table_for(self, cons: Tuple[str, ...]) -> Optional[FeedbackTable]:
        table = self._table
        if table is not None and table.covers(cons):
            return table
        needed = set(cons).union(self.candidate_pool or ())
        if len(needed) > TABLE_LIMIT:
            return None
        self._table = FeedbackTable(sorted(needed))
        return self._table

    def _groups(self, pool: Tuple[str, ...], cons: Tuple[str, ...]):
        """Yield (histogram, group size, smallest member) per histogram group of `pool`."""
        table = self._table_for(cons)
        if table is None:
            for hist, members in partition_by(lambda x: histogram_of(x, cons), pool).items():
                yield dict(hist), len(members), min(members)
            return

        hists = table.histograms(table.indices(pool), table.indices(cons))
        rows, first, sizes = np.unique(hists, axis=0, return_index=True, return_counts=True)
        # pool is sorted, so the first member of a group is its smallest
        for row, i, size in zip(rows, first, sizes):
            yield table.as_histogram(row), int(size), pool[i]

    def __call__(self, cons: Iterable[str]) -> str:
        cons = consistent_set(cons)
        self._check_pool(cons)
        pool = self.candidate_pool or tuple(sorted(cons))

        best_score = None
        tied = []
        for hist, size, rep in self._groups(pool, cons):
            score = self.scorer(hist, size)
            if best_score is None or score < best_score:
                best_score = score
                tied = [rep]
            elif score == best_score:
                tied.append(rep)

        members_of_cons = set(cons)
        preferred = [c for c in tied if c in members_of_cons] or tied
        return min(preferred)

    def __repr__(self) -> str:
        pool = "unrestricted" if self.candidate_pool is None else f"{len(self.candidate_pool)} codes"
        return f"GeneralizedStrategy(pool={pool}, scorer={self.scorer!r})"


def make_strategy(candidate_pool: Optional[Iterable[str]], scorer: Scorer) -> GeneralizedStrategy:
    """Build the strategy for `scorer`, guessing from `candidate_pool` (None: consistent codes only)."""
    return GeneralizedStrategy(candidate_pool, scorer)


STRATEGY_NAMES = ("zero-step",) + tuple(SCORERS)


def strategy_for(name: str, config: GameConfig, *, allow_inconsistent: bool = False) -> Strategy:
    """
    Look up a strategy by rule name.

    With `allow_inconsistent`, the whole code space of `config` may be
    guessed, not only the consistent codes. The zero-step rule ignores it.
    """
    if name == "zero-step":
        return zero_step
    try:
        factory = SCORERS[name]
    except KeyError:
        raise KeyError(f"unknown rule: {name} (choose from {', '.join(STRATEGY_NAMES)})") from None
    pool = generate_code_space(config.alphabet, config.length) if allow_inconsistent else None
    return make_strategy(pool, factory(config))
