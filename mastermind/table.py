"""
table.py

Precomputed feedback for every (guess, key) pair of a set of codes.

table[i, j] holds feedback(codes[i], codes[j]) encoded as a single integer
exact * (length + 1) + color_only, so ascending integers follow ascending
Feedback order. Strategies look histograms up here instead of rescoring the
same pairs at every node of the decision tree.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

import numpy as np

from mastermind.errors import InvalidCodeError
from mastermind.feedback import Feedback

# n x n int16 entries; 4096 codes take 32 MB
TABLE_LIMIT = 4096
_CHUNK = 256


class FeedbackTable:
    """Feedback matrix over `codes` (all of one length)."""

    def __init__(self, codes: Sequence) -> None:
        self.codes: List = list(codes)
        if not self.codes:
            raise InvalidCodeError("feedback table needs at least one code")
        self.length = len(self.codes[0])
        if any(len(c) != self.length for c in self.codes):
            raise InvalidCodeError("codes in a feedback table must share one length")
        self.index: Dict = {c: i for i, c in enumerate(self.codes)}
        self.width = (self.length + 1) ** 2
        self.table = self._build()

    def _build(self) -> np.ndarray:
        symbols = sorted({s for c in self.codes for s in c})
        sym_idx = {s: i for i, s in enumerate(symbols)}
        pegs = np.array([[sym_idx[s] for s in c] for c in self.codes], dtype=np.int16)
        counts = np.stack([(pegs == k).sum(axis=1) for k in range(len(symbols))], axis=1)

        n = len(self.codes)
        out = np.empty((n, n), dtype=np.int16)
        for lo in range(0, n, _CHUNK):
            hi = min(lo + _CHUNK, n)
            exact = (pegs[lo:hi, None, :] == pegs[None, :, :]).sum(axis=2)
            total = np.minimum(counts[lo:hi, None, :], counts[None, :, :]).sum(axis=2)
            out[lo:hi] = exact * (self.length + 1) + (total - exact)
        return out

    def covers(self, codes: Iterable) -> bool:
        return all(c in self.index for c in codes)

    def indices(self, codes: Iterable) -> np.ndarray:
        return np.fromiter((self.index[c] for c in codes), dtype=np.intp)

    def decode(self, value: int) -> Feedback:
        return Feedback(*divmod(int(value), self.length + 1))

    def histograms(self, guesses: np.ndarray, keys: np.ndarray) -> np.ndarray:
        """Row i counts, per encoded feedback, the keys that guesses[i] scores them as."""
        sub = self.table[np.ix_(guesses, keys)].astype(np.intp)
        sub += (np.arange(len(guesses), dtype=np.intp) * self.width)[:, None]
        counts = np.bincount(sub.ravel(), minlength=len(guesses) * self.width)
        return counts.reshape(len(guesses), self.width)

    def as_histogram(self, row: np.ndarray) -> Dict[Feedback, int]:
        """Non-zero buckets of one histogram row, in ascending feedback order."""
        return {self.decode(v): int(row[v]) for v in np.flatnonzero(row)}
