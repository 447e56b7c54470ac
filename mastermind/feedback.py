"""
Feedback utilities for Mastermind.

A guess is scored against a key as a pair of peg counts:
- exact      = positions where guess and key carry the same symbol ("black" pegs)
- color_only = further symbol matches in the wrong position ("white" pegs)
"""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Sequence, Tuple

from mastermind.errors import InvalidCodeError


class Feedback(NamedTuple):
    exact: int
    color_only: int


def feedback(guess: Sequence, key: Sequence) -> Feedback:
    """
    Score `guess` against `key`.

    Duplicate handling
    ------------------
    Every key symbol can be matched at most once, so a symbol contributes
    min(count in guess, count in key) matches: the size of the multiset
    intersection. `color_only` is that total minus the exact matches, so
    "AABB" against "ABCC" gives (1, 1), not (1, 3).

    Raises
    ------
    InvalidCodeError
        If the codes differ in length.
    """
    if len(guess) != len(key):
        raise InvalidCodeError(
            f"guess {guess!r} has length {len(guess)} but key {key!r} has length {len(key)}"
        )

    exact = 0
    for g, k in zip(guess, key):
        if g == k:
            exact += 1

    total = 0
    for symbol in set(guess):
        total += min(guess.count(symbol), key.count(symbol))

    return Feedback(exact, total - exact)


def correct_feedback(length: int) -> Feedback:
    """The feedback a fully correct guess of `length` symbols produces."""
    return Feedback(length, 0)


def consistent_with(code: Sequence, guess: Sequence, fb: Tuple[int, int]) -> bool:
    """True iff `code`, taken as the key, would have produced `fb` for `guess`."""
    return feedback(guess, code) == tuple(fb)


def filter_candidates(codes: Iterable, history: List[Tuple[Sequence, Tuple[int, int]]]) -> list:
    """
    Keep only codes that match *all* (guess, feedback) pairs in history.
    Order of `codes` is preserved.
    """
    candidates = []
    for c in codes:
        ok = True
        for guess, fb in history:
            if not consistent_with(c, guess, fb):
                ok = False
                break
        if ok:
            candidates.append(c)
    return candidates


if __name__ == "__main__":
    # Quick sanity checks
    assert feedback("ABCD", "ABCD") == (4, 0)
    assert feedback("AABB", "ABCC") == (1, 1)
    assert feedback("ABAB", "BABA") == (0, 4)
    assert filter_candidates(["ABDC", "DCBA"], [("ABCD", (2, 2))]) == ["ABDC"]
    print("feedback.py sanity checks passed.")
